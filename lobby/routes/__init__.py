from flask import request

from lobby.records import MAX_ID_LENGTH


def json_body() -> dict:
    """Request body as a JSON object; missing, malformed or non-object bodies read as {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def id_too_long(*values) -> bool:
    return any(len(str(v)) > MAX_ID_LENGTH for v in values)
