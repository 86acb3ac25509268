import hmac
import logging
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = 'X-Admin-Key'


class AdminGate:
    """
    Decides whether a request may use admin routes.
    With no key configured every request passes.
    """

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or None
        if self.api_key is None:
            logger.warning("ADMIN_API_KEY is not set; admin routes are open")

    @property
    def is_open(self) -> bool:
        return self.api_key is None

    def is_authorized(self, req) -> bool:
        if self.is_open:
            return True
        supplied = req.headers.get(ADMIN_KEY_HEADER, '')
        return hmac.compare_digest(supplied.encode(), self.api_key.encode())


def admin_required(view):
    """Reject the request with 401 unless the app's admin gate lets it through."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_app.admin_gate.is_authorized(request):
            logger.warning(f"Rejected admin request to {request.path}")
            return jsonify({'success': False, 'message': 'Admin authorization required'}), 401
        return view(*args, **kwargs)
    return wrapped
