from flask import Blueprint, current_app, jsonify, request

from lobby.auth import admin_required
from lobby.routes import id_too_long, json_body

bp = Blueprint('joins', __name__)


def get_ledger():
    return current_app.joins


def get_rooms():
    return current_app.rooms


# --- Player routes ---

@bp.route('/api/join-tournament', methods=['POST'])
def join_tournament():
    """Register a player for a tournament."""
    data = json_body()
    tournament_id = data.get('tournamentId')
    bgmi_id = data.get('bgmiId')

    if not tournament_id or not bgmi_id:
        return jsonify({'success': False, 'message': 'Invalid data'}), 400

    if id_too_long(tournament_id, bgmi_id):
        return jsonify({'success': False, 'message': 'tournamentId and bgmiId must be at most 100 characters'}), 400

    success, message, join = get_ledger().join(
        tournament_id=str(tournament_id),
        bgmi_id=str(bgmi_id),
        player_name=data.get('playerName'),
        tournament_name=data.get('tournamentName'),
        date=data.get('date'),
        time=data.get('time'),
        entry_fee=data.get('entryFee'),
        prize_pool=data.get('prizePool')
    )

    if not success:
        return jsonify({'success': False, 'message': message})

    return jsonify({'success': True, 'message': message, 'join': join.to_dict()})


@bp.route('/api/check-join/<tournament_id>')
def check_join(tournament_id):
    bgmi_id = request.args.get('bgmiId')
    return jsonify({'joined': get_ledger().is_joined(tournament_id, bgmi_id)})


@bp.route('/api/tournament-slots-count/<tournament_id>')
def slots_count(tournament_id):
    registered, max_slots = get_ledger().slot_count(tournament_id)
    return jsonify({'registered': registered, 'max': max_slots})


@bp.route('/api/my-matches')
def my_matches():
    """A player's joins with room credentials."""
    bgmi_id = request.args.get('bgmiId')
    return jsonify({'matches': get_ledger().my_matches(bgmi_id)})


# --- Admin routes ---

@bp.route('/api/admin/joins')
@admin_required
def admin_joins():
    return jsonify({'tournamentJoins': get_ledger().list_all()})


@bp.route('/api/admin/set-room-by-tournament', methods=['PUT'])
@admin_required
def set_room():
    """Set room id/password for a tournament."""
    data = json_body()
    tournament_id = data.get('tournamentId')

    if not tournament_id:
        return jsonify({'success': False, 'message': 'tournamentId is required'}), 400

    if id_too_long(tournament_id):
        return jsonify({'success': False, 'message': 'tournamentId must be at most 100 characters'}), 400

    room, updated = get_rooms().set_room(
        str(tournament_id),
        room_id=data.get('roomId'),
        room_password=data.get('roomPassword')
    )

    return jsonify({'success': True, 'room': room.to_dict(), 'joinsUpdated': updated})


@bp.route('/api/admin/tournament/<join_id>', methods=['DELETE'])
@admin_required
def delete_join(join_id):
    success, message = get_ledger().delete(join_id)
    return jsonify({'success': success, 'message': message})
