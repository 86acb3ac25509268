import logging

from flask import Blueprint, current_app, jsonify, request

from lobby.auth import admin_required
from lobby.deposit_ledger import parse_amount
from lobby.records import DepositStatus
from lobby.routes import id_too_long, json_body

logger = logging.getLogger(__name__)

bp = Blueprint('deposits', __name__)


def get_ledger():
    return current_app.deposits


@bp.route('/api/deposit', methods=['POST'])
def submit_deposit():
    """Submit a deposit claim for admin review."""
    data = json_body()
    logger.debug(f"Deposit request: {data}")

    profile_id = data.get('profileId')
    utr = data.get('utr')
    amount = data.get('amount')

    if not profile_id or not amount or not utr:
        return jsonify({
            'success': False,
            'message': 'profileId, amount, and utr are required'
        }), 400

    if id_too_long(profile_id):
        return jsonify({'success': False, 'message': 'profileId must be at most 100 characters'}), 400

    parsed_amount = parse_amount(amount)
    if parsed_amount is None:
        return jsonify({'success': False, 'message': 'amount must be a positive number'}), 400

    ledger = get_ledger()
    deposit = ledger.submit(
        profile_id=profile_id,
        amount=parsed_amount,
        utr=utr,
        username=data.get('username'),
        email=data.get('email'),
        bgmi_display_id=data.get('bgmiDisplayId'),
        timestamp=data.get('timestamp')
    )

    return jsonify({'success': True, 'deposit': ledger.to_dict(deposit)})


@bp.route('/api/deposits')
def list_deposits():
    """Deposits for the profile given in ?profileId=, or every deposit without it."""
    profile_id = request.args.get('profileId')
    if not profile_id:
        logger.warning("GET /api/deposits called without profileId; returning all deposits")

    ledger = get_ledger()
    return jsonify({'deposits': [ledger.to_dict(d) for d in ledger.list_deposits(profile_id)]})


@bp.route('/api/admin/deposits')
@admin_required
def admin_deposits():
    ledger = get_ledger()
    deposits = ledger.list_deposits()
    logger.debug(f"Total deposits: {len(deposits)}")
    return jsonify({'deposits': [ledger.to_dict(d) for d in deposits]})


@bp.route('/api/admin/deposit-status', methods=['PUT'])
@bp.route('/api/admin/deposit-status/<deposit_id>', methods=['PUT'])
@admin_required
def update_deposit_status(deposit_id=None):
    """Approve, reject or reset a deposit."""
    data = json_body()
    deposit_id = deposit_id or data.get('depositId')
    status = data.get('status')

    if not status:
        return jsonify({'success': False, 'message': 'status is required'}), 400

    if status not in DepositStatus.values():
        return jsonify({
            'success': False,
            'message': f"status must be one of: {', '.join(DepositStatus.values())}"
        }), 400

    ledger = get_ledger()
    success, message, deposit = ledger.update_status(str(deposit_id or ''), status)

    if not success:
        return jsonify({'success': False, 'message': message}), 404

    return jsonify({'success': True, 'message': message, 'deposit': ledger.to_dict(deposit)})


@bp.route('/api/admin/deposit/<deposit_id>', methods=['DELETE'])
@admin_required
def delete_deposit(deposit_id):
    success, message = get_ledger().delete(deposit_id)
    return jsonify({'success': success, 'message': message})
