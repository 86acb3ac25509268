import logging
import math
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from .records import DepositRecord, DepositStatus, new_deposit_id, utcnow
from .stores import RecordStore

logger = logging.getLogger(__name__)


def format_local(value: Optional[datetime], tz: ZoneInfo) -> Optional[str]:
    """Render a stored UTC time like '19 Oct 2026, 06:51 pm' in the given zone."""
    if value is None:
        return None
    local = value.replace(tzinfo=timezone.utc).astimezone(tz)
    return f"{local.day} {local.strftime('%b %Y, %I:%M')} {local.strftime('%p').lower()}"


def parse_amount(value) -> Optional[float]:
    """Positive amount from a JSON number or numeric string, else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def _text(value) -> Optional[str]:
    """Client text as str so both backends return the same type; empty is None."""
    if value is None or value == "":
        return None
    return str(value)


class DepositLedger:
    """
    Payment claims submitted by players and reviewed by admins.
    Status is one of pending/approved/rejected; approved_at is set only
    while a deposit is approved.
    """

    def __init__(self, deposits: RecordStore, display_timezone: str = 'Asia/Kolkata'):
        self.deposits = deposits
        self.tz = ZoneInfo(display_timezone)

    def to_dict(self, deposit: DepositRecord) -> dict:
        data = deposit.to_dict()
        data['createdAtIndian'] = format_local(deposit.created_at, self.tz)
        data['approvedAtIndian'] = format_local(deposit.approved_at, self.tz)
        return data

    def submit(
        self,
        profile_id,
        amount: float,
        utr,
        username: str = None,
        email: str = None,
        bgmi_display_id: str = None,
        timestamp: str = None
    ) -> DepositRecord:
        """Record a new pending deposit claim."""
        deposit = DepositRecord(
            deposit_id=new_deposit_id(),
            profile_id=str(profile_id),
            amount=amount,
            utr=str(utr),
            bgmi_display_id=_text(bgmi_display_id),
            username=_text(username) or "Unknown",
            email=_text(email) or "No email provided",
            status=DepositStatus.PENDING.value,
            created_at=utcnow(),
            timestamp=_text(timestamp),
            approved_at=None
        )
        self.deposits.insert(deposit)

        logger.info(f"New deposit {deposit.deposit_id}: profile={deposit.profile_id} "
                    f"amount={deposit.amount} utr={deposit.utr}")
        return deposit

    def update_status(self, deposit_id: str, status: str) -> Tuple[bool, str, Optional[DepositRecord]]:
        """Change a deposit's status; approving stamps approved_at, anything else clears it."""
        if status not in DepositStatus.values():
            return False, f"Invalid status '{status}'", None

        approved_at = utcnow() if status == DepositStatus.APPROVED.value else None
        deposit = self.deposits.update(deposit_id, status=status, approved_at=approved_at)

        if deposit is None:
            return False, "Deposit not found", None

        logger.info(f"Deposit {deposit_id} updated to {status}")
        return True, f"Deposit {status}", deposit

    def get(self, deposit_id: str) -> Optional[DepositRecord]:
        return self.deposits.get(deposit_id)

    def list_deposits(self, profile_id: str = None) -> List[DepositRecord]:
        """All deposits, newest first, optionally for one profile."""
        filters = {'profile_id': str(profile_id)} if profile_id else {}
        return self.deposits.list(order_by='created_at', descending=True, **filters)

    def delete(self, deposit_id: str) -> Tuple[bool, str]:
        """Delete a deposit. Existence is not checked."""
        if self.deposits.delete(deposit_id):
            logger.info(f"Deleted deposit {deposit_id}")
        return True, "Deposit deleted"
