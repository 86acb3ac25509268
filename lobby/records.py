from enum import Enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Optional
import uuid

# Client-supplied ids are indexed columns; longer values are rejected at the route
MAX_ID_LENGTH = 100


class JoinStatus(str, Enum):
    REGISTERED = "Registered"


class DepositStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def values(cls) -> list:
        return [s.value for s in cls]


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (how the database stores it)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat(timespec='milliseconds') + "Z"


def new_join_id() -> str:
    return f"j_{uuid.uuid4().hex[:12]}"


def new_deposit_id() -> str:
    return f"d_{uuid.uuid4().hex[:12]}"


@dataclass
class JoinRecord:
    KEY: ClassVar[str] = "id"

    id: str
    tournament_id: str
    bgmi_id: str
    tournament_name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    entry_fee: Any = None
    prize_pool: Any = None
    player_name: Optional[str] = None
    status: str = JoinStatus.REGISTERED.value
    joined_at: datetime = None
    room_id: Optional[str] = None
    room_password: Optional[str] = None

    def __post_init__(self):
        if self.joined_at is None:
            self.joined_at = utcnow()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tournamentId": self.tournament_id,
            "tournamentName": self.tournament_name,
            "date": self.date,
            "time": self.time,
            "entryFee": self.entry_fee,
            "prizePool": self.prize_pool,
            "playerName": self.player_name,
            "bgmiId": self.bgmi_id,
            "status": self.status,
            "joinedAt": isoformat(self.joined_at),
            "roomId": self.room_id,
            "roomPassword": self.room_password,
        }


@dataclass
class RoomRecord:
    KEY: ClassVar[str] = "tournament_id"

    tournament_id: str
    room_id: str = ""
    room_password: str = ""
    updated_at: datetime = None

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = utcnow()

    def to_dict(self) -> dict:
        return {
            "tournamentId": self.tournament_id,
            "roomId": self.room_id,
            "roomPassword": self.room_password,
            "updatedAt": isoformat(self.updated_at),
        }


@dataclass
class DepositRecord:
    KEY: ClassVar[str] = "deposit_id"

    deposit_id: str
    profile_id: str
    amount: float
    utr: str
    bgmi_display_id: Optional[str] = None
    username: str = "Unknown"
    email: str = "No email provided"
    status: str = DepositStatus.PENDING.value
    created_at: datetime = None
    timestamp: Optional[str] = None
    approved_at: Optional[datetime] = None

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = utcnow()
        if self.timestamp is None:
            self.timestamp = isoformat(self.created_at)

    def to_dict(self) -> dict:
        return {
            "depositId": self.deposit_id,
            "profileId": self.profile_id,
            "bgmiDisplayId": self.bgmi_display_id,
            "username": self.username,
            "email": self.email,
            "amount": self.amount,
            "utr": self.utr,
            "status": self.status,
            "createdAt": isoformat(self.created_at),
            "timestamp": self.timestamp,
            "approvedAt": isoformat(self.approved_at),
        }
