import logging
import threading
from typing import List, Optional, Tuple

from .records import JoinRecord, JoinStatus, new_join_id, utcnow
from .room_directory import RoomDirectory
from .stores import DuplicateRecordError, RecordStore

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 2
LOCK_STRIPES = 64


class TournamentJoinLedger:
    """
    Manages tournament registration:
    - One join per (tournament, player)
    - Fixed number of slots per tournament
    - Per-player and admin listings with room credentials

    The duplicate check, slot count and insert run under the tournament's
    lock (one of a fixed pool of striped locks), so capacity holds for every
    request served by this process.
    Separate worker processes still race on capacity; only the
    (tournament, player) uniqueness is enforced by the database.
    """

    def __init__(
        self,
        joins: RecordStore,
        rooms: RoomDirectory,
        capacity: int = DEFAULT_CAPACITY
    ):
        self.joins = joins
        self.rooms = rooms
        self.capacity = capacity
        self._locks = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _tournament_lock(self, tournament_id: str) -> threading.Lock:
        # Fixed pool: tournaments sharing a stripe just serialize together
        return self._locks[hash(tournament_id) % len(self._locks)]

    def join(
        self,
        tournament_id: str,
        bgmi_id: str,
        player_name: str = None,
        tournament_name: str = None,
        date: str = None,
        time: str = None,
        entry_fee=None,
        prize_pool=None
    ) -> Tuple[bool, str, Optional[JoinRecord]]:
        """Register a player for a tournament."""
        with self._tournament_lock(tournament_id):
            if self.is_joined(tournament_id, bgmi_id):
                return False, "Already joined", None

            if self.joins.count(tournament_id=tournament_id) >= self.capacity:
                return False, "Slots full", None

            record = JoinRecord(
                id=new_join_id(),
                tournament_id=tournament_id,
                bgmi_id=bgmi_id,
                tournament_name=tournament_name,
                date=date,
                time=time,
                entry_fee=entry_fee,
                prize_pool=prize_pool,
                player_name=player_name,
                status=JoinStatus.REGISTERED.value,
                joined_at=utcnow()
            )

            try:
                self.joins.insert(record)
            except DuplicateRecordError:
                # Another process registered the same player first
                return False, "Already joined", None

        logger.info(f"Player {bgmi_id} joined tournament {tournament_id}")
        return True, "Joined successfully", record

    def is_joined(self, tournament_id: str, bgmi_id: str) -> bool:
        """Check whether a player already holds a slot in a tournament."""
        if not bgmi_id:
            return False
        return self.joins.count(tournament_id=tournament_id, bgmi_id=bgmi_id) > 0

    def slot_count(self, tournament_id: str) -> Tuple[int, int]:
        """Return (registered, max) for a tournament."""
        return self.joins.count(tournament_id=tournament_id), self.capacity

    def list_all(self) -> List[dict]:
        """Admin listing. Room credentials are left out; admins set them per tournament."""
        listing = []
        for join in self.joins.list(order_by='joined_at'):
            data = join.to_dict()
            data.pop('roomId')
            data.pop('roomPassword')
            listing.append(data)
        return listing

    def my_matches(self, bgmi_id: str) -> List[dict]:
        """Player listing with room credentials resolved."""
        if not bgmi_id:
            return []

        matches = []
        for join in self.joins.list(order_by='joined_at', bgmi_id=bgmi_id):
            data = join.to_dict()
            data['roomId'], data['roomPassword'] = self.rooms.resolve(join)
            matches.append(data)
        return matches

    def delete(self, join_id: str) -> Tuple[bool, str]:
        """Delete a join. Unknown ids are not an error."""
        if self.joins.delete(join_id):
            logger.info(f"Deleted join {join_id}")
            return True, "Join deleted"
        logger.info(f"Delete requested for unknown join {join_id}")
        return True, "Join not found"
