import logging
from typing import Optional, Tuple

from .records import RoomRecord, utcnow
from .stores import RecordStore, StoreError

logger = logging.getLogger(__name__)


class RoomDirectory:
    """
    Room credentials per tournament.
    Setting a room also copies the credentials onto every join record
    already registered for that tournament.
    """

    def __init__(self, rooms: RecordStore, joins: RecordStore):
        self.rooms = rooms
        self.joins = joins

    def get_room(self, tournament_id: str) -> Optional[RoomRecord]:
        """Get room credentials for a tournament, if any were set."""
        return self.rooms.get(tournament_id)

    def set_room(
        self,
        tournament_id: str,
        room_id: str = None,
        room_password: str = None
    ) -> Tuple[RoomRecord, int]:
        """Upsert the room and back-fill existing joins. Returns (room, joins_updated)."""
        room = RoomRecord(
            tournament_id=tournament_id,
            room_id=str(room_id or ""),
            room_password=str(room_password or ""),
            updated_at=utcnow()
        )
        self.rooms.upsert(room)
        logger.info(f"Room set for tournament {tournament_id}")

        # Directory write already succeeded; a failed back-fill is only logged
        try:
            updated = self.joins.update_where(
                {'room_id': room.room_id, 'room_password': room.room_password},
                tournament_id=tournament_id
            )
        except StoreError as e:
            logger.error(f"Room back-fill failed for tournament {tournament_id}: {e}")
            return room, 0

        logger.info(f"Back-filled room onto {updated} join(s) for tournament {tournament_id}")
        return room, updated

    def resolve(self, join) -> Tuple[str, str]:
        """Room id/password for a join: stored on the record, then the directory, then empty."""
        room_id = join.room_id
        room_password = join.room_password

        if not room_id or not room_password:
            room = self.get_room(join.tournament_id)
            if room:
                room_id = room_id or room.room_id
                room_password = room_password or room.room_password

        return room_id or "", room_password or ""
