"""
Unit tests for RoomDirectory class.
Tests: set_room, get_room, resolve, back-fill onto existing joins
"""
import logging

from lobby.records import JoinRecord
from lobby.stores import StoreError


def add_join(join_store, join_id, tournament_id, bgmi_id, **extra):
    join_store.insert(JoinRecord(id=join_id, tournament_id=tournament_id, bgmi_id=bgmi_id, **extra))


class TestSetRoom:
    """Tests for set_room method."""

    def test_set_room(self, rooms):
        room, _ = rooms.set_room('t1', 'R100', 'secret')

        assert room.room_id == 'R100'
        assert rooms.get_room('t1').room_password == 'secret'

    def test_missing_values_stored_empty(self, rooms):
        """Absent room id/password are stored as empty strings."""
        rooms.set_room('t1')

        room = rooms.get_room('t1')
        assert room.room_id == ''
        assert room.room_password == ''

    def test_overwrite(self, rooms, room_store):
        rooms.set_room('t1', 'R100', 'secret')
        rooms.set_room('t1', 'R200', None)

        room = rooms.get_room('t1')
        assert room.room_id == 'R200'
        assert room.room_password == ''
        assert room_store.count() == 1

    def test_get_unknown_room(self, rooms):
        assert rooms.get_room('nope') is None


class TestBackfill:
    """Room credentials are copied onto existing joins."""

    def test_backfills_existing_joins(self, rooms, join_store):
        add_join(join_store, 'j1', 't1', 'p1')
        add_join(join_store, 'j2', 't1', 'p2')
        add_join(join_store, 'j3', 't2', 'p1')

        _, updated = rooms.set_room('t1', 'R100', 'secret')

        assert updated == 2
        assert join_store.get('j1').room_id == 'R100'
        assert join_store.get('j2').room_password == 'secret'
        assert join_store.get('j3').room_id is None

    def test_backfill_failure_is_logged_not_raised(self, rooms, join_store, mocker, caplog):
        """Directory write stands even when the back-fill fails."""
        add_join(join_store, 'j1', 't1', 'p1')
        mocker.patch.object(join_store, 'update_where', side_effect=StoreError('timeout'))

        with caplog.at_level(logging.ERROR, logger='lobby.room_directory'):
            room, updated = rooms.set_room('t1', 'R100', 'secret')

        assert updated == 0
        assert rooms.get_room('t1').room_id == 'R100'
        assert 'back-fill failed' in caplog.text


class TestResolve:
    """Tests for resolve method."""

    def test_record_values_win(self, rooms, join_store):
        """Values stored on the join take precedence over the directory."""
        rooms.set_room('t1', 'R100', 'secret')
        join = JoinRecord(id='j1', tournament_id='t1', bgmi_id='p1',
                          room_id='OLD', room_password='old-pass')

        assert rooms.resolve(join) == ('OLD', 'old-pass')

    def test_falls_back_to_directory(self, rooms):
        rooms.set_room('t1', 'R100', 'secret')
        join = JoinRecord(id='j1', tournament_id='t1', bgmi_id='p1')

        assert rooms.resolve(join) == ('R100', 'secret')

    def test_falls_back_to_empty(self, rooms):
        join = JoinRecord(id='j1', tournament_id='t1', bgmi_id='p1')

        assert rooms.resolve(join) == ('', '')
