"""
Pytest configuration and fixtures for lobby service tests.
"""
import os
import sys
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

# Set testing environment before importing app
os.environ['FLASK_ENV'] = 'testing'

from lobby.app import create_app
from lobby.models import db
from lobby.records import DepositRecord, JoinRecord, RoomRecord
from lobby.stores import MemoryStore
from lobby.room_directory import RoomDirectory
from lobby.join_ledger import TournamentJoinLedger
from lobby.deposit_ledger import DepositLedger


ADMIN_KEY = 'test-admin-key'


@pytest.fixture(scope='session')
def app():
    """Create application for testing (SQL backend on in-memory SQLite)."""
    app = create_app('testing')
    
    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client with empty tables."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create database session for testing."""
    with app.app_context():
        # Clear all tables before each test
        db.session.remove()
        
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        
        yield db.session
        
        db.session.rollback()


@pytest.fixture(scope='function')
def memory_app():
    """Fresh application on the memory backend."""
    return create_app('testing', {'STORE_BACKEND': 'memory'})


@pytest.fixture(scope='function')
def memory_client(memory_app):
    return memory_app.test_client()


@pytest.fixture
def admin_headers():
    return {'X-Admin-Key': ADMIN_KEY}


@pytest.fixture
def join_store():
    return MemoryStore(JoinRecord, unique_together=('tournament_id', 'bgmi_id'))


@pytest.fixture
def room_store():
    return MemoryStore(RoomRecord)


@pytest.fixture
def deposit_store():
    return MemoryStore(DepositRecord)


@pytest.fixture
def rooms(room_store, join_store):
    """RoomDirectory on memory stores."""
    return RoomDirectory(room_store, join_store)


@pytest.fixture
def ledger(join_store, rooms):
    """TournamentJoinLedger on memory stores."""
    return TournamentJoinLedger(join_store, rooms, capacity=2)


@pytest.fixture
def deposits(deposit_store):
    """DepositLedger on a memory store."""
    return DepositLedger(deposit_store, display_timezone='Asia/Kolkata')


@pytest.fixture
def join_payload():
    """Build a join request body."""
    def build(tournament_id='t1', bgmi_id='5123456789', **extra):
        payload = {
            'tournamentId': tournament_id,
            'tournamentName': 'Erangel Squad Cup',
            'date': '2026-10-20',
            'time': '18:00',
            'entryFee': 50,
            'prizePool': 500,
            'playerName': 'ShadowX',
            'bgmiId': bgmi_id,
        }
        payload.update(extra)
        return payload
    return build
