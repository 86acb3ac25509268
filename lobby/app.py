"""
Lobby Service - HTTP gateway

Responsibilities:
- Wire stores, ledgers and the room directory onto the Flask app
- Register player, admin and deposit routes
- Allow cross-origin browser clients (Flask-CORS)
- Map backend failures to 500 responses
- Health check with record counters
"""
import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate

from .auth import AdminGate
from .config import config
from .deposit_ledger import DepositLedger
from .join_ledger import TournamentJoinLedger
from .models import db, Deposit, TournamentJoin, TournamentRoom
from .records import DepositRecord, JoinRecord, RoomRecord
from .room_directory import RoomDirectory
from .stores import MemoryStore, SqlStore, StoreError

logger = logging.getLogger(__name__)

migrate = Migrate()


def build_stores(backend: str) -> dict:
    """Create the join, room and deposit stores for a backend name."""
    if backend == 'memory':
        return {
            'joins': MemoryStore(JoinRecord, unique_together=('tournament_id', 'bgmi_id')),
            'rooms': MemoryStore(RoomRecord),
            'deposits': MemoryStore(DepositRecord),
        }
    if backend == 'sql':
        return {
            'joins': SqlStore(TournamentJoin, JoinRecord),
            'rooms': SqlStore(TournamentRoom, RoomRecord),
            'deposits': SqlStore(Deposit, DepositRecord),
        }
    raise ValueError(f"Unknown store backend: {backend}")


def create_app(config_name: str = None, overrides: dict = None) -> Flask:
    """Application factory for the lobby service."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app, origins=app.config['CORS_ORIGINS'])

    backend = app.config['STORE_BACKEND']
    stores = build_stores(backend)

    if backend == 'sql' and app.config['AUTO_CREATE_TABLES']:
        with app.app_context():
            db.create_all()

    # Store services on app for access in routes
    app.stores = stores
    app.rooms = RoomDirectory(stores['rooms'], stores['joins'])
    app.joins = TournamentJoinLedger(
        stores['joins'],
        app.rooms,
        capacity=app.config['SLOTS_PER_TOURNAMENT']
    )
    app.deposits = DepositLedger(stores['deposits'], app.config['DISPLAY_TIMEZONE'])
    app.admin_gate = AdminGate(app.config.get('ADMIN_API_KEY'))

    from .routes import joins, deposits
    app.register_blueprint(joins.bp)
    app.register_blueprint(deposits.bp)

    register_error_handlers(app)
    register_health_routes(app)

    logger.info(f"Lobby service configured ({config_name}, {backend} backend)")
    return app


def register_error_handlers(app: Flask):

    @app.errorhandler(StoreError)
    def handle_store_error(e):
        logger.error(f"Backend failure: {e}")
        return jsonify({'success': False, 'message': str(e)}), 500


def register_health_routes(app: Flask):

    @app.route('/health')
    def health_check():
        """Liveness plus record counters."""
        backend = app.config['STORE_BACKEND']

        if backend == 'sql':
            try:
                db.session.execute(db.text('SELECT 1'))
                db_ok = True
            except Exception as e:
                logger.error(f"Database health check failed: {e}")
                db.session.rollback()
                db_ok = False
        else:
            db_ok = True

        if not db_ok:
            return jsonify({
                'status': 'unhealthy',
                'backend': backend,
                'database': 'disconnected'
            }), 503

        return jsonify({
            'status': 'healthy',
            'backend': backend,
            'database': 'connected' if backend == 'sql' else 'not used',
            'counters': {name: store.count() for name, store in app.stores.items()}
        })
