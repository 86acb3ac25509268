from flask_sqlalchemy import SQLAlchemy

from .records import MAX_ID_LENGTH, utcnow

db = SQLAlchemy()


class TournamentJoin(db.Model):
    __tablename__ = 'tournament_joins'

    id = db.Column(db.String(50), primary_key=True)
    tournament_id = db.Column(db.String(MAX_ID_LENGTH), nullable=False, index=True)
    bgmi_id = db.Column(db.String(MAX_ID_LENGTH), nullable=False, index=True)
    tournament_name = db.Column(db.Text, nullable=True)
    date = db.Column(db.Text, nullable=True)
    time = db.Column(db.Text, nullable=True)
    entry_fee = db.Column(db.JSON, nullable=True)  # Number or text, returned as sent
    prize_pool = db.Column(db.JSON, nullable=True)
    player_name = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='Registered')
    joined_at = db.Column(db.DateTime, default=utcnow)

    # Back-filled from the room directory when an admin sets the room
    room_id = db.Column(db.Text, nullable=True)
    room_password = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.UniqueConstraint('tournament_id', 'bgmi_id', name='unique_player_per_tournament'),
    )


class TournamentRoom(db.Model):
    __tablename__ = 'tournament_rooms'

    tournament_id = db.Column(db.String(MAX_ID_LENGTH), primary_key=True)
    room_id = db.Column(db.Text, nullable=False, default='')
    room_password = db.Column(db.Text, nullable=False, default='')
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Deposit(db.Model):
    __tablename__ = 'deposits'

    deposit_id = db.Column(db.String(50), primary_key=True)
    profile_id = db.Column(db.String(MAX_ID_LENGTH), nullable=False, index=True)
    bgmi_display_id = db.Column(db.Text, nullable=True)
    username = db.Column(db.Text, nullable=False, default='Unknown')
    email = db.Column(db.Text, nullable=False, default='No email provided')
    amount = db.Column(db.Float, nullable=False)
    utr = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(20), nullable=False, default='pending')  # pending, approved, rejected
    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    timestamp = db.Column(db.Text, nullable=True)  # As reported by the client
    approved_at = db.Column(db.DateTime, nullable=True)
