"""Create tournament join, room and deposit tables

Revision ID: a1c4e9d2b7f3
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = 'a1c4e9d2b7f3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'tournament_joins',
        sa.Column('id', sa.String(length=50), nullable=False),
        sa.Column('tournament_id', sa.String(length=100), nullable=False),
        sa.Column('bgmi_id', sa.String(length=100), nullable=False),
        sa.Column('tournament_name', sa.Text(), nullable=True),
        sa.Column('date', sa.Text(), nullable=True),
        sa.Column('time', sa.Text(), nullable=True),
        sa.Column('entry_fee', sa.JSON(), nullable=True),
        sa.Column('prize_pool', sa.JSON(), nullable=True),
        sa.Column('player_name', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('joined_at', sa.DateTime(), nullable=True),
        sa.Column('room_id', sa.Text(), nullable=True),
        sa.Column('room_password', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tournament_id', 'bgmi_id', name='unique_player_per_tournament'),
    )
    op.create_index('ix_tournament_joins_tournament_id', 'tournament_joins', ['tournament_id'])
    op.create_index('ix_tournament_joins_bgmi_id', 'tournament_joins', ['bgmi_id'])

    op.create_table(
        'tournament_rooms',
        sa.Column('tournament_id', sa.String(length=100), nullable=False),
        sa.Column('room_id', sa.Text(), nullable=False),
        sa.Column('room_password', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('tournament_id'),
    )

    op.create_table(
        'deposits',
        sa.Column('deposit_id', sa.String(length=50), nullable=False),
        sa.Column('profile_id', sa.String(length=100), nullable=False),
        sa.Column('bgmi_display_id', sa.Text(), nullable=True),
        sa.Column('username', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('utr', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('timestamp', sa.Text(), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('deposit_id'),
    )
    op.create_index('ix_deposits_profile_id', 'deposits', ['profile_id'])
    op.create_index('ix_deposits_created_at', 'deposits', ['created_at'])


def downgrade():
    op.drop_index('ix_deposits_created_at', table_name='deposits')
    op.drop_index('ix_deposits_profile_id', table_name='deposits')
    op.drop_table('deposits')
    op.drop_table('tournament_rooms')
    op.drop_index('ix_tournament_joins_bgmi_id', table_name='tournament_joins')
    op.drop_index('ix_tournament_joins_tournament_id', table_name='tournament_joins')
    op.drop_table('tournament_joins')
