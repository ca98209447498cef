"""create player table with per-game score columns

Revision ID: 4c7a9e21b3d0
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c7a9e21b3d0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'player' in set(insp.get_table_names()):
        return

    op.create_table(
        'player',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('mobile_number', sa.String(length=10), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('technical_quiz_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tower_of_hanoi_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('word_scramble_score', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_player_created_at', 'player', ['created_at'])


def downgrade():
    op.drop_index('ix_player_created_at', table_name='player')
    op.drop_table('player')
