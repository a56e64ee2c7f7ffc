"""create players, vs_weeks, vs_stages and vs_stage_stats

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-17 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    existing_tables = set(sa.inspect(bind).get_table_names())

    if 'players' not in existing_tables:
        op.create_table(
            'players',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('rank', sa.Integer(), nullable=True),
            sa.Column('level', sa.Integer(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        )

    if 'vs_weeks' not in existing_tables:
        op.create_table(
            'vs_weeks',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        )
        # Lookup index only; duplicate start dates are not rejected
        op.create_index('ix_vs_weeks_start_date', 'vs_weeks', ['start_date'])

    if 'vs_stages' not in existing_tables:
        op.create_table(
            'vs_stages',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('stage_number', sa.Integer(), nullable=False),
            sa.Column('stage_type', sa.String(length=64), nullable=True),
        )

    if 'vs_stage_stats' not in existing_tables:
        op.create_table(
            'vs_stage_stats',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id'), nullable=False),
            sa.Column('week_id', sa.Integer(), sa.ForeignKey('vs_weeks.id'), nullable=False),
            sa.Column('stage_id', sa.Integer(), sa.ForeignKey('vs_stages.id'), nullable=False),
            sa.Column('score', sa.Float(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        )
        op.create_index('ix_vs_stage_stats_player_id', 'vs_stage_stats', ['player_id'])
        op.create_index('ix_vs_stage_stats_week_id', 'vs_stage_stats', ['week_id'])
        op.create_index('ix_vs_stage_stats_stage_id', 'vs_stage_stats', ['stage_id'])


def downgrade():
    op.drop_table('vs_stage_stats')
    op.drop_table('vs_stages')
    op.drop_index('ix_vs_weeks_start_date', table_name='vs_weeks')
    op.drop_table('vs_weeks')
    op.drop_table('players')
