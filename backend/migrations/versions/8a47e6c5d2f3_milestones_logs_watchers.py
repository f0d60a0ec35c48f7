"""milestones, logs and watchers

Revision ID: 8a47e6c5d2f3
Revises: 3f1c2a9d0b11
Create Date: 2026-01-14 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8a47e6c5d2f3'
down_revision: Union[str, None] = '3f1c2a9d0b11'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'milestones',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('mission_id', sa.String(36), sa.ForeignKey('missions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('deadline', sa.Date(), nullable=False),
        sa.Column('priority', sa.String(8), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(16), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("status IN ('active', 'completed')", name='chk_milestone_status'),
        sa.CheckConstraint("priority IN ('low', 'medium', 'high')", name='chk_milestone_priority'),
    )
    op.create_table(
        'logs',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('milestone_id', sa.String(36), sa.ForeignKey('milestones.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'watchers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('mission_id', sa.String(36), sa.ForeignKey('missions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('watcher_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_unique_constraint(
        'uq_watcher_mission',
        'watchers',
        ['mission_id', 'watcher_id'],
    )


def downgrade() -> None:
    op.drop_constraint('uq_watcher_mission', 'watchers', type_='unique')
    op.drop_table('watchers')
    op.drop_table('logs')
    op.drop_table('milestones')
