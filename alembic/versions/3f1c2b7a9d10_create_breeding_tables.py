"""Create rabbits, breeding events, kits, reminders, farm settings and notifications

Revision ID: 3f1c2b7a9d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2b7a9d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

OPEN_EVENT_PREDICATE = "actual_birth_date IS NULL AND deleted_at IS NULL"


def upgrade() -> None:
    """Create the breeding lifecycle schema."""

    # --- rabbits ---
    op.create_table(
        'rabbits',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=200), nullable=False),
        sa.Column('sex', sa.String(length=6), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('breed', sa.String(length=128), nullable=True),
        sa.Column('hutch_id', sa.String(length=50), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('is_pregnant', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('pregnancy_start_date', sa.Date(), nullable=True),
        sa.Column('expected_birth_date', sa.Date(), nullable=True),
        sa.Column('last_birth_date', sa.Date(), nullable=True),
        sa.Column('total_litters', sa.Integer(), server_default='0', nullable=False),
        sa.Column('total_kits', sa.Integer(), server_default='0', nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rabbits_farm_id', 'rabbits', ['farm_id'])
    op.create_index('ix_rabbits_farm_tag', 'rabbits', ['farm_id', 'tag'])
    op.create_index('ix_rabbits_farm_sex', 'rabbits', ['farm_id', 'sex'])

    # --- breeding_events ---
    op.create_table(
        'breeding_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('doe_id', sa.Uuid(), sa.ForeignKey('rabbits.id'), nullable=False),
        sa.Column('buck_id', sa.Uuid(), sa.ForeignKey('rabbits.id'), nullable=False),
        sa.Column('mating_date', sa.Date(), nullable=False),
        sa.Column('expected_birth_date', sa.Date(), nullable=False),
        sa.Column('actual_birth_date', sa.Date(), nullable=True),
        sa.Column('litter_size', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_breeding_events_farm_id', 'breeding_events', ['farm_id'])
    op.create_index(
        'ix_breeding_events_farm_doe', 'breeding_events', ['farm_id', 'doe_id', 'mating_date']
    )
    op.create_index(
        'ix_breeding_events_farm_buck', 'breeding_events', ['farm_id', 'buck_id', 'mating_date']
    )
    op.create_index(
        'ux_breeding_events_open_doe',
        'breeding_events',
        ['doe_id'],
        unique=True,
        postgresql_where=sa.text(OPEN_EVENT_PREDICATE),
    )

    # --- kits ---
    op.create_table(
        'kits',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('breeding_event_id', sa.Uuid(), sa.ForeignKey('breeding_events.id'), nullable=False),
        sa.Column('kit_number', sa.String(length=50), nullable=False),
        sa.Column('sex', sa.String(length=6), nullable=True),
        sa.Column('color', sa.String(length=50), nullable=True),
        sa.Column('birth_weight', sa.DECIMAL(5, 2), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='alive', nullable=False),
        sa.Column('weaning_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_kits_breeding_event_id', 'kits', ['breeding_event_id'])
    op.create_index('ix_kits_farm_number', 'kits', ['farm_id', 'kit_number'])

    # --- reminders ---
    op.create_table(
        'reminders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('rabbit_id', sa.Uuid(), sa.ForeignKey('rabbits.id'), nullable=True),
        sa.Column('hutch_id', sa.String(length=50), nullable=True),
        sa.Column('breeding_event_id', sa.Uuid(), sa.ForeignKey('breeding_events.id'), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=16), nullable=False),
        sa.Column('severity', sa.String(length=8), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='pending', nullable=False),
        sa.Column('trigger_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reminders_farm_status', 'reminders', ['farm_id', 'status'])
    op.create_index('ix_reminders_rabbit_status', 'reminders', ['rabbit_id', 'status'])

    op.create_table(
        'reminder_notify_dates',
        sa.Column(
            'reminder_id',
            sa.Uuid(),
            sa.ForeignKey('reminders.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('notify_on', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('reminder_id', 'notify_on'),
    )
    op.create_index(
        'ix_reminder_notify_dates_notify_on', 'reminder_notify_dates', ['notify_on']
    )

    # --- farm_settings ---
    op.create_table(
        'farm_settings',
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('timezone', sa.String(length=64), nullable=True),
        sa.Column('contact_emails', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('farm_id'),
    )

    # --- notifications ---
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(length=8), server_default='medium', nullable=False),
        sa.Column('data', sa.Text(), nullable=True),
        sa.Column('read', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_farm_id', 'notifications', ['farm_id'])
    op.create_index('ix_notifications_farm_read', 'notifications', ['farm_id', 'read'])
    op.create_index('ix_notifications_farm_created', 'notifications', ['farm_id', 'created_at'])


def downgrade() -> None:
    """Drop the breeding lifecycle schema."""
    op.drop_table('notifications')
    op.drop_table('farm_settings')
    op.drop_index('ix_reminder_notify_dates_notify_on', table_name='reminder_notify_dates')
    op.drop_table('reminder_notify_dates')
    op.drop_table('reminders')
    op.drop_table('kits')
    op.drop_index('ux_breeding_events_open_doe', table_name='breeding_events')
    op.drop_table('breeding_events')
    op.drop_table('rabbits')
