"""Create pigs, pens, breeding records, alerts, piglets, birth history and notifications

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

OPEN_RECORD_PREDICATE = "actual_birth_date IS NULL AND deleted_at IS NULL"


def upgrade() -> None:
    """Create the breeding lifecycle schema."""

    # --- pens ---
    op.create_table(
        'pens',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pens_farm_id', 'pens', ['farm_id'], unique=False)

    # --- pigs ---
    op.create_table(
        'pigs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('pig_id', sa.String(length=200), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=True),
        sa.Column('gender', sa.String(length=6), nullable=False),
        sa.Column('pen_id', sa.Uuid(), nullable=True),
        sa.Column('is_pregnant', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('pregnancy_start_date', sa.Date(), nullable=True),
        sa.Column('expected_birth_date', sa.Date(), nullable=True),
        sa.Column('actual_birth_date', sa.Date(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['pen_id'], ['pens.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('farm_id', 'pig_id', name='uq_pigs_farm_pig_id'),
    )
    op.create_index('ix_pigs_farm_id', 'pigs', ['farm_id'], unique=False)

    # --- breeding_records ---
    op.create_table(
        'breeding_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('sow_id', sa.String(length=200), nullable=False),
        sa.Column('boar_id', sa.String(length=200), nullable=False),
        sa.Column('mating_date', sa.Date(), nullable=False),
        sa.Column('expected_birth_date', sa.Date(), nullable=False),
        sa.Column('actual_birth_date', sa.Date(), nullable=True),
        sa.Column('number_of_piglets', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('alert_date', sa.Date(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('updated_by', sa.Uuid(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('version', sa.Integer(), server_default='1', nullable=False),
        sa.CheckConstraint('number_of_piglets >= 0', name='ck_breeding_records_litter_size'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_breeding_records_farm_sow_mating',
        'breeding_records',
        ['farm_id', 'sow_id', 'mating_date'],
        unique=False,
    )
    op.create_index(
        'ux_breeding_records_open_per_sow',
        'breeding_records',
        ['farm_id', 'sow_id'],
        unique=True,
        postgresql_where=sa.text(OPEN_RECORD_PREDICATE),
        sqlite_where=sa.text(OPEN_RECORD_PREDICATE),
    )

    # --- alerts ---
    op.create_table(
        'alerts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('pig_id', sa.String(length=200), nullable=False),
        sa.Column('pen_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('alert_type', sa.String(length=50), nullable=False),
        sa.Column('severity', sa.String(length=20), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('alert_start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notify_on', sa.JSON(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_alerts_farm_status', 'alerts', ['farm_id', 'status'], unique=False)
    op.create_index('ix_alerts_farm_pig_status', 'alerts', ['farm_id', 'pig_id', 'status'], unique=False)
    op.create_index('ix_alerts_farm_start', 'alerts', ['farm_id', 'alert_start_date'], unique=False)

    # --- piglet_records ---
    op.create_table(
        'piglet_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('breeding_record_id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('piglet_number', sa.String(length=50), nullable=False),
        sa.Column('birth_weight', sa.Numeric(5, 2), nullable=True),
        sa.Column('gender', sa.String(length=6), nullable=True),
        sa.Column('color', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='alive', nullable=False),
        sa.Column('weaning_date', sa.Date(), nullable=True),
        sa.Column('weaning_weight', sa.Numeric(5, 2), nullable=True),
        sa.Column('parent_male_id', sa.String(length=200), nullable=True),
        sa.Column('parent_female_id', sa.String(length=200), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['breeding_record_id'], ['breeding_records.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_piglet_records_breeding_record', 'piglet_records', ['breeding_record_id'], unique=False
    )
    op.create_index(
        'ux_piglet_records_farm_number',
        'piglet_records',
        ['farm_id', 'piglet_number'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
        sqlite_where=sa.text('deleted_at IS NULL'),
    )

    # --- pig_birth_history ---
    op.create_table(
        'pig_birth_history',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('sow_id', sa.String(length=200), nullable=False),
        sa.Column('breeding_record_id', sa.Uuid(), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('number_of_piglets', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.ForeignKeyConstraint(['breeding_record_id'], ['breeding_records.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_pig_birth_history_farm_sow_date',
        'pig_birth_history',
        ['farm_id', 'sow_id', 'birth_date'],
        unique=False,
    )
    op.create_index(
        'ux_pig_birth_history_breeding_record',
        'pig_birth_history',
        ['breeding_record_id'],
        unique=True,
    )

    # --- notifications ---
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('data', sa.Text(), nullable=True),
        sa.Column('priority', sa.String(length=20), server_default='medium', nullable=False),
        sa.Column('read', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_farm_id', 'notifications', ['farm_id'], unique=False)
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'], unique=False)
    op.create_index(
        'ix_notifications_farm_user_read', 'notifications', ['farm_id', 'user_id', 'read'], unique=False
    )
    op.create_index(
        'ix_notifications_farm_created', 'notifications', ['farm_id', 'created_at'], unique=False
    )


def downgrade() -> None:
    """Drop the breeding lifecycle schema."""
    op.drop_table('notifications')
    op.drop_table('pig_birth_history')
    op.drop_table('piglet_records')
    op.drop_table('alerts')
    op.drop_table('breeding_records')
    op.drop_table('pigs')
    op.drop_table('pens')
