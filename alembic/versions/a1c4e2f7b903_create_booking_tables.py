"""create booking tables

Revision ID: a1c4e2f7b903
Revises:
Create Date: 2026-10-18 10:12:40.512093

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1c4e2f7b903'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Businesses
    op.create_table(
        'businesses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('category', sa.String(100), nullable=False, server_default='restaurante'),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('email', sa.String(200), nullable=True),
        sa.Column('booking_slot_duration_minutes', sa.Integer, nullable=False, server_default='60'),
        sa.Column('confirmation_mode', sa.String(20), nullable=False, server_default='automatic'),
        sa.Column('timezone', sa.String(50), server_default='Europe/Madrid'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('is_active', sa.Boolean, server_default=sa.true())
    )

    # 2. Weekly opening hours
    op.create_table(
        'availability_slots',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('business_id', sa.Uuid(), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('day_of_week', sa.Integer, nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_availability_day_of_week')
    )
    op.create_index('ix_availability_slots_business_id', 'availability_slots', ['business_id'])

    # 3. Tables
    op.create_table(
        'tables',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('business_id', sa.Uuid(), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('table_number', sa.Integer, nullable=False),
        sa.Column('max_capacity', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('max_capacity >= 1', name='ck_tables_max_capacity_positive')
    )
    op.create_index('ix_tables_business_id', 'tables', ['business_id'])

    # 4. Bookings
    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('business_id', sa.Uuid(), sa.ForeignKey('businesses.id'), nullable=False),
        sa.Column('table_id', sa.Uuid(), sa.ForeignKey('tables.id'), nullable=True),
        sa.Column('client_name', sa.String(200), nullable=False),
        sa.Column('client_phone', sa.String(30), nullable=False),
        sa.Column('client_email', sa.String(200), nullable=True),
        sa.Column('booking_date', sa.Date, nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('party_size', sa.Integer, nullable=False),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('status', sa.String(30), nullable=False, server_default='pending'),
        sa.Column('source', sa.String(20), nullable=False, server_default='public'),
        sa.Column('rejection_reason', sa.Text, nullable=True),
        sa.Column('business_confirmation_token', sa.String(64), nullable=True, unique=True),
        sa.Column('client_confirmation_token', sa.String(64), nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )

    # Indexes for bookings
    op.create_index('idx_bookings_business_date', 'bookings', ['business_id', 'booking_date'])
    op.create_index('idx_bookings_table_date', 'bookings', ['table_id', 'booking_date'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_bookings_table_date', table_name='bookings')
    op.drop_index('idx_bookings_business_date', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_tables_business_id', table_name='tables')
    op.drop_table('tables')
    op.drop_index('ix_availability_slots_business_id', table_name='availability_slots')
    op.drop_table('availability_slots')
    op.drop_table('businesses')
