"""Create notifications, otp_challenges, tour_bookings and client_inquiries

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the portal tables."""

    # --- notifications ---
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(length=16), nullable=False),
        sa.Column('priority', sa.String(length=16), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('notification_type', sa.String(length=64), nullable=False),
        sa.Column('source_table', sa.String(length=64), nullable=False),
        sa.Column('source_table_display_name', sa.String(length=128), nullable=False),
        sa.Column('source_record_id', sa.String(length=64), nullable=True),
        sa.Column('recipient_role', sa.String(length=32), nullable=True),
        sa.Column('recipient_id', sa.BigInteger(), nullable=True),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('action_url', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('read_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_recipient_role_status', 'notifications', ['recipient_role', 'status'])
    op.create_index('ix_notifications_recipient_id', 'notifications', ['recipient_id'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])

    # --- otp_challenges ---
    op.create_table(
        'otp_challenges',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('code', sa.String(length=16), nullable=False),
        sa.Column('purpose', sa.String(length=100), nullable=False),
        sa.Column('issued_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('attempts', sa.Integer(), server_default='0', nullable=False),
        sa.Column('verified_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('consumed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_otp_challenges_email', 'otp_challenges', ['email'], unique=True)

    # --- tour_bookings ---
    op.create_table(
        'tour_bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('property_id', sa.String(length=64), nullable=False),
        sa.Column('property_title', sa.String(length=255), nullable=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('client_name', sa.String(length=255), nullable=True),
        sa.Column('client_email', sa.String(length=320), nullable=True),
        sa.Column('client_phone', sa.String(length=50), nullable=True),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.Time(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('cs_approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cs_approved_by', sa.String(length=64), nullable=True),
        sa.Column('sales_approved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sales_approved_by', sa.String(length=64), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('rejected_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint(
            'sales_approved_at IS NULL OR cs_approved_at IS NOT NULL',
            name='ck_tour_bookings_sales_after_cs',
        ),
        sa.CheckConstraint(
            "status <> 'rejected' OR rejection_reason IS NOT NULL",
            name='ck_tour_bookings_rejection_reason',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tour_bookings_user_id', 'tour_bookings', ['user_id'])
    op.create_index('ix_tour_bookings_status', 'tour_bookings', ['status'])

    # --- client_inquiries ---
    op.create_table(
        'client_inquiries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('property_id', sa.String(length=64), nullable=False),
        sa.Column('property_title', sa.String(length=255), nullable=True),
        sa.Column('user_id', sa.String(length=64), nullable=True),
        sa.Column('client_firstname', sa.String(length=100), nullable=False),
        sa.Column('client_lastname', sa.String(length=100), nullable=False),
        sa.Column('client_email', sa.String(length=320), nullable=False),
        sa.Column('client_phone', sa.String(length=50), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_authenticated', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_client_inquiries_user_id', 'client_inquiries', ['user_id'])
    op.create_index('ix_client_inquiries_client_email', 'client_inquiries', ['client_email'])


def downgrade() -> None:
    """Drop the portal tables."""
    op.drop_index('ix_client_inquiries_client_email', table_name='client_inquiries')
    op.drop_index('ix_client_inquiries_user_id', table_name='client_inquiries')
    op.drop_table('client_inquiries')
    op.drop_index('ix_tour_bookings_status', table_name='tour_bookings')
    op.drop_index('ix_tour_bookings_user_id', table_name='tour_bookings')
    op.drop_table('tour_bookings')
    op.drop_index('ix_otp_challenges_email', table_name='otp_challenges')
    op.drop_table('otp_challenges')
    op.drop_index('ix_notifications_created_at', table_name='notifications')
    op.drop_index('ix_notifications_recipient_id', table_name='notifications')
    op.drop_index('ix_notifications_recipient_role_status', table_name='notifications')
    op.drop_table('notifications')
