"""Create property_reservations and property_contracts

Revision ID: 8b2e4d61c9f3
Revises: 3f1c9a7d2b10
Create Date: 2026-10-19 15:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b2e4d61c9f3'
down_revision: Union[str, Sequence[str], None] = '3f1c9a7d2b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the reservation tables."""

    # --- property_reservations ---
    op.create_table(
        'property_reservations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tracking_number', sa.String(length=16), nullable=False),
        sa.Column('property_id', sa.String(length=64), nullable=False),
        sa.Column('property_title', sa.String(length=255), nullable=True),
        sa.Column('reservation_fee', sa.Numeric(precision=12, scale=2), server_default='0', nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('client_name', sa.String(length=255), nullable=True),
        sa.Column('client_email', sa.String(length=320), nullable=True),
        sa.Column('client_phone', sa.String(length=50), nullable=False),
        sa.Column('client_address', sa.Text(), nullable=False),
        sa.Column('occupation', sa.String(length=255), nullable=False),
        sa.Column('employer', sa.String(length=255), nullable=False),
        sa.Column('employment_status', sa.String(length=64), nullable=False),
        sa.Column('years_employed', sa.Integer(), nullable=False),
        sa.Column('monthly_income', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('other_income_source', sa.String(length=255), nullable=True),
        sa.Column('other_income_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('total_monthly_income', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('id_type', sa.String(length=64), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('reviewed_by', sa.String(length=64), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('monthly_income > 0', name='ck_property_reservations_income'),
        sa.CheckConstraint('years_employed >= 0', name='ck_property_reservations_years'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tracking_number'),
    )
    op.create_index('ix_property_reservations_user_id', 'property_reservations', ['user_id'])
    op.create_index('ix_property_reservations_status', 'property_reservations', ['status'])

    # --- property_contracts ---
    op.create_table(
        'property_contracts',
        sa.Column('contract_id', sa.Uuid(), nullable=False),
        sa.Column('reservation_id', sa.Uuid(), nullable=False),
        sa.Column('contract_number', sa.String(length=32), nullable=False),
        sa.Column('payment_plan_months', sa.Integer(), nullable=True),
        sa.Column('monthly_installment', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('contract_status', sa.String(length=32), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['reservation_id'], ['property_reservations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('contract_id'),
        sa.UniqueConstraint('reservation_id'),
        sa.UniqueConstraint('contract_number'),
    )


def downgrade() -> None:
    """Drop the reservation tables."""
    op.drop_table('property_contracts')
    op.drop_index('ix_property_reservations_status', table_name='property_reservations')
    op.drop_index('ix_property_reservations_user_id', table_name='property_reservations')
    op.drop_table('property_reservations')
