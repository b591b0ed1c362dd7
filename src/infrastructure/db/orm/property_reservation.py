from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class PropertyReservationORM(Base):
    __tablename__ = "property_reservations"
    __table_args__ = (
        Index("ix_property_reservations_user_id", "user_id"),
        Index("ix_property_reservations_status", "status"),
        CheckConstraint("monthly_income > 0", name="ck_property_reservations_income"),
        CheckConstraint("years_employed >= 0", name="ck_property_reservations_years"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tracking_number: Mapped[str] = mapped_column(String(16), nullable=False, unique=True)
    property_id: Mapped[str] = mapped_column(String(64), nullable=False)
    property_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reservation_fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    client_phone: Mapped[str] = mapped_column(String(50), nullable=False)
    client_address: Mapped[str] = mapped_column(Text, nullable=False)
    occupation: Mapped[str] = mapped_column(String(255), nullable=False)
    employer: Mapped[str] = mapped_column(String(255), nullable=False)
    employment_status: Mapped[str] = mapped_column(String(64), nullable=False)
    years_employed: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_income: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    other_income_source: Mapped[str | None] = mapped_column(String(255), nullable=True)
    other_income_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    total_monthly_income: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    id_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    reviewed_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class PropertyContractORM(Base):
    __tablename__ = "property_contracts"

    contract_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    reservation_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("property_reservations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    contract_number: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    payment_plan_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    monthly_installment: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    contract_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
