from __future__ import annotations

from datetime import date, datetime, time
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, DateTime, Index, String, Text, Time, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class TourBookingORM(Base):
    __tablename__ = "tour_bookings"
    __table_args__ = (
        Index("ix_tour_bookings_user_id", "user_id"),
        Index("ix_tour_bookings_status", "status"),
        CheckConstraint(
            "sales_approved_at IS NULL OR cs_approved_at IS NOT NULL",
            name="ck_tour_bookings_sales_after_cs",
        ),
        CheckConstraint(
            "status <> 'rejected' OR rejection_reason IS NOT NULL",
            name="ck_tour_bookings_rejection_reason",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    property_id: Mapped[str] = mapped_column(String(64), nullable=False)
    property_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    client_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    client_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    appointment_date: Mapped[date] = mapped_column(Date, nullable=False)
    appointment_time: Mapped[time] = mapped_column(Time, nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    cs_approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cs_approved_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sales_approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    sales_approved_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
