from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.domain.models.tour_booking import TourBooking
from src.domain.value_objects.booking_status import BookingStatus
from src.infrastructure.db.orm.tour_booking import TourBookingORM
from src.utils.datetime_tz import ensure_utc


class TourBookingsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: TourBookingORM) -> TourBooking:
        return TourBooking(
            id=orm.id,
            property_id=orm.property_id,
            user_id=orm.user_id,
            appointment_date=orm.appointment_date,
            appointment_time=orm.appointment_time,
            property_title=orm.property_title,
            client_name=orm.client_name,
            client_email=orm.client_email,
            client_phone=orm.client_phone,
            message=orm.message,
            status=BookingStatus(orm.status),
            cs_approved_at=ensure_utc(orm.cs_approved_at),
            cs_approved_by=orm.cs_approved_by,
            sales_approved_at=ensure_utc(orm.sales_approved_at),
            sales_approved_by=orm.sales_approved_by,
            rejection_reason=orm.rejection_reason,
            rejected_at=ensure_utc(orm.rejected_at),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def add(self, booking: TourBooking) -> TourBooking:
        orm = TourBookingORM(
            id=booking.id,
            property_id=booking.property_id,
            property_title=booking.property_title,
            user_id=booking.user_id,
            client_name=booking.client_name,
            client_email=booking.client_email,
            client_phone=booking.client_phone,
            appointment_date=booking.appointment_date,
            appointment_time=booking.appointment_time,
            message=booking.message,
            status=booking.status.value,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Booking already exists") from exc
        return self._to_domain(orm)

    async def get(self, booking_id: UUID) -> TourBooking | None:
        stmt = select(TourBookingORM).where(TourBookingORM.id == booking_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        user_id: str | None = None,
        status: BookingStatus | None = None,
    ) -> list[TourBooking]:
        stmt = select(TourBookingORM)
        if user_id is not None:
            stmt = stmt.where(TourBookingORM.user_id == user_id)
        if status is not None:
            stmt = stmt.where(TourBookingORM.status == status.value)
        stmt = stmt.order_by(
            TourBookingORM.appointment_date.desc(), TourBookingORM.created_at.desc()
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def update(self, booking: TourBooking, *, expected_status: BookingStatus) -> bool:
        """Write the workflow fields only if the row still has `expected_status`."""
        stmt = (
            update(TourBookingORM)
            .where(
                TourBookingORM.id == booking.id,
                TourBookingORM.status == expected_status.value,
            )
            .values(
                status=booking.status.value,
                cs_approved_at=booking.cs_approved_at,
                cs_approved_by=booking.cs_approved_by,
                sales_approved_at=booking.sales_approved_at,
                sales_approved_by=booking.sales_approved_by,
                rejection_reason=booking.rejection_reason,
                rejected_at=booking.rejected_at,
                updated_at=booking.updated_at,
            )
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Booking update violates the approval workflow") from exc
        return (result.rowcount or 0) == 1
