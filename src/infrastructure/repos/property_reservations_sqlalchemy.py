from __future__ import annotations

from typing import Iterable
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.domain.models.property_reservation import PropertyReservation, ReservationContract
from src.domain.value_objects.reservation_status import ReservationStatus
from src.infrastructure.db.orm.property_reservation import (
    PropertyContractORM,
    PropertyReservationORM,
)
from src.utils.datetime_tz import ensure_utc


class PropertyReservationsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PropertyReservationORM) -> PropertyReservation:
        return PropertyReservation(
            id=orm.id,
            tracking_number=orm.tracking_number,
            property_id=orm.property_id,
            user_id=orm.user_id,
            client_phone=orm.client_phone,
            client_address=orm.client_address,
            occupation=orm.occupation,
            employer=orm.employer,
            employment_status=orm.employment_status,
            years_employed=orm.years_employed,
            monthly_income=orm.monthly_income,
            property_title=orm.property_title,
            reservation_fee=orm.reservation_fee,
            client_name=orm.client_name,
            client_email=orm.client_email,
            other_income_source=orm.other_income_source,
            other_income_amount=orm.other_income_amount,
            total_monthly_income=orm.total_monthly_income,
            message=orm.message,
            id_type=orm.id_type,
            status=ReservationStatus(orm.status),
            reviewed_by=orm.reviewed_by,
            reviewed_at=ensure_utc(orm.reviewed_at),
            rejection_reason=orm.rejection_reason,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def add(self, reservation: PropertyReservation) -> PropertyReservation:
        orm = PropertyReservationORM(
            id=reservation.id,
            tracking_number=reservation.tracking_number,
            property_id=reservation.property_id,
            property_title=reservation.property_title,
            reservation_fee=reservation.reservation_fee,
            user_id=reservation.user_id,
            client_name=reservation.client_name,
            client_email=reservation.client_email,
            client_phone=reservation.client_phone,
            client_address=reservation.client_address,
            occupation=reservation.occupation,
            employer=reservation.employer,
            employment_status=reservation.employment_status,
            years_employed=reservation.years_employed,
            monthly_income=reservation.monthly_income,
            other_income_source=reservation.other_income_source,
            other_income_amount=reservation.other_income_amount,
            total_monthly_income=reservation.total_monthly_income,
            message=reservation.message,
            id_type=reservation.id_type,
            status=reservation.status.value,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Reservation could not be stored, please try again") from exc
        return self._to_domain(orm)

    async def get(self, reservation_id: UUID) -> PropertyReservation | None:
        stmt = select(PropertyReservationORM).where(PropertyReservationORM.id == reservation_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        user_id: str | None = None,
        status: ReservationStatus | None = None,
    ) -> list[PropertyReservation]:
        stmt = select(PropertyReservationORM)
        if user_id is not None:
            stmt = stmt.where(PropertyReservationORM.user_id == user_id)
        if status is not None:
            stmt = stmt.where(PropertyReservationORM.status == status.value)
        stmt = stmt.order_by(PropertyReservationORM.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def contracts_for(
        self, reservation_ids: Iterable[UUID]
    ) -> dict[UUID, ReservationContract]:
        ids = list(reservation_ids)
        if not ids:
            return {}
        stmt = select(PropertyContractORM).where(PropertyContractORM.reservation_id.in_(ids))
        result = await self.session.execute(stmt)
        return {
            orm.reservation_id: ReservationContract(
                contract_id=orm.contract_id,
                reservation_id=orm.reservation_id,
                contract_number=orm.contract_number,
                payment_plan_months=orm.payment_plan_months,
                monthly_installment=orm.monthly_installment,
                contract_status=orm.contract_status,
            )
            for orm in result.scalars().all()
        }

    async def update(
        self, reservation: PropertyReservation, *, expected_status: ReservationStatus
    ) -> bool:
        """Write the review fields only if the row still has `expected_status`."""
        stmt = (
            update(PropertyReservationORM)
            .where(
                PropertyReservationORM.id == reservation.id,
                PropertyReservationORM.status == expected_status.value,
            )
            .values(
                status=reservation.status.value,
                reviewed_by=reservation.reviewed_by,
                reviewed_at=reservation.reviewed_at,
                rejection_reason=reservation.rejection_reason,
                updated_at=reservation.updated_at,
            )
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1
