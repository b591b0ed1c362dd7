from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.value_objects.reservation_status import ReservationStatus


class ReservationCreateRequest(BaseModel):
    property_id: str | None = None
    property_title: str | None = None
    reservation_fee: Decimal | None = None
    user_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    client_address: str | None = None
    occupation: str | None = None
    employer: str | None = None
    employment_status: str | None = None
    years_employed: int | None = None
    monthly_income: Decimal | None = None
    other_income_source: str | None = None
    other_income_amount: Decimal | None = None
    message: str | None = None
    id_type: str | None = None


class RejectReservationRequest(BaseModel):
    reason: str | None = None


class ContractSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    contract_id: UUID
    contract_number: str
    payment_plan_months: int | None = None
    monthly_installment: Decimal | None = None
    contract_status: str | None = None


class ReservationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tracking_number: str
    property_id: str
    property_title: str | None = None
    reservation_fee: Decimal
    user_id: str
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str
    client_address: str
    occupation: str
    employer: str
    employment_status: str
    years_employed: int
    monthly_income: Decimal
    other_income_source: str | None = None
    other_income_amount: Decimal | None = None
    total_monthly_income: Decimal | None = None
    message: str | None = None
    id_type: str | None = None
    status: ReservationStatus
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime


class ReservationListItem(ReservationSchema):
    contract: ContractSchema | None = None


class ReservationResponse(BaseModel):
    success: bool = True
    message: str
    data: ReservationSchema


class ReservationListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[ReservationListItem]
