from __future__ import annotations

from datetime import date, datetime, time
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.value_objects.booking_status import BookingStatus


class BookingCreateRequest(BaseModel):
    property_id: str | None = None
    property_title: str | None = None
    user_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    appointment_date: date | None = None
    appointment_time: time | None = None
    message: str | None = None


class RejectBookingRequest(BaseModel):
    reason: str | None = None


class BookingSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    property_id: str
    property_title: str | None = None
    user_id: str
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    appointment_date: date
    appointment_time: time
    message: str | None = None
    status: BookingStatus
    cs_approved_at: datetime | None = None
    cs_approved_by: str | None = None
    sales_approved_at: datetime | None = None
    sales_approved_by: str | None = None
    rejection_reason: str | None = None
    rejected_at: datetime | None = None
    awaiting_sales_approval: bool
    created_at: datetime
    updated_at: datetime


class BookingResponse(BaseModel):
    success: bool = True
    message: str
    data: BookingSchema


class BookingListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[BookingSchema]
