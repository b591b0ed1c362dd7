from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.models.inquiry import InquiryStatus


class InquiryCreateRequest(BaseModel):
    property_id: str | None = None
    property_title: str | None = None
    user_id: str | None = None
    client_firstname: str | None = None
    client_lastname: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    message: str | None = None
    is_authenticated: bool = False


class InquirySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    property_id: str
    property_title: str | None = None
    user_id: str | None = None
    client_firstname: str
    client_lastname: str
    client_email: str
    client_phone: str | None = None
    message: str
    is_authenticated: bool
    status: InquiryStatus
    created_at: datetime
    updated_at: datetime


class InquiryResponse(BaseModel):
    success: bool = True
    message: str
    data: InquirySchema


class InquiryListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[InquirySchema]
