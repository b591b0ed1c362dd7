from __future__ import annotations

from pydantic import BaseModel


class SendOtpRequest(BaseModel):
    email: str | None = None
    purpose: str | None = None


class VerifyOtpRequest(BaseModel):
    email: str | None = None
    otp_code: str | None = None


class OtpResponse(BaseModel):
    success: bool = True
    message: str
