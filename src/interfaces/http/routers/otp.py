from __future__ import annotations

from fastapi import APIRouter, Depends

from src.application.use_cases.otp import send_otp, verify_otp
from src.config.settings import Settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.email.mailer import Mailer
from src.interfaces.http.deps import get_app_settings, get_mailer, get_uow
from src.interfaces.http.schemas.otp import OtpResponse, SendOtpRequest, VerifyOtpRequest

router = APIRouter(prefix="/otp", tags=["otp"])


@router.post("/send", response_model=OtpResponse)
async def send_code(
    payload: SendOtpRequest,
    settings: Settings = Depends(get_app_settings),
    mailer: Mailer = Depends(get_mailer),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> OtpResponse:
    await send_otp.execute(
        uow,
        send_otp.SendOtpInput(email=payload.email, purpose=payload.purpose),
        mailer=mailer,
        length=settings.otp_length,
        ttl_seconds=settings.otp_expires_seconds,
    )
    return OtpResponse(message="OTP sent successfully. Please check your email.")


@router.post("/verify", response_model=OtpResponse)
async def verify_code(
    payload: VerifyOtpRequest,
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> OtpResponse:
    await verify_otp.execute(
        uow,
        verify_otp.VerifyOtpInput(email=payload.email, otp_code=payload.otp_code),
        length=settings.otp_length,
        max_attempts=settings.otp_max_attempts,
    )
    return OtpResponse(message="Email verified successfully")
