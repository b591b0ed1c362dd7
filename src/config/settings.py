from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    app_timezone: str = "Asia/Manila"
    # Tokens are issued by the external auth provider; we only verify them
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = "authenticated"
    jwt_issuer: str | None = None
    jwt_access_token_expires_minutes: int = 60
    # CORS
    cors_allow_origins: str = "*"
    # Email
    email_provider: str = "logging"  # logging | smtp | unione
    email_from_name: str = "Futura Homes"
    email_from_address: str = "no-reply@futura.local"
    email_default_locale: str = "en"
    email_primary_color: str = "#0f766e"
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    smtp_use_tls: bool = True
    unione_api_key: SecretStr | None = None
    unione_api_url: str = "https://us1.unione.io/en/transactional/api/v1/email/send.json"
    # OTP verification for anonymous inquiries
    otp_length: int = 6
    otp_expires_seconds: int = 300
    otp_max_attempts: int = 5
    otp_verified_ttl_minutes: int = 30
    # Notification feed
    notifications_default_limit: int = 50
    notifications_max_limit: int = 500
    notifications_strict_targeting: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("otp_length")
    @classmethod
    def ensure_sane_otp_length(cls, value: int) -> int:
        if not 4 <= value <= 10:
            raise ValueError("otp_length must be between 4 and 10")
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
