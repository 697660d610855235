"""
Configuration settings for the Soul Shakti Wellness API
Handles environment variables and application settings
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, built once at startup and shared read-only"""

    # Application
    APP_NAME: str = "Soul Shakti Wellness API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "production"
    PORT: int = 5000

    # Razorpay
    RAZORPAY_KEY_ID: Optional[str] = None
    RAZORPAY_KEY_SECRET: Optional[str] = None
    RAZORPAY_API_BASE: str = "https://api.razorpay.com"
    DEFAULT_CURRENCY: str = "INR"

    # SendGrid
    SENDGRID_API_KEY: Optional[str] = None
    SENDGRID_FROM_EMAIL: str = "soulshaktie@gmail.com"
    SENDGRID_FROM_NAME: str = "Soul Shakti Wellness"
    FRONTEND_URL: str = "https://soulshaktiwellness.com"

    # Quiz responses land in a Google Sheet through an Apps Script webhook
    QUIZ_WEBHOOK_URL: Optional[str] = None

    # CORS, comma separated
    ALLOWED_ORIGINS: str = (
        "https://soulshaktiwellness.com,"
        "https://www.soulshaktiwellness.com,"
        "http://localhost:3000"
    )

    # Deadline applied to every outbound call (gateway, email, webhook)
    OUTBOUND_TIMEOUT_SECONDS: float = 15.0

    # When true, a confirmation email failure fails the whole verification
    VERIFY_REQUIRES_NOTIFICATION: bool = False
    SEND_BOOKING_EMAILS: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields from .env file
        frozen=True,
    )

    @field_validator("FRONTEND_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def razorpay_configured(self) -> bool:
        return bool(self.RAZORPAY_KEY_ID and self.RAZORPAY_KEY_SECRET)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def validate_settings(settings: Settings) -> List[str]:
    """Return a list of missing credentials; empty when fully configured"""
    issues = []

    if not settings.razorpay_configured:
        issues.append("RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET must be set for payments")
    if not settings.SENDGRID_API_KEY:
        issues.append("SENDGRID_API_KEY must be set for transactional email")
    if not settings.QUIZ_WEBHOOK_URL:
        issues.append("QUIZ_WEBHOOK_URL must be set for quiz submissions")

    return issues
