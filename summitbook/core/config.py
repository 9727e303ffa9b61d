# summitbook/core/config.py
import os
from dataclasses import dataclass
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Summitbook Checkout"
    API_V1_STR: str = "/api"

    # Empty DATABASE_URL disables booking persistence
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000"]

    # Fallback origin for payment redirects when the request carries none
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    RAZORPAY_KEY_ID: str = os.getenv("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET: str = os.getenv("RAZORPAY_KEY_SECRET", "")

    STRIPE_SECRET_KEY: str = os.getenv("STRIPE_SECRET_KEY", "")
    STRIPE_WEBHOOK_SECRET: str = os.getenv("STRIPE_WEBHOOK_SECRET", "")

    # Confirmation emails go through AWS SES; disabled means log only
    USE_SES_EMAIL: bool = os.getenv("USE_SES_EMAIL", "false").lower() == "true"
    AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")
    AWS_ACCESS_KEY_ID: str = os.getenv("AWS_ACCESS_KEY_ID", "")
    AWS_SECRET_ACCESS_KEY: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")
    FROM_EMAIL: str = os.getenv("FROM_EMAIL", "bookings@localhost")

    CELERY_BROKER_URL: str = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
    CELERY_RESULT_BACKEND: str = os.getenv("CELERY_RESULT_BACKEND", "")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()


@dataclass(frozen=True)
class RazorpayCredentials:
    key_id: str = ""
    key_secret: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.key_id and self.key_secret)


@dataclass(frozen=True)
class StripeCredentials:
    secret_key: str = ""
    webhook_secret: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.secret_key)

    @property
    def webhook_configured(self) -> bool:
        return bool(self.secret_key and self.webhook_secret)


@dataclass(frozen=True)
class GatewayConfig:
    """Payment provider credentials, read once at startup and never mutated."""

    razorpay: RazorpayCredentials = RazorpayCredentials()
    stripe: StripeCredentials = StripeCredentials()
    frontend_url: str = "http://localhost:3000"

    @classmethod
    def from_settings(cls, s: Settings) -> "GatewayConfig":
        return cls(
            razorpay=RazorpayCredentials(
                key_id=s.RAZORPAY_KEY_ID.strip(),
                key_secret=s.RAZORPAY_KEY_SECRET.strip(),
            ),
            stripe=StripeCredentials(
                secret_key=s.STRIPE_SECRET_KEY.strip(),
                webhook_secret=s.STRIPE_WEBHOOK_SECRET.strip(),
            ),
            frontend_url=s.FRONTEND_URL.rstrip("/") or "http://localhost:3000",
        )

gateway_config = GatewayConfig.from_settings(settings)


def get_gateway_config() -> GatewayConfig:
    return gateway_config
