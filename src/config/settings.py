from typing import List, Optional

from pydantic import EmailStr
from pydantic_settings import BaseSettings
from fastapi_mail import ConnectionConfig


DEFAULT_SESSION_SECRET_KEY = "change-me-in-production"


class Settings(BaseSettings):
    PLATFORM_NAME: str = "MOJA"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CLIENT_ORIGIN: str = "http://localhost:5173"
    SESSION_SECRET_KEY: str = DEFAULT_SESSION_SECRET_KEY

    # Missing EmailJS values must not stop the app from booting;
    # the notifier rejects the send at submit time instead.
    EMAILJS_PUBLIC_KEY: str = ""
    EMAILJS_SERVICE_ID: str = ""
    EMAILJS_TEMPLATE_ID: str = ""
    EMAILJS_PRIVATE_KEY: Optional[str] = None
    EMAILJS_API_URL: str = "https://api.emailjs.com/api/v1.0/email/send"
    EMAILJS_TIMEOUT_SECONDS: Optional[float] = None

    NOTIFIER_BACKEND: str = "emailjs"
    WAITLIST_RECIPIENT_NAME: str = "MOJA Waitlist Admin"

    RATE_LIMITING_ENABLED: bool = False
    REDIS_URL: str = "redis://localhost:6379"

    ADMIN_EMAIL: Optional[EmailStr] = None
    MAIL_SERVER: Optional[str] = None
    MAIL_PORT: int = 587
    MAIL_USERNAME: Optional[str] = None
    MAIL_PASSWORD: Optional[str] = None
    MAIL_FROM: Optional[EmailStr] = None
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CLIENT_ORIGIN.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def mail_config(self) -> ConnectionConfig:
        return ConnectionConfig(
            MAIL_USERNAME=self.MAIL_USERNAME or "",
            MAIL_PASSWORD=self.MAIL_PASSWORD or "",
            MAIL_FROM=self.MAIL_FROM,
            MAIL_FROM_NAME=self.PLATFORM_NAME,
            MAIL_PORT=self.MAIL_PORT,
            MAIL_SERVER=self.MAIL_SERVER or "",
            MAIL_STARTTLS=self.MAIL_STARTTLS,
            MAIL_SSL_TLS=self.MAIL_SSL_TLS,
            USE_CREDENTIALS=bool(self.MAIL_USERNAME)
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# create a singleton instance
settings = Settings()
