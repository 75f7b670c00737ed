import logging
from dotenv import load_dotenv
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

from app.constants.constants import MailTransportKind

# Load environment variables from .env file
load_dotenv(".env")
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the Good Shepherd forms backend."""

    # ------------------------------
    # Server
    # ------------------------------
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    ENVIRONMENT: str = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")
    ALLOWED_ORIGINS: List[str] = Field(default=["*"])

    # ------------------------------
    # Email - sender identity and organization inbox
    # ------------------------------
    EMAIL_USER: str = Field(default="")
    EMAIL_PASS: str = Field(default="")
    RECEIVER_EMAIL: str = Field(default="")
    MAIL_TRANSPORT: MailTransportKind = Field(default=MailTransportKind.smtp)

    # ------------------------------
    # SMTP - used when MAIL_TRANSPORT=smtp
    # ------------------------------
    SMTP_HOST: str = Field(default="smtp.gmail.com")
    SMTP_PORT: int = Field(default=587)
    SMTP_USE_TLS: bool = Field(default=True)
    SMTP_TIMEOUT: float = Field(default=30.0)

    # ------------------------------
    # Microsoft Graph - used when MAIL_TRANSPORT=graph
    # ------------------------------
    MICROSOFT_TENANT_ID: str = Field(default="")
    MICROSOFT_CLIENT_ID: str = Field(default="")
    MICROSOFT_CLIENT_SECRET: str = Field(default="")

    # ------------------------------
    # Branding used in confirmation emails
    # ------------------------------
    ORGANIZATION_NAME: str = Field(default="Good Shepherd Hospital & Maternity")
    ORGANIZATION_SHORT_NAME: str = Field(default="Good Shepherd Hospital")
    ORGANIZATION_TEAM: str = Field(default="The Good Shepherd Team")

    # ------------------------------
    # Computed Fields
    # ------------------------------
    @computed_field
    @property
    def MAIL_CONFIGURED(self) -> bool:
        """Whether a sender and an organization recipient have been supplied."""
        return bool(self.EMAIL_USER and self.RECEIVER_EMAIL)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate the settings
settings = Settings()

if not settings.MAIL_CONFIGURED:
    logger.warning("⚠️ EMAIL_USER or RECEIVER_EMAIL is not set; form submissions will fail to send")
