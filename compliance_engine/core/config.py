from pydantic import Field
from pydantic_settings import BaseSettings

from compliance_engine.core.enums import DocumentType, UserRole, VendorStatus

DEFAULT_MANDATORY_DOC_TYPES: list[str] = [
    DocumentType.COMMERCIAL_REGISTRATION.value,
    DocumentType.ISO_CERTIFICATE.value,
    DocumentType.ZAKAT_CERTIFICATE.value,
    DocumentType.GOSI_CERTIFICATE.value,
    DocumentType.INSURANCE_CERTIFICATE.value,
]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = Field(default="Vendor Compliance Engine", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")

    # Database (SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./compliance_dev.db",
        alias="DATABASE_URL",
    )

    # Multi-tenancy default
    default_client_id: str = Field(default="default", alias="DEFAULT_CLIENT_ID")

    # Compliance rules
    compliance_mandatory_doc_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MANDATORY_DOC_TYPES),
        alias="COMPLIANCE_MANDATORY_DOC_TYPES",
    )  # JSON list in the environment
    compliance_expiring_window_days: int = Field(
        default=30, ge=1, alias="COMPLIANCE_EXPIRING_WINDOW_DAYS",
    )
    compliance_sla_hours: int = Field(default=48, ge=1, alias="COMPLIANCE_SLA_HOURS")
    compliance_review_status: str = Field(
        default=VendorStatus.UNDER_REVIEW.value, alias="COMPLIANCE_REVIEW_STATUS",
    )
    compliance_escalation_role: str = Field(
        default=UserRole.PROCUREMENT_MANAGER.value, alias="COMPLIANCE_ESCALATION_ROLE",
    )

    # Scheduler (daily trigger, local wall-clock time in the named timezone)
    compliance_scheduler_enabled: bool = Field(
        default=True, alias="COMPLIANCE_SCHEDULER_ENABLED",
    )
    compliance_schedule_hour: int = Field(
        default=1, ge=0, le=23, alias="COMPLIANCE_SCHEDULE_HOUR",
    )
    compliance_schedule_minute: int = Field(
        default=0, ge=0, le=59, alias="COMPLIANCE_SCHEDULE_MINUTE",
    )
    compliance_timezone: str = Field(default="Asia/Riyadh", alias="COMPLIANCE_TIMEZONE")
    compliance_run_on_start: bool = Field(default=True, alias="COMPLIANCE_RUN_ON_START")

    # Outbound mail
    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_from: str | None = Field(default=None, alias="SMTP_FROM")
    smtp_starttls: bool = Field(default=True, alias="SMTP_STARTTLS")
    smtp_timeout: int = Field(default=30, alias="SMTP_TIMEOUT")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def mail_enabled(self) -> bool:
        """Mail is sent only when a host and credentials are configured."""
        return bool(self.smtp_host and self.smtp_user and self.smtp_password)

    @property
    def mail_sender(self) -> str | None:
        return self.smtp_from or self.smtp_user

settings = Settings()
