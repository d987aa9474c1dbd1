"""
Config Schema Validation

Pydantic models for validating config.yaml structure.
Provides clear error messages when configuration is invalid.
"""

from typing import List, Literal

from pydantic import BaseModel, Field, field_validator


class LoggingConfig(BaseModel):
    """Logging configuration"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_to_file: bool = Field(default=True, description="Enable file logging")
    log_to_console: bool = Field(default=True, description="Enable console logging")


class ApplicationConfig(BaseModel):
    """Application settings"""

    timezone: str = Field(
        default="UTC",
        description="IANA timezone name (e.g., Africa/Nairobi)",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA timezone"""
        try:
            from zoneinfo import ZoneInfo

            ZoneInfo(v)
        except Exception:
            raise ValueError(
                f"Invalid timezone '{v}'. Use IANA format like 'Africa/Nairobi' or 'UTC'"
            )
        return v


class StorageConfig(BaseModel):
    """Registration document storage"""

    documents_dir: str = Field(
        default="data/registration-documents",
        min_length=1,
        description="Directory holding uploaded registration documents",
    )
    signed_url_ttl_seconds: int = Field(
        default=3600,
        ge=60,
        le=7 * 24 * 3600,
        description="Lifetime of a signed document link in seconds",
    )


class EmailConfig(BaseModel):
    """Status-email relay"""

    enabled: bool = Field(default=False, description="POST notifications to the mail webhook")
    webhook_url: str = Field(default="", description="Mail relay endpoint")
    timeout: int = Field(default=10, ge=1, le=120, description="Request timeout in seconds")

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: str) -> str:
        """Webhook must be an http(s) URL when given"""
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid webhook_url '{v}'. Must start with http:// or https://")
        return v


class NotificationsConfig(BaseModel):
    """Notification side channel"""

    email: EmailConfig = Field(default_factory=EmailConfig)


class BootstrapConfig(BaseModel):
    """First-run super admin"""

    tenant_name: str = Field(
        default="State Department for Cooperatives - National HQ", min_length=1
    )
    admin_email: str = Field(default="admin@cmis.go.ke", min_length=3)
    admin_name: str = Field(default="System Administrator", min_length=1)
    admin_phone: str = Field(default="+254000000000", min_length=1)
    admin_id_number: str = Field(default="00000000", min_length=1)


class AppConfig(BaseModel):
    """
    Root configuration model for config.yaml

    Validates the entire configuration structure on load.
    """

    application: ApplicationConfig = Field(default_factory=ApplicationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)
    bootstrap: BootstrapConfig = Field(default_factory=BootstrapConfig)

    model_config = {"populate_by_name": True}


def validate_config(config_dict: dict) -> AppConfig:
    """
    Validate a config dictionary against the schema.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        pydantic.ValidationError: If config is invalid
    """
    return AppConfig.model_validate(config_dict)


def get_validation_errors(config_dict: dict) -> List[str]:
    """
    Get a list of validation errors for a config dictionary.

    Args:
        config_dict: Raw dictionary loaded from config.yaml

    Returns:
        List of error messages (empty if valid)
    """
    try:
        validate_config(config_dict)
        return []
    except Exception as e:
        from pydantic import ValidationError

        if isinstance(e, ValidationError):
            return [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
        return [str(e)]
