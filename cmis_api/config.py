### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Configuration -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
API Configuration Management

Uses Pydantic Settings for configuration with environment variable support.
Loads settings from .env file and data/config.yaml.

Config file location (in order of precedence):
1. CMIS_CONFIG_PATH environment variable
2. data/config.yaml (default - persisted in Docker via volume mount)
"""

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic_settings import BaseSettings

from cmis_api.config_schema import AppConfig, get_validation_errors


def get_project_root() -> Path:
    """Get the project root directory"""
    return Path(__file__).parent.parent


def get_config_path() -> Path:
    """
    Get the path to config.yaml.

    Priority:
    1. CMIS_CONFIG_PATH environment variable (if set)
    2. data/config.yaml (default location, persisted via Docker volume)
    """
    env_path = os.environ.get("CMIS_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    return get_project_root() / "data" / "config.yaml"


def get_version() -> str:
    """Read version from VERSION file"""
    version_file = get_project_root() / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "0.0.0"


class APISettings(BaseSettings):
    """API Server Settings"""

    # API Configuration
    api_title: str = "CMIS Admin Console API"
    api_version: str = get_version()
    api_prefix: str = "/api/v1"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # Database URL is read by cmis_api.database (CMIS_APP_DATABASE_URL)

    # Security
    secret_key: str = "change-this-in-production"  # Used for JWT signing
    token_ttl_minutes: int = 8 * 60

    # Rate Limiting
    login_rate_limit: str = "10/minute"

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = True

    # Timezone (loaded from config.yaml)
    timezone: str = "UTC"

    class Config:
        env_prefix = "CMIS_"
        env_file = ".env"
        extra = "ignore"


DEFAULT_CONFIG = """# CMIS Admin Console Configuration
# Main configuration file for storage, notifications and first-run settings

# Application Settings
application:
  # Timezone for logs and timestamps (IANA timezone name)
  timezone: "Africa/Nairobi"

  # Logging Configuration
  logging:
    level: "INFO"             # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_to_file: true         # Enable file logging
    log_to_console: true      # Enable console logging

# Uploaded registration documents
storage:
  # Directory holding the registration-documents bucket
  documents_dir: "data/registration-documents"
  # How long a signed document link stays valid (seconds)
  signed_url_ttl_seconds: 3600

# Status notifications
notifications:
  email:
    # POST each notification to a mail relay webhook
    enabled: false
    webhook_url: ""
    timeout: 10

# First-run bootstrap
# A SUPER_ADMIN account is created on first start if no users exist.
# The temporary password is printed to the console once.
bootstrap:
  tenant_name: "State Department for Cooperatives - National HQ"
  admin_email: "admin@cmis.go.ke"
  admin_name: "System Administrator"
  admin_phone: "+254000000000"
  admin_id_number: "00000000"
"""


def load_yaml_config(config_path: str | None = None) -> dict:
    """Load configuration from YAML file, creating default if missing"""
    config_file = get_config_path() if config_path is None else Path(config_path)

    if not config_file.exists():
        # Ensure parent directory exists (for data/config.yaml)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        # Create default config file
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG)
        print(f"Created default configuration file: {config_file}")

    with open(config_file, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_api_settings() -> APISettings:
    """Get cached API settings instance"""
    # Load timezone from config.yaml if available
    config = load_yaml_config()
    app_config = config.get("application", {})
    timezone = app_config.get("timezone", "UTC")

    return APISettings(timezone=timezone)


@lru_cache
def get_app_config() -> AppConfig:
    """
    Get the validated config.yaml contents.

    Invalid sections fall back to their defaults; the problems are
    reported as warnings so a partial config never blocks startup.
    """
    raw = load_yaml_config()
    errors = get_validation_errors(raw)
    if errors:
        import warnings

        for error in errors:
            warnings.warn(f"Config validation warning: {error}", UserWarning, stacklevel=2)
        return AppConfig()
    return AppConfig.model_validate(raw)
