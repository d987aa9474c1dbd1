"""
Unit tests for configuration loading and validation.

Tests config.yaml schema validation, defaults and file creation.
"""

import pytest
from pydantic import ValidationError

from cmis_api.config import load_yaml_config
from cmis_api.config_schema import AppConfig, get_validation_errors, validate_config


class TestConfigDefaults:
    """Test default configuration values."""

    def test_empty_config_uses_defaults(self):
        config = validate_config({})

        assert config.application.timezone == "UTC"
        assert config.application.logging.level == "INFO"
        assert config.storage.signed_url_ttl_seconds == 3600
        assert config.notifications.email.enabled is False
        assert config.bootstrap.admin_email == "admin@cmis.go.ke"

    def test_partial_section(self):
        config = validate_config({"notifications": {"email": {"timeout": 30}}})

        assert config.notifications.email.timeout == 30
        assert config.notifications.email.webhook_url == ""


class TestConfigValidation:
    """Test configuration validation."""

    def test_invalid_timezone(self):
        with pytest.raises(ValidationError):
            validate_config({"application": {"timezone": "Mars/Olympus_Mons"}})

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            validate_config({"application": {"logging": {"level": "VERBOSE"}}})

    def test_webhook_must_be_http(self):
        errors = get_validation_errors(
            {"notifications": {"email": {"enabled": True, "webhook_url": "smtp://mail.local"}}}
        )

        assert len(errors) == 1
        assert errors[0].startswith("notifications.email.webhook_url")

    def test_signed_url_ttl_bounds(self):
        errors = get_validation_errors({"storage": {"signed_url_ttl_seconds": 5}})

        assert errors
        assert "storage.signed_url_ttl_seconds" in errors[0]

    def test_valid_config_has_no_errors(self):
        assert get_validation_errors(
            {
                "application": {"timezone": "Africa/Nairobi"},
                "notifications": {"email": {"enabled": True, "webhook_url": "https://relay.local/send"}},
            }
        ) == []


class TestConfigFile:
    """Test config.yaml loading."""

    def test_creates_default_file(self, tmp_path):
        config_file = tmp_path / "nested" / "config.yaml"

        raw = load_yaml_config(str(config_file))

        assert config_file.exists()
        assert AppConfig.model_validate(raw).application.timezone == "Africa/Nairobi"

    def test_reads_existing_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("bootstrap:\n  admin_email: root@county.go.ke\n")

        raw = load_yaml_config(str(config_file))

        assert raw == {"bootstrap": {"admin_email": "root@county.go.ke"}}

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert load_yaml_config(str(config_file)) == {}
