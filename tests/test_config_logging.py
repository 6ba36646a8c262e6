"""Tests for settings validation and log redaction."""

import logging

import pytest

from dataroom.core.config import ConfigurationError, Environment, Settings
from dataroom.core.logging_config import _SecretFilter


class TestSettings:

    def test_allowed_extensions_normalized(self):
        settings = Settings(allowed_file_extensions="PDF, .docx ,xls")
        assert settings.get_allowed_extensions() == ["pdf", "docx", "xls"]

    def test_wildcard_cors_rejected(self):
        with pytest.raises(ValueError):
            Settings(cors_allowed_origins="*").get_cors_origins()

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError):
            Settings(log_level="CHATTY")

    def test_production_refuses_demo_seed(self):
        settings = Settings(
            environment=Environment.PRODUCTION,
            cors_allowed_origins="https://rooms.example.com",
            seed_demo_data=True,
        )
        with pytest.raises(ConfigurationError):
            settings.validate_production_config()

    def test_production_config_ok(self):
        Settings(
            environment=Environment.PRODUCTION,
            cors_allowed_origins="https://rooms.example.com",
            seed_demo_data=False,
        ).validate_production_config()


class TestSecretFilter:

    def _record(self, msg, **extra):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, msg, (), None)
        record.__dict__.update(extra)
        return record

    def test_link_token_redacted_from_message_and_path(self):
        token = "AbCdEfGhIjKlMnOpQrStUv"
        record = self._record(f"POST /api/links/{token}/access 200", path=f"/api/links/{token}/access")
        _SecretFilter().filter(record)
        assert token not in record.msg
        assert token not in record.path

    def test_token_in_format_args_redacted(self):
        token = "AbCdEfGhIjKlMnOpQrStUv"
        record = logging.LogRecord(
            "test", logging.INFO, __file__, 1, "%s %s -> %d", ("POST", f"/api/links/{token}/access", 200), None
        )
        _SecretFilter().filter(record)
        assert token not in record.getMessage()
        assert record.getMessage().startswith("POST /api/links/")

    def test_password_value_redacted(self):
        record = self._record("login password=hunter22 for user")
        _SecretFilter().filter(record)
        assert "hunter22" not in record.msg
