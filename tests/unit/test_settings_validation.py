"""Unit tests for settings and startup validation."""

import logging

import pytest

from core.settings import Settings
from core.validation import validate_all_settings
from relay.core.config import CASE_REFERENCE_FIELDS, EXTERIORES_BASE_URL


class TestSettingsDefaults:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "UPSTREAM_BASE_URL", "UPSTREAM_VERIFY_SSL", "CASE_REFERENCE_FIELDS"):
            monkeypatch.delenv(name, raising=False)

        config = Settings(_env_file=None)

        assert config.PORT == 3000
        assert config.UPSTREAM_BASE_URL == EXTERIORES_BASE_URL
        assert config.UPSTREAM_TIMEOUT_SECONDS == 15.0
        assert config.UPSTREAM_MAX_REDIRECTS == 10
        assert config.UPSTREAM_VERIFY_SSL is True
        assert config.DEFAULT_CONSULADO == "1"
        assert config.CASE_REFERENCE_FIELDS == list(CASE_REFERENCE_FIELDS)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("UPSTREAM_VERIFY_SSL", "false")
        monkeypatch.setenv("CASE_REFERENCE_FIELDS", '["codigo", "expediente"]')

        config = Settings(_env_file=None)

        assert config.PORT == 8080
        assert config.UPSTREAM_VERIFY_SSL is False
        assert config.CASE_REFERENCE_FIELDS == ["codigo", "expediente"]


class TestValidateAllSettings:
    def test_valid_configuration_passes(self):
        validate_all_settings(Settings(_env_file=None))

    @pytest.mark.parametrize(
        "overrides, fragment",
        [
            ({"UPSTREAM_BASE_URL": "ftp://exteriores"}, "UPSTREAM_BASE_URL"),
            ({"PORT": 0}, "PORT"),
            ({"PORT": 70000}, "PORT"),
            ({"UPSTREAM_TIMEOUT_SECONDS": 0}, "UPSTREAM_TIMEOUT_SECONDS"),
            ({"UPSTREAM_MAX_REDIRECTS": -1}, "UPSTREAM_MAX_REDIRECTS"),
            ({"CASE_REFERENCE_FIELDS": []}, "CASE_REFERENCE_FIELDS"),
            ({"CASE_REFERENCE_FIELDS": ["  "]}, "CASE_REFERENCE_FIELDS"),
            ({"CASE_REFERENCE_FIELDS": ["expediente", " "]}, "blank field name"),
        ],
    )
    def test_invalid_configuration_fails_fast(self, overrides, fragment):
        with pytest.raises(RuntimeError) as exc_info:
            validate_all_settings(Settings(_env_file=None, **overrides))

        assert fragment in str(exc_info.value)

    def test_disabled_verification_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="core.validation"):
            validate_all_settings(Settings(_env_file=None, UPSTREAM_VERIFY_SSL=False))

        assert "verification is DISABLED" in caplog.text
