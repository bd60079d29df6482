"""Tests for environment settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from resume_layout.config import (
    DEFAULT_PDF_SERVICE_TIMEOUT,
    DEFAULT_PDF_SERVICE_URL,
    Settings,
    configure_logging,
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("PDF_SERVICE_URL", "PDF_SERVICE_TIMEOUT", "RESUME_LAYOUT_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def package_logger():
    return logging.getLogger("resume_layout")


class TestSettings:
    def test_defaults(self, clean_env):
        settings = Settings.from_env()

        assert settings.pdf_service_url == DEFAULT_PDF_SERVICE_URL
        assert settings.pdf_service_timeout == DEFAULT_PDF_SERVICE_TIMEOUT
        assert settings.log_level == "INFO"

    def test_environment_values(self, clean_env):
        clean_env.setenv("PDF_SERVICE_URL", "http://pdf:8001")
        clean_env.setenv("PDF_SERVICE_TIMEOUT", "7.5")
        clean_env.setenv("RESUME_LAYOUT_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.pdf_service_url == "http://pdf:8001"
        assert settings.pdf_service_timeout == 7.5
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["soon", "0", "-3", "nan"])
    def test_bad_timeout_uses_default(self, clean_env, value):
        clean_env.setenv("PDF_SERVICE_TIMEOUT", value)

        assert Settings.from_env().pdf_service_timeout == DEFAULT_PDF_SERVICE_TIMEOUT


class TestConfigureLogging:
    def test_sets_level(self, package_logger):
        configure_logging("warning")

        assert package_logger.level == logging.WARNING

    def test_handler_added_once(self, package_logger):
        configure_logging("INFO")
        configure_logging("DEBUG")

        marked = [h for h in package_logger.handlers if getattr(h, "_resume_layout", False)]
        assert len(marked) == 1
        assert package_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, package_logger):
        configure_logging("chatty")

        assert package_logger.level == logging.INFO
