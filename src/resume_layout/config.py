"""Runtime configuration and logging setup.

Values come from the environment, optionally seeded from a ``.env`` file.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

__all__ = ["Settings", "configure_logging", "get_settings"]

DEFAULT_PDF_SERVICE_URL = "http://localhost:8001"
DEFAULT_PDF_SERVICE_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class Settings:
    pdf_service_url: str = DEFAULT_PDF_SERVICE_URL
    pdf_service_timeout: float = DEFAULT_PDF_SERVICE_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> Settings:
        """Read settings from the environment; malformed numbers use defaults."""
        raw_timeout = os.getenv("PDF_SERVICE_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_PDF_SERVICE_TIMEOUT
        except ValueError:
            timeout = DEFAULT_PDF_SERVICE_TIMEOUT
        if not timeout > 0:
            timeout = DEFAULT_PDF_SERVICE_TIMEOUT

        return cls(
            pdf_service_url=os.getenv("PDF_SERVICE_URL") or DEFAULT_PDF_SERVICE_URL,
            pdf_service_timeout=timeout,
            log_level=(os.getenv("RESUME_LAYOUT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str | None = None) -> None:
    """Attach one stream handler to the ``resume_layout`` logger.

    Calling it again only updates the level.
    """
    name = (level or get_settings().log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    root = logging.getLogger("resume_layout")
    root.setLevel(numeric)
    if not any(getattr(handler, "_resume_layout", False) for handler in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._resume_layout = True  # type: ignore[attr-defined]
        root.addHandler(handler)
