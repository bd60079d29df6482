"""Client for the external HTML-to-PDF rendering service.

The service runs a headless browser and exposes ``POST /render-pdf``.  It
receives the complete export document and returns PDF bytes.  Requests are
never retried; a failure is reported once and the caller decides.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import requests

from resume_layout.config import get_settings

if TYPE_CHECKING:
    from resume_layout.models.layout import PageGeometry

logger = logging.getLogger(__name__)

__all__ = ["PdfServiceRasterizer", "RasterizationError", "Rasterizer"]

_PAGE_FORMATS = {"letter": "Letter", "a4": "A4"}


class RasterizationError(RuntimeError):
    """Raised when the rendering service does not return a PDF."""


class Rasterizer(Protocol):
    def render(self, html: str, geometry: PageGeometry) -> bytes: ...


class PdfServiceRasterizer:
    """Render HTML to PDF through the PDF service over HTTP."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.pdf_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.pdf_service_timeout

    def build_payload(self, html: str, geometry: PageGeometry) -> dict:
        """Request body: the page box is pinned so the service never reflows."""
        return {
            "html": html,
            "pageSize": _PAGE_FORMATS.get(geometry.page_size, "A4"),
            "width": f"{geometry.page_width:.2f}px",
            "height": f"{geometry.page_height:.2f}px",
            "margin": {"top": "0px", "right": "0px", "bottom": "0px", "left": "0px"},
            "printBackground": True,
        }

    def render(self, html: str, geometry: PageGeometry) -> bytes:
        """Return PDF bytes for *html*.

        Raises:
            RasterizationError: On connection failure, timeout, a non-200
                status or a body that is not a PDF.
        """
        url = f"{self.base_url}/render-pdf"
        try:
            response = requests.post(url, json=self.build_payload(html, geometry), timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error("PDF service timeout after %ss", self.timeout)
            raise RasterizationError("PDF service timeout") from None
        except requests.exceptions.ConnectionError:
            logger.error("PDF service unavailable at %s", self.base_url)
            raise RasterizationError("PDF service unavailable") from None

        if response.status_code != 200:
            logger.error("PDF service error: %s - %s", response.status_code, response.text[:200])
            raise RasterizationError(f"PDF service error: {response.status_code}")

        content = response.content
        if not content.startswith(b"%PDF"):
            logger.error("PDF service returned %d bytes that are not a PDF", len(content))
            raise RasterizationError("PDF service returned an invalid document")

        logger.info("Rendered PDF (%d bytes)", len(content))
        return content
