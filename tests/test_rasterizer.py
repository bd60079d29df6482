"""Tests for the PDF service client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from resume_layout.services.geometry import resolve_geometry
from resume_layout.services.rasterizer import PdfServiceRasterizer, RasterizationError
from resume_layout.services.style_config import StyleConfig

LETTER = resolve_geometry(StyleConfig())
A4 = resolve_geometry(StyleConfig(page_size="a4"))


def _response(status_code: int = 200, content: bytes = b"%PDF-1.7\n...") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = content.decode("latin-1")
    return response


class TestPayload:
    def test_letter_payload(self):
        payload = PdfServiceRasterizer(base_url="http://pdf").build_payload("<html></html>", LETTER)

        assert payload["html"] == "<html></html>"
        assert payload["pageSize"] == "Letter"
        assert payload["width"] == "816.00px"
        assert payload["height"] == "1056.00px"
        assert payload["margin"] == {"top": "0px", "right": "0px", "bottom": "0px", "left": "0px"}
        assert payload["printBackground"] is True

    def test_a4_payload(self):
        payload = PdfServiceRasterizer(base_url="http://pdf").build_payload("", A4)

        assert payload["pageSize"] == "A4"
        assert payload["height"] == "1122.67px"


class TestRender:
    @patch("resume_layout.services.rasterizer.requests.post")
    def test_success_returns_bytes(self, mock_post):
        mock_post.return_value = _response()

        result = PdfServiceRasterizer(base_url="http://pdf:8001/", timeout=5).render("<html/>", LETTER)

        assert result.startswith(b"%PDF")
        args, kwargs = mock_post.call_args
        assert args[0] == "http://pdf:8001/render-pdf"
        assert kwargs["timeout"] == 5
        assert kwargs["json"]["html"] == "<html/>"

    @patch("resume_layout.services.rasterizer.requests.post")
    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout()

        with pytest.raises(RasterizationError, match="timeout"):
            PdfServiceRasterizer(base_url="http://pdf").render("", LETTER)

    @patch("resume_layout.services.rasterizer.requests.post")
    def test_connection_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError()

        with pytest.raises(RasterizationError, match="unavailable"):
            PdfServiceRasterizer(base_url="http://pdf").render("", LETTER)

    @patch("resume_layout.services.rasterizer.requests.post")
    def test_non_200(self, mock_post):
        mock_post.return_value = _response(500, b"boom")

        with pytest.raises(RasterizationError, match="PDF service error: 500"):
            PdfServiceRasterizer(base_url="http://pdf").render("", LETTER)

    @patch("resume_layout.services.rasterizer.requests.post")
    def test_body_must_be_pdf(self, mock_post):
        mock_post.return_value = _response(200, b"<html>error page</html>")

        with pytest.raises(RasterizationError, match="invalid document"):
            PdfServiceRasterizer(base_url="http://pdf").render("", LETTER)


class TestDefaults:
    def test_reads_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("PDF_SERVICE_URL", "http://renderer:9000/")
        monkeypatch.setenv("PDF_SERVICE_TIMEOUT", "12")

        rasterizer = PdfServiceRasterizer()

        assert rasterizer.base_url == "http://renderer:9000"
        assert rasterizer.timeout == 12.0

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setenv("PDF_SERVICE_URL", "http://renderer:9000")

        rasterizer = PdfServiceRasterizer(base_url="http://other", timeout=1)

        assert rasterizer.base_url == "http://other"
        assert rasterizer.timeout == 1
