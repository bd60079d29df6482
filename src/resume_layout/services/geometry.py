"""Page geometry resolution.

Page sizes are defined in PDF points and converted to CSS pixels with the
fixed 96/72 ratio, so the estimated export path and the measured on-screen
path always agree on the page box.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from resume_layout.constants.layout_constants import FALLBACK_PAGE_SIZE, PAGE_SIZES_PT, PX_PER_PT
from resume_layout.models.layout import PageGeometry

if TYPE_CHECKING:
    from resume_layout.services.style_config import StyleConfig

logger = logging.getLogger(__name__)

__all__ = ["page_dimensions", "px_to_pt", "resolve_geometry", "resolve_page_size"]


def resolve_page_size(page_size: str | None) -> str:
    """Return a known page-size identifier, falling back to ``a4``."""
    key = (page_size or "").strip().lower()
    if key in PAGE_SIZES_PT:
        return key
    logger.warning("Unknown page size %r; falling back to %s", page_size, FALLBACK_PAGE_SIZE)
    return FALLBACK_PAGE_SIZE


def page_dimensions(page_size: str | None, unit: str = "px") -> tuple[float, float]:
    """Return ``(width, height)`` of *page_size* in *unit* (``px`` or ``pt``)."""
    width_pt, height_pt = PAGE_SIZES_PT[resolve_page_size(page_size)]
    if unit == "pt":
        return width_pt, height_pt
    return width_pt * PX_PER_PT, height_pt * PX_PER_PT


def px_to_pt(value: float) -> float:
    return value / PX_PER_PT


def resolve_geometry(style: StyleConfig, unit: str = "px") -> PageGeometry:
    """Resolve absolute page and content dimensions for *style*.

    Margins in *style* are CSS pixels; they are converted when *unit* is
    ``pt``.  Content dimensions never go negative.
    """
    page_size = resolve_page_size(style.page_size)
    width, height = page_dimensions(page_size, unit)

    vertical = style.top_bottom_margin
    horizontal = style.side_margins
    if unit == "pt":
        vertical = px_to_pt(vertical)
        horizontal = px_to_pt(horizontal)

    return PageGeometry(
        page_size=page_size,
        page_width=width,
        page_height=height,
        content_width=max(width - 2 * horizontal, 0.0),
        content_height=max(height - 2 * vertical, 0.0),
        margin_vertical=vertical,
        margin_horizontal=horizontal,
        unit=unit,
    )
