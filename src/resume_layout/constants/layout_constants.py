"""
Page, style and estimation constants shared by both layout paths.

All lengths are CSS pixels unless a name says otherwise.
"""

from __future__ import annotations

# Page sizes in PDF points (72 per inch).
PAGE_SIZES_PT: dict[str, tuple[float, float]] = {
    "letter": (612.0, 792.0),
    "a4": (595.0, 842.0),
}

FALLBACK_PAGE_SIZE = "a4"

# Points -> CSS pixels (96 DPI screen vs 72 DPI PDF).
PX_PER_PT = 96 / 72

TEMPLATE_IDS: tuple[str, ...] = ("classic", "modern")

# Space kept clear above the bottom margin on every page.
DEFAULT_BOTTOM_MARGIN_RESERVE = 60.0

# Modern template sidebar.
SIDEBAR_WIDTH = 221.0
SIDEBAR_PADDING = 24.0
SIDEBAR_PHOTO_SIZE = 80.0
SIDEBAR_PHOTO_MARGIN = 20.0
SIDEBAR_ITEM_MARGIN = 4.0
SIDEBAR_CONTACT_LINE_MARGIN = 8.0
SIDEBAR_SECTION_TITLE_MARGIN_TOP = 24.0

# Classic header block.
HEADER_MARGIN_BOTTOM = 16.0
HEADER_NAME_MARGIN_BOTTOM = 4.0
CONTACT_MARGIN_BOTTOM = 16.0
PROFILE_PHOTO_SIZE = 120.0
PROFILE_PHOTO_MARGIN = 12.0
