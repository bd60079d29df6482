"""Sidebar distribution for the modern template.

Technical Skills and Interests live in the left column instead of the main
flow.  Once the main column has been paginated, this pass spreads their
entries over the same number of pages.  The page count is its only input
from the main paginator.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from resume_layout.constants.layout_constants import (
    SIDEBAR_ITEM_MARGIN,
    SIDEBAR_PADDING,
    SIDEBAR_SECTION_TITLE_MARGIN_TOP,
)
from resume_layout.models.layout import LeftColumnContent
from resume_layout.services.height_estimator import (
    DEFAULT_CONSTANTS,
    EstimatorConstants,
    line_multiplier,
)

if TYPE_CHECKING:
    from resume_layout.models.layout import PageGeometry
    from resume_layout.services.style_config import StyleConfig

logger = logging.getLogger(__name__)

__all__ = ["distribute_sidebar", "sidebar_capacity", "sidebar_item_height"]


def sidebar_capacity(geometry: PageGeometry, first_page_reserved: float, page_index: int) -> float:
    """Height available to skills and interests on one page's sidebar."""
    capacity = geometry.page_height - 2 * SIDEBAR_PADDING
    if page_index == 0:
        capacity -= first_page_reserved
    return max(capacity, 0.0)


def _group_header_height(style: StyleConfig, constants: EstimatorConstants) -> float:
    lm = line_multiplier(style, constants)
    return SIDEBAR_SECTION_TITLE_MARGIN_TOP + style.section_headers_size * lm + constants.header_margin_bottom


def sidebar_item_height(item: Any, style: StyleConfig, constants: EstimatorConstants = DEFAULT_CONSTANTS) -> float:
    """Height of one sidebar entry.  Skill categories take a title line."""
    lm = line_multiplier(style, constants)
    lines = 1
    if isinstance(item, dict) and item.get("title") and item.get("skills"):
        lines = 2
    return lines * style.body_text_size * lm + SIDEBAR_ITEM_MARGIN


def distribute_sidebar(
    skills: Sequence[Any],
    interests: Sequence[Any],
    page_count: int,
    style: StyleConfig,
    geometry: PageGeometry,
    first_page_reserved: float = 0.0,
    constants: EstimatorConstants | None = None,
) -> list[LeftColumnContent]:
    """Spread sidebar entries over *page_count* pages.

    Skills are placed first, then interests, each in order.  A group is
    charged its heading on every page where it starts or resumes.  Entries
    that do not fit on the last page stay there anyway.

    Returns:
        Exactly ``max(page_count, 1)`` columns.
    """
    c = constants or DEFAULT_CONSTANTS
    page_count = max(page_count, 1)
    header_height = _group_header_height(style, c)

    columns: list[dict[str, list[Any]]] = [{"skills": [], "interests": []} for _ in range(page_count)]
    used = [0.0] * page_count
    page = 0

    for group, items in (("skills", skills), ("interests", interests)):
        for item in items:
            item_height = sidebar_item_height(item, style, c)
            while True:
                cost = item_height
                if not columns[page][group]:
                    cost += header_height
                remaining = sidebar_capacity(geometry, first_page_reserved, page) - used[page]
                if cost <= remaining or page == page_count - 1:
                    break
                page += 1
            if cost > remaining:
                logger.warning("Sidebar %s entry overflows page %d", group, page + 1)
            columns[page][group].append(item)
            used[page] += cost

    return [
        LeftColumnContent(skills=tuple(col["skills"]), interests=tuple(col["interests"]), height=height)
        for col, height in zip(columns, used, strict=True)
    ]
