"""Greedy section-level pagination shared by both layout paths."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from resume_layout.models.layout import Page, PageGeometry, SectionMeasurement

logger = logging.getLogger(__name__)

__all__ = ["paginate"]


def paginate(
    measurements: Iterable[SectionMeasurement],
    geometry: PageGeometry,
    *,
    first_page_header_height: float = 0.0,
    bottom_margin_reserve: float = 0.0,
) -> list[Page]:
    """Partition measured sections into pages without splitting any section.

    Sections are placed in order.  A section whose cost (height plus the
    collapsed margin against its predecessor) does not fit in what is left of
    the current page starts a new one, unless the page is still empty: a
    section taller than a page sits alone and overflows.  A section that
    opens a page is not charged its collapsed margin.

    Args:
        measurements: Sections in document order.
        geometry: Resolved page geometry; only ``content_height`` is used.
        first_page_header_height: Space the name/contact block takes on page 1.
        bottom_margin_reserve: Space kept clear at the bottom of every page.

    Returns:
        At least one page.  An empty input yields a single empty page.
    """
    capacity = geometry.content_height - bottom_margin_reserve
    pages: list[Page] = []
    current: list[str] = []
    running = first_page_header_height

    for measurement in measurements:
        cost = measurement.height + measurement.collapsed_margin
        available = capacity - running
        if cost > available and current:
            logger.debug(
                "Page %d closed at %.1fpx; %s needs %.1fpx, %.1fpx left",
                len(pages) + 1,
                running,
                measurement.section_id,
                cost,
                available,
            )
            pages.append(Page(len(pages), tuple(current), running))
            current = []
            running = 0.0
            cost = measurement.height

        if cost > capacity - running:
            logger.warning(
                "Section %s (%.1fpx) exceeds page capacity %.1fpx; placing it alone",
                measurement.section_id,
                cost,
                capacity - running,
            )
        current.append(measurement.section_id)
        running += cost

    pages.append(Page(len(pages), tuple(current), running))
    return pages
