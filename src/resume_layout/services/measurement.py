"""Adapter from rendered box metrics to section measurements.

The editor renders the measurement document, lets fonts settle for one
frame, then reports the border-box height and computed vertical margins of
every ``[data-section-id]`` container.  This module turns those reports into
:class:`SectionMeasurement` values the paginator consumes, applying CSS
adjacent-sibling margin collapsing.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from resume_layout.constants import HEADER_SECTION_ID
from resume_layout.models.layout import MeasurementError, SectionMeasurement

logger = logging.getLogger(__name__)

__all__ = [
    "BoxMetrics",
    "MeasurementSession",
    "collapse_margins",
    "measurements_from_boxes",
]


@dataclass(frozen=True, slots=True)
class BoxMetrics:
    """One container as reported by the rendering surface."""

    section_id: str
    height: float
    margin_top: float = 0.0
    margin_bottom: float = 0.0
    mounted: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BoxMetrics:
        """Build from a report using snake_case or camelCase keys."""
        return cls(
            section_id=str(data.get("section_id", data.get("sectionId", ""))),
            height=float(data.get("height", 0.0)),
            margin_top=float(data.get("margin_top", data.get("marginTop", 0.0))),
            margin_bottom=float(data.get("margin_bottom", data.get("marginBottom", 0.0))),
            mounted=bool(data.get("mounted", True)),
        )


def collapse_margins(prev_bottom: float, curr_top: float) -> float:
    """Return the gap between two stacked blocks.

    Adjacent vertical margins collapse to the larger of the two; they do not
    add up.
    """
    return max(prev_bottom, curr_top)


def measurements_from_boxes(
    boxes: Iterable[BoxMetrics],
    section_ids: Sequence[str],
    header: BoxMetrics | None = None,
) -> list[SectionMeasurement]:
    """Convert box metrics into measurements in *section_ids* order.

    Args:
        boxes: Reported containers; extra ids are ignored.
        section_ids: Visible sections in document order.
        header: The header container, if reported.  The first section's
            margin collapses against it.

    Returns:
        One measurement per section id.

    Raises:
        MeasurementError: If a section was not reported or not mounted.
    """
    by_id = {box.section_id: box for box in boxes}
    if header is None:
        header = by_id.get(HEADER_SECTION_ID)

    measurements: list[SectionMeasurement] = []
    previous = header
    for section_id in section_ids:
        box = by_id.get(section_id)
        if box is None or not box.mounted:
            msg = f"Section container {section_id!r} is not mounted"
            raise MeasurementError(msg)
        if box.height < 0:
            msg = f"Negative height reported for {section_id!r}"
            raise MeasurementError(msg)

        if previous is None:
            gap = box.margin_top
        else:
            gap = collapse_margins(previous.margin_bottom, box.margin_top)
        measurements.append(SectionMeasurement(section_id, box.height, max(gap, 0.0)))
        previous = box
    return measurements


class MeasurementSession:
    """Tracks measurement passes for one document so only the latest counts.

    Every re-render calls :meth:`begin_pass` and tags its report with the
    returned revision.  A report for an older revision is discarded.
    """

    def __init__(self) -> None:
        self._revision = 0
        self._lock = threading.Lock()

    @property
    def revision(self) -> int:
        return self._revision

    def begin_pass(self) -> int:
        with self._lock:
            self._revision += 1
            return self._revision

    def is_current(self, revision: int) -> bool:
        return revision == self._revision

    def accept(
        self,
        revision: int,
        boxes: Iterable[BoxMetrics],
        section_ids: Sequence[str],
        header: BoxMetrics | None = None,
    ) -> list[SectionMeasurement] | None:
        """Return measurements for *revision*, or ``None`` if it is stale.

        Raises:
            MeasurementError: If the current pass is missing a container.
        """
        if not self.is_current(revision):
            logger.debug("Discarding measurement pass %d (current is %d)", revision, self._revision)
            return None
        return measurements_from_boxes(boxes, section_ids, header)
