"""Static section height estimation for the export path.

No layout engine is available when exporting, so each section is reduced to
a *shape* (how many entries, bullet lines and body-text blocks its markup
will contain) and priced with a linear formula tuned against the browser
rendering of the classic template.

Known limits: long bullets that wrap onto several lines are priced as one
line, and fonts other than the default serif are not modelled.  Use
:func:`calibration_scale` with measured samples to correct a systematic
bias.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from resume_layout.constants import SectionKind
from resume_layout.constants.layout_constants import (
    CONTACT_MARGIN_BOTTOM,
    HEADER_MARGIN_BOTTOM,
    HEADER_NAME_MARGIN_BOTTOM,
    PROFILE_PHOTO_MARGIN,
    PROFILE_PHOTO_SIZE,
)

if TYPE_CHECKING:
    from resume_layout.models.document import ResumeDocument
    from resume_layout.models.layout import Section
    from resume_layout.services.style_config import StyleConfig

logger = logging.getLogger(__name__)

__all__ = [
    "EstimatorConstants",
    "SectionShape",
    "calibration_scale",
    "estimate_header_height",
    "estimate_section_height",
    "estimate_title_block_height",
    "line_multiplier",
    "section_shape",
]


@dataclass(frozen=True, slots=True)
class EstimatorConstants:
    """Tuning constants of the height formula (CSS pixels)."""

    header_margin_bottom: float = 8.0
    header_padding_bottom: float = 1.0
    header_border: float = 1.0
    entry_header_margin: float = 2.0
    entry_position_margin: float = 2.0
    body_text_margin: float = 4.0
    bullet_margin: float = 2.0
    entry_base_lines: float = 3.0
    line_height_divisor: float = 10.0
    buffer: float = 0.0
    scale: float = 1.0

    def calibrated(self, scale: float) -> EstimatorConstants:
        """Return a copy whose estimates are multiplied by *scale*."""
        if scale <= 0:
            msg = f"Calibration scale must be positive, got {scale}"
            raise ValueError(msg)
        return replace(self, scale=scale)


DEFAULT_CONSTANTS = EstimatorConstants()


@dataclass(frozen=True, slots=True)
class SectionShape:
    """Block counts of a section's rendered markup."""

    entries: int = 0
    bullets: int = 0
    body_texts: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.entries or self.bullets or self.body_texts)


def line_multiplier(style: StyleConfig, constants: EstimatorConstants = DEFAULT_CONSTANTS) -> float:
    """Line-height multiplier; 12 px line spacing gives 1.2."""
    return style.line_spacing / constants.line_height_divisor


def _count(*flags: object) -> int:
    return sum(1 for flag in flags if flag)


def section_shape(section: Section) -> SectionShape:
    """Count the blocks the templates emit for *section*."""
    kind = section.kind
    entries = section.entries
    if not entries:
        return SectionShape()

    if kind is SectionKind.SUMMARY:
        return SectionShape(body_texts=1)
    if kind in (SectionKind.INTERESTS, SectionKind.LANGUAGES):
        # Rendered as one comma separated line.
        return SectionShape(body_texts=1)
    if kind is SectionKind.SKILLS:
        if "skill_name" in entries[0]:
            return SectionShape(body_texts=1)
        return SectionShape(entries=len(entries), body_texts=len(entries))

    bullets = 0
    body_texts = 0
    for entry in entries:
        bullets += len(entry.get("bullet_points", ()))
        if kind is SectionKind.PROJECTS:
            body_texts += _count(entry.get("description"), entry.get("technologies"))
        elif kind is SectionKind.EDUCATION:
            body_texts += _count(entry.get("institution"), entry.get("gpa"))
        elif kind is SectionKind.COURSES:
            body_texts += _count(entry.get("provider"))
        elif kind is SectionKind.PUBLICATIONS:
            body_texts += _count(entry.get("authors"), entry.get("journal") or entry.get("year"))
        elif kind is SectionKind.AWARDS:
            body_texts += _count(entry.get("organization") or entry.get("year"))
        elif kind is SectionKind.VOLUNTEER:
            body_texts += _count(entry.get("organization"))
        elif kind is SectionKind.REFERENCES:
            body_texts += _count(
                entry.get("title") or entry.get("company"),
                entry.get("email") or entry.get("phone"),
            )
    return SectionShape(entries=len(entries), bullets=bullets, body_texts=body_texts)


def estimate_section_height(
    section: Section,
    style: StyleConfig,
    constants: EstimatorConstants | None = None,
) -> float:
    """Estimate the rendered height of *section* including its trailing spacing.

    Returns:
        Height in CSS pixels; ``0.0`` for a section with no entries.
    """
    c = constants or DEFAULT_CONSTANTS
    shape = section_shape(section)
    if shape.is_empty:
        return 0.0

    lm = line_multiplier(style, c)
    header = style.section_headers_size * lm + c.header_margin_bottom + c.header_padding_bottom + c.header_border
    entries = shape.entries * (
        style.body_text_size * lm * c.entry_base_lines
        + style.entry_spacing
        + c.entry_header_margin
        + c.entry_position_margin
    )
    bullets = shape.bullets * (style.body_text_size * lm + c.bullet_margin)
    bodies = shape.body_texts * c.body_text_margin

    height = (header + entries + bullets + bodies + c.buffer) * c.scale + style.section_spacing
    logger.debug("Estimated %s at %.1fpx (%s)", section.section_id, height, shape)
    return height


def _title_lines(document: ResumeDocument, style: StyleConfig, lm: float, job_title_scale: float) -> float:
    height = style.name_size * lm + HEADER_NAME_MARGIN_BOTTOM
    if document.get("job_title"):
        height += style.sub_headers_size * job_title_scale * lm
    return height


def estimate_header_height(
    document: ResumeDocument,
    style: StyleConfig,
    constants: EstimatorConstants | None = None,
) -> float:
    """Estimate a stacked page-1 header: photo, name, job title, contact line."""
    c = constants or DEFAULT_CONSTANTS
    lm = line_multiplier(style, c)
    personal = document.get("personal_info", {})

    height = _title_lines(document, style, lm, 1.0)
    if any(personal.get(key) for key in ("email", "phone", "city", "state", "website", "linkedin", "github")):
        height += style.body_text_size * lm + CONTACT_MARGIN_BOTTOM
    if document.get("profile_picture"):
        height += PROFILE_PHOTO_SIZE + PROFILE_PHOTO_MARGIN
    return (height + HEADER_MARGIN_BOTTOM) * c.scale


def estimate_title_block_height(
    document: ResumeDocument,
    style: StyleConfig,
    constants: EstimatorConstants | None = None,
    *,
    job_title_scale: float = 1.0,
) -> float:
    """Estimate a page-1 header holding only the name and job title.

    *job_title_scale* is the job title's font size relative to
    ``sub_headers_size``.
    """
    c = constants or DEFAULT_CONSTANTS
    lm = line_multiplier(style, c)
    return (_title_lines(document, style, lm, job_title_scale) + HEADER_MARGIN_BOTTOM) * c.scale


def calibration_scale(samples: Iterable[tuple[float, float]]) -> float:
    """Return the factor that maps estimates onto measured heights.

    Args:
        samples: ``(estimated, measured)`` height pairs for the same sections.

    Returns:
        ``sum(measured) / sum(estimated)``, or ``1.0`` when there is no
        usable sample.
    """
    estimated_total = 0.0
    measured_total = 0.0
    for estimated, measured in samples:
        if estimated <= 0 or measured < 0:
            continue
        estimated_total += estimated
        measured_total += measured
    if estimated_total == 0:
        logger.warning("No usable calibration samples; keeping scale 1.0")
        return 1.0
    return measured_total / estimated_total
