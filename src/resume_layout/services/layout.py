"""Layout pipeline: the measured and estimated paths, preview and export.

Both paths resolve style and geometry the same way and hand their section
measurements to the one shared :func:`paginate`.  Only how heights are
obtained differs: the interactive editor reports real box metrics, while
export (which has no layout engine) estimates them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from resume_layout.constants import HEADER_SECTION_ID, SectionKind
from resume_layout.constants.layout_constants import DEFAULT_BOTTOM_MARGIN_RESERVE
from resume_layout.models.layout import (
    Layout,
    LeftColumnContent,
    Page,
    PageGeometry,
    Section,
    SectionMeasurement,
)
from resume_layout.services.document import visible_sections
from resume_layout.services.geometry import resolve_geometry
from resume_layout.services.height_estimator import (
    EstimatorConstants,
    estimate_section_height,
)
from resume_layout.services.measurement import BoxMetrics, MeasurementSession, measurements_from_boxes
from resume_layout.services.paginator import paginate
from resume_layout.services.rasterizer import PdfServiceRasterizer, RasterizationError
from resume_layout.services.sidebar import distribute_sidebar
from resume_layout.services.style_config import StyleConfig, resolve_style_config
from resume_layout.templates import ResumeTemplate, get_template

if TYPE_CHECKING:
    from resume_layout.models.document import ResumeDocument
    from resume_layout.services.rasterizer import Rasterizer

logger = logging.getLogger(__name__)

__all__ = [
    "ExportError",
    "ExportPayload",
    "PageView",
    "build_export_payload",
    "build_preview",
    "export_pdf",
    "layout_estimated",
    "layout_measured",
    "layout_measured_pass",
    "main_flow_sections",
]

StyleInput = StyleConfig | Mapping[str, Any] | None


class ExportError(RuntimeError):
    """Raised when a PDF could not be produced.  No partial output exists."""


@dataclass(frozen=True, slots=True)
class PageView:
    """What the editor needs to draw one preview page."""

    index: int
    section_ids: tuple[str, ...]
    height: float
    html: str
    sidebar: LeftColumnContent | None = None


@dataclass(frozen=True, slots=True)
class ExportPayload:
    """Self-contained export document plus the geometry it was built for."""

    html: str
    geometry: PageGeometry
    page_count: int
    layout: Layout


def main_flow_sections(document: ResumeDocument, template: ResumeTemplate) -> list[Section]:
    """Visible sections that flow through the main column of *template*."""
    return visible_sections(document, exclude=template.sidebar_kinds)


def _sidebar_columns(
    document: ResumeDocument,
    template: ResumeTemplate,
    style: StyleConfig,
    geometry: PageGeometry,
    page_count: int,
    constants: EstimatorConstants | None,
) -> tuple[LeftColumnContent, ...]:
    if not template.uses_sidebar:
        return ()
    groups: dict[SectionKind, tuple[Any, ...]] = {
        section.kind: section.entries
        for section in visible_sections(document)
        if section.kind in template.sidebar_kinds
    }
    columns = distribute_sidebar(
        groups.get(SectionKind.SKILLS, ()),
        groups.get(SectionKind.INTERESTS, ()),
        page_count,
        style,
        geometry,
        first_page_reserved=template.sidebar_reserved_height(document, style),
        constants=constants,
    )
    return tuple(columns)


def layout_estimated(
    document: ResumeDocument,
    style: StyleInput = None,
    constants: EstimatorConstants | None = None,
    *,
    bottom_margin_reserve: float = DEFAULT_BOTTOM_MARGIN_RESERVE,
) -> Layout:
    """Paginate *document* from estimated section heights (export path)."""
    style = resolve_style_config(style)
    geometry = resolve_geometry(style)
    template = get_template(style.template)
    sections = main_flow_sections(document, template)

    measurements = [_estimated_measurement(section, style, constants) for section in sections]
    header_height = template.estimate_header_height(document, style, constants)
    pages = paginate(
        measurements,
        geometry,
        first_page_header_height=header_height,
        bottom_margin_reserve=bottom_margin_reserve,
    )
    logger.info("Estimated layout: %d section(s) on %d page(s)", len(sections), len(pages))
    return Layout(
        path="estimated",
        style=style,
        geometry=geometry,
        sections=tuple(sections),
        pages=tuple(pages),
        first_page_header_height=header_height,
        bottom_margin_reserve=bottom_margin_reserve,
        sidebar=_sidebar_columns(document, template, style, geometry, len(pages), constants),
    )


def _estimated_measurement(
    section: Section,
    style: StyleConfig,
    constants: EstimatorConstants | None,
) -> SectionMeasurement:
    # The estimate already includes the trailing section spacing.
    return SectionMeasurement(section.section_id, estimate_section_height(section, style, constants))


def layout_measured(
    document: ResumeDocument,
    style: StyleInput,
    boxes: Iterable[BoxMetrics],
    header: BoxMetrics | None = None,
    *,
    bottom_margin_reserve: float = DEFAULT_BOTTOM_MARGIN_RESERVE,
) -> Layout:
    """Paginate *document* from box metrics reported by the editor.

    Raises:
        MeasurementError: If a visible section's container was not reported.
    """
    style = resolve_style_config(style)
    template = get_template(style.template)
    sections = main_flow_sections(document, template)

    boxes = list(boxes)
    header = _header_box(boxes, header)
    measurements = measurements_from_boxes(boxes, [s.section_id for s in sections], header)
    return _measured_layout(document, style, template, sections, measurements, header, bottom_margin_reserve)


def layout_measured_pass(
    document: ResumeDocument,
    style: StyleInput,
    session: MeasurementSession,
    revision: int,
    boxes: Iterable[BoxMetrics],
    header: BoxMetrics | None = None,
    *,
    bottom_margin_reserve: float = DEFAULT_BOTTOM_MARGIN_RESERVE,
) -> Layout | None:
    """Like :func:`layout_measured`, for one pass of a measurement *session*.

    Returns:
        The layout, or ``None`` when *revision* is no longer the session's
        current pass.

    Raises:
        MeasurementError: If a visible section's container was not reported.
    """
    style = resolve_style_config(style)
    template = get_template(style.template)
    sections = main_flow_sections(document, template)

    boxes = list(boxes)
    header = _header_box(boxes, header)
    measurements = session.accept(revision, boxes, [s.section_id for s in sections], header)
    if measurements is None:
        return None
    return _measured_layout(document, style, template, sections, measurements, header, bottom_margin_reserve)


def _header_box(boxes: list[BoxMetrics], header: BoxMetrics | None) -> BoxMetrics | None:
    if header is not None:
        return header
    return next((box for box in boxes if box.section_id == HEADER_SECTION_ID), None)


def _measured_layout(
    document: ResumeDocument,
    style: StyleConfig,
    template: ResumeTemplate,
    sections: list[Section],
    measurements: list[SectionMeasurement],
    header: BoxMetrics | None,
    bottom_margin_reserve: float,
) -> Layout:
    geometry = resolve_geometry(style)
    header_height = header.height + header.margin_top if header is not None else 0.0

    pages = paginate(
        measurements,
        geometry,
        first_page_header_height=header_height,
        bottom_margin_reserve=bottom_margin_reserve,
    )
    logger.debug("Measured layout: %d section(s) on %d page(s)", len(sections), len(pages))
    return Layout(
        path="measured",
        style=style,
        geometry=geometry,
        sections=tuple(sections),
        pages=tuple(pages),
        first_page_header_height=header_height,
        bottom_margin_reserve=bottom_margin_reserve,
        sidebar=_sidebar_columns(document, template, style, geometry, len(pages), None),
    )


def build_preview(layout: Layout, document: ResumeDocument) -> list[PageView]:
    """Render one view-model per page for the editor preview."""
    template = get_template(layout.style.template)
    return [_page_view(layout, page, document, template) for page in layout.pages]


def _page_view(layout: Layout, page: Page, document: ResumeDocument, template: ResumeTemplate) -> PageView:
    return PageView(
        index=page.index,
        section_ids=page.section_ids,
        height=page.height,
        html=template.render_page(layout, page, document),
        sidebar=layout.sidebar_for(page),
    )


def build_export_payload(
    document: ResumeDocument,
    style: StyleInput = None,
    constants: EstimatorConstants | None = None,
) -> ExportPayload:
    """Lay out *document* on the estimated path and render the export HTML."""
    layout = layout_estimated(document, style, constants)
    template = get_template(layout.style.template)
    return ExportPayload(
        html=template.render_document(layout, document),
        geometry=layout.geometry,
        page_count=layout.page_count,
        layout=layout,
    )


def export_pdf(
    document: ResumeDocument,
    style: StyleInput = None,
    rasterizer: Rasterizer | None = None,
    constants: EstimatorConstants | None = None,
) -> bytes:
    """Produce PDF bytes for *document*.

    Raises:
        ExportError: If the rasterizer fails.  Nothing partial is returned.
    """
    payload = build_export_payload(document, style, constants)
    rasterizer = rasterizer or PdfServiceRasterizer()
    try:
        return rasterizer.render(payload.html, payload.geometry)
    except RasterizationError as exc:
        logger.error("PDF export failed after layout of %d page(s): %s", payload.page_count, exc)
        raise ExportError(str(exc)) from exc
