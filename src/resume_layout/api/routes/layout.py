"""Layout, preview and export routes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi import Path as PathParam

from resume_layout.api.dependencies import SessionRegistry, get_rasterizer, get_session_registry
from resume_layout.api.schemas.layout import (
    BoxMetricsModel,
    ExportHtmlResponse,
    GeometryResponse,
    LayoutRequest,
    LayoutResponse,
    MeasuredLayoutRequest,
    MeasurementDocumentResponse,
    MeasurementPassResponse,
    PageResponse,
    PresetResponse,
    SidebarResponse,
    StyleResolveRequest,
    StyleResolveResponse,
)
from resume_layout.models.layout import DocumentError, MeasurementError
from resume_layout.services.document import load_document
from resume_layout.services.geometry import resolve_geometry
from resume_layout.services.layout import (
    ExportError,
    build_export_payload,
    build_preview,
    export_pdf,
    layout_estimated,
    layout_measured_pass,
    main_flow_sections,
)
from resume_layout.services.measurement import BoxMetrics
from resume_layout.services.rasterizer import Rasterizer
from resume_layout.services.style_config import PRESETS, list_presets, resolve_style_config
from resume_layout.templates import get_template, list_templates

if TYPE_CHECKING:
    from resume_layout.models.document import ResumeDocument
    from resume_layout.models.layout import Layout, PageGeometry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/layout", tags=["layout"])


def _load(raw: dict[str, Any]) -> ResumeDocument:
    """Load a document or raise 422."""
    try:
        return load_document(raw)
    except DocumentError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid resume document: {exc}",
        ) from None


def _geometry(geometry: PageGeometry) -> GeometryResponse:
    return GeometryResponse.model_validate(geometry)


def _box(model: BoxMetricsModel) -> BoxMetrics:
    return BoxMetrics(
        section_id=model.section_id,
        height=model.height,
        margin_top=model.margin_top,
        margin_bottom=model.margin_bottom,
        mounted=model.mounted,
    )


def _layout_response(layout: Layout, document: ResumeDocument) -> LayoutResponse:
    pages = []
    for view in build_preview(layout, document):
        sidebar = None
        if view.sidebar is not None:
            sidebar = SidebarResponse(
                skills=list(view.sidebar.skills),
                interests=list(view.sidebar.interests),
                height=view.sidebar.height,
            )
        pages.append(
            PageResponse(
                index=view.index,
                section_ids=list(view.section_ids),
                height=view.height,
                html=view.html,
                sidebar=sidebar,
            )
        )
    return LayoutResponse(
        path=layout.path,
        page_count=layout.page_count,
        geometry=_geometry(layout.geometry),
        first_page_header_height=layout.first_page_header_height,
        pages=pages,
    )


@router.get("/templates", response_model=list[str])
def get_templates() -> list[str]:
    """List available template ids."""
    return list_templates()


@router.get("/presets", response_model=list[PresetResponse])
def get_presets() -> list[PresetResponse]:
    """List style presets and the values they apply."""
    return [PresetResponse(name=name, values=PRESETS[name]) for name in list_presets()]


@router.post("/style/resolve", response_model=StyleResolveResponse)
def resolve_style(data: StyleResolveRequest) -> StyleResolveResponse:
    """Resolve partial style settings; unknown values fall back to defaults."""
    style = resolve_style_config(data.style)
    return StyleResolveResponse(style=style.to_dict(), geometry=_geometry(resolve_geometry(style)))


@router.post("/measurement-document", response_model=MeasurementDocumentResponse)
def measurement_document(data: LayoutRequest) -> MeasurementDocumentResponse:
    """Render the unpaginated document the editor measures."""
    document = _load(data.document)
    style = resolve_style_config(data.style)
    geometry = resolve_geometry(style)
    template = get_template(style.template)
    sections = main_flow_sections(document, template)
    return MeasurementDocumentResponse(
        html=template.render_measurement_document(document, sections, style, geometry),
        section_ids=[section.section_id for section in sections],
        geometry=_geometry(geometry),
    )


@router.post("/{resume_id}/measurement-pass", response_model=MeasurementPassResponse)
def begin_measurement_pass(
    resume_id: Annotated[str, PathParam(description="Resume identifier")],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> MeasurementPassResponse:
    """Start a measurement pass; earlier passes for the resume become stale."""
    revision = registry.get(resume_id).begin_pass()
    return MeasurementPassResponse(resume_id=resume_id, revision=revision)


@router.post("/{resume_id}/paginate/measured", response_model=LayoutResponse)
def paginate_measured(
    resume_id: Annotated[str, PathParam(description="Resume identifier")],
    data: MeasuredLayoutRequest,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> LayoutResponse:
    """Paginate from box metrics reported for a measurement pass."""
    session = registry.get(resume_id)
    if not session.is_current(data.revision):
        raise _stale(data.revision, session.revision)

    document = _load(data.document)
    header = _box(data.header) if data.header is not None else None
    try:
        layout = layout_measured_pass(
            document,
            data.style,
            session,
            data.revision,
            [_box(box) for box in data.boxes],
            header,
        )
    except MeasurementError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from None
    # A newer pass may have started while this one was paginated.
    if layout is None or not session.is_current(data.revision):
        raise _stale(data.revision, session.revision)
    return _layout_response(layout, document)


def _stale(revision: int, current: int) -> HTTPException:
    logger.info("Rejecting measurement revision %d (current is %d)", revision, current)
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Measurement revision {revision} is stale (current is {current})",
    )


@router.post("/paginate/estimated", response_model=LayoutResponse)
def paginate_estimated(data: LayoutRequest) -> LayoutResponse:
    """Paginate from estimated section heights."""
    document = _load(data.document)
    layout = layout_estimated(document, data.style)
    return _layout_response(layout, document)


@router.post("/export/html", response_model=ExportHtmlResponse)
def export_html(data: LayoutRequest) -> ExportHtmlResponse:
    """Return the printable HTML document."""
    document = _load(data.document)
    payload = build_export_payload(document, data.style)
    return ExportHtmlResponse(html=payload.html, page_count=payload.page_count, geometry=_geometry(payload.geometry))


@router.post(
    "/export/pdf",
    responses={200: {"content": {"application/pdf": {}}}},
)
def export_pdf_endpoint(
    data: LayoutRequest,
    rasterizer: Annotated[Rasterizer, Depends(get_rasterizer)],
) -> Response:
    """Render the document to PDF through the rendering service."""
    document = _load(data.document)
    try:
        pdf = export_pdf(document, data.style, rasterizer)
    except ExportError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"PDF rendering failed: {exc}",
        ) from None

    name = document.get("personal_info", {}).get("name", "")
    filename = f"{'_'.join(name.split())}_resume.pdf" if name else "resume.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
