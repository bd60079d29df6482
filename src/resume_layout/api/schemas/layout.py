"""Pydantic schemas for layout API endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LayoutRequest(BaseModel):
    """A resume document and the style settings to lay it out with."""

    document: dict[str, Any] = Field(..., description="Resume document (snake_case or camelCase keys)")
    style: dict[str, Any] = Field(default_factory=dict, description="Partial style settings")


class StyleResolveRequest(BaseModel):
    """Request schema for resolving partial style settings."""

    style: dict[str, Any] = Field(default_factory=dict, description="Partial style settings")


class BoxMetricsModel(BaseModel):
    """One measured container as reported by the editor."""

    model_config = ConfigDict(populate_by_name=True)

    section_id: str = Field(..., alias="sectionId", description="Value of data-section-id")
    height: float = Field(..., ge=0, description="Border-box height in CSS pixels")
    margin_top: float = Field(0.0, ge=0, alias="marginTop", description="Computed top margin")
    margin_bottom: float = Field(0.0, ge=0, alias="marginBottom", description="Computed bottom margin")
    mounted: bool = Field(True, description="Whether the container was in the DOM")


class MeasuredLayoutRequest(LayoutRequest):
    """Request schema for paginating from reported box metrics."""

    revision: int = Field(..., ge=1, description="Revision returned by measurement-pass")
    boxes: list[BoxMetricsModel] = Field(default_factory=list, description="Measured section containers")
    header: BoxMetricsModel | None = Field(None, description="Measured header container")


class GeometryResponse(BaseModel):
    """Resolved page geometry."""

    model_config = ConfigDict(from_attributes=True)

    page_size: str
    page_width: float
    page_height: float
    content_width: float
    content_height: float
    margin_vertical: float
    margin_horizontal: float
    unit: str


class StyleResolveResponse(BaseModel):
    """Resolved style settings and the geometry they produce."""

    style: dict[str, Any]
    geometry: GeometryResponse


class SidebarResponse(BaseModel):
    """Sidebar entries placed on one page."""

    skills: list[Any] = []
    interests: list[Any] = []
    height: float = 0.0


class PageResponse(BaseModel):
    """One rendered page."""

    index: int
    section_ids: list[str]
    height: float
    html: str
    sidebar: SidebarResponse | None = None


class LayoutResponse(BaseModel):
    """Response schema for a pagination run."""

    path: str
    page_count: int
    geometry: GeometryResponse
    first_page_header_height: float
    pages: list[PageResponse]


class MeasurementDocumentResponse(BaseModel):
    """Unpaginated HTML for the editor to measure."""

    html: str
    section_ids: list[str]
    geometry: GeometryResponse


class MeasurementPassResponse(BaseModel):
    """Revision token for a new measurement pass."""

    resume_id: str
    revision: int


class ExportHtmlResponse(BaseModel):
    """Export document with its page count."""

    html: str
    page_count: int
    geometry: GeometryResponse


class PresetResponse(BaseModel):
    """A named style preset."""

    name: str
    values: dict[str, Any]
