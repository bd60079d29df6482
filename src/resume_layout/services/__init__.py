"""Services"""

from resume_layout.services.document import load_document, visible_sections
from resume_layout.services.geometry import page_dimensions, resolve_geometry
from resume_layout.services.height_estimator import (
    EstimatorConstants,
    calibration_scale,
    estimate_header_height,
    estimate_section_height,
)
from resume_layout.services.layout import (
    ExportError,
    build_export_payload,
    build_preview,
    export_pdf,
    layout_estimated,
    layout_measured,
    layout_measured_pass,
)
from resume_layout.services.measurement import BoxMetrics, MeasurementSession, collapse_margins
from resume_layout.services.paginator import paginate
from resume_layout.services.style_config import StyleConfig, apply_preset, resolve_style_config

__all__ = [
    "BoxMetrics",
    "EstimatorConstants",
    "ExportError",
    "MeasurementSession",
    "StyleConfig",
    "apply_preset",
    "build_export_payload",
    "build_preview",
    "calibration_scale",
    "collapse_margins",
    "estimate_header_height",
    "estimate_section_height",
    "export_pdf",
    "layout_estimated",
    "layout_measured",
    "layout_measured_pass",
    "load_document",
    "page_dimensions",
    "paginate",
    "resolve_geometry",
    "resolve_style_config",
    "visible_sections",
]
