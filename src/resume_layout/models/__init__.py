"""Data models and type definitions"""

from resume_layout.models.document import ResumeDocument
from resume_layout.models.layout import (
    DocumentError,
    Layout,
    LeftColumnContent,
    MeasurementError,
    Page,
    PageGeometry,
    Section,
    SectionMeasurement,
)

__all__ = [
    "DocumentError",
    "Layout",
    "LeftColumnContent",
    "MeasurementError",
    "Page",
    "PageGeometry",
    "ResumeDocument",
    "Section",
    "SectionMeasurement",
]
