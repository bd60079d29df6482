"""Data models produced and consumed by a pagination run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from resume_layout.constants import SectionKind
    from resume_layout.services.style_config import StyleConfig

LayoutPath = Literal["measured", "estimated"]


class DocumentError(ValueError):
    """Raised when a resume document cannot be laid out at all."""


class MeasurementError(RuntimeError):
    """Raised when reported box metrics do not cover every visible section."""


@dataclass(frozen=True, slots=True)
class Section:
    """A visible, non-empty section of a loaded document.

    Attributes:
        section_id: Stable id (the kind's slug).
        kind: Which closed section kind this is.
        entries: Normalized entries in user order.
    """

    section_id: str
    kind: SectionKind
    entries: tuple[Any, ...]

    @property
    def title(self) -> str:
        return self.kind.display_title


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Absolute page and content-area dimensions for one pagination run.

    Attributes:
        page_size: Resolved page-size identifier (``letter`` or ``a4``).
        page_width: Full page width.
        page_height: Full page height.
        content_width: Width between the side margins.
        content_height: Height between the top and bottom margins.
        margin_vertical: Top (and bottom) margin.
        margin_horizontal: Left (and right) margin.
        unit: ``px`` or ``pt``.
    """

    page_size: str
    page_width: float
    page_height: float
    content_width: float
    content_height: float
    margin_vertical: float
    margin_horizontal: float
    unit: str = "px"


@dataclass(frozen=True, slots=True)
class SectionMeasurement:
    """Height of one section and the gap charged against its predecessor."""

    section_id: str
    height: float
    collapsed_margin: float = 0.0

    def __post_init__(self) -> None:
        if self.height < 0 or self.collapsed_margin < 0:
            msg = f"Negative measurement for section {self.section_id!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Page:
    """One output page: its sections in order and the height they use.

    ``height`` includes the header reservation on the first page.
    """

    index: int
    section_ids: tuple[str, ...]
    height: float

    @property
    def is_first(self) -> bool:
        return self.index == 0

    def __len__(self) -> int:
        return len(self.section_ids)


@dataclass(frozen=True, slots=True)
class LeftColumnContent:
    """Sidebar entries (modern template) assigned to one page."""

    skills: tuple[Any, ...] = ()
    interests: tuple[Any, ...] = ()
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.skills and not self.interests


@dataclass(frozen=True, slots=True)
class Layout:
    """Result of one pagination run over an immutable input snapshot."""

    path: LayoutPath
    style: StyleConfig
    geometry: PageGeometry
    sections: tuple[Section, ...]
    pages: tuple[Page, ...]
    first_page_header_height: float
    bottom_margin_reserve: float
    sidebar: tuple[LeftColumnContent, ...] = field(default=())

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def sections_for(self, page: Page) -> list[Section]:
        """Return the sections placed on *page*, in page order."""
        by_id = {section.section_id: section for section in self.sections}
        return [by_id[section_id] for section_id in page.section_ids]

    def sidebar_for(self, page: Page) -> LeftColumnContent | None:
        if page.index < len(self.sidebar):
            return self.sidebar[page.index]
        return None
