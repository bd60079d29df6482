"""Modern resume template.

Two columns: a tinted left sidebar carrying the photo, contact details,
technical skills and interests, and a main column for everything else.
Sidebar entries are spread over pages by a separate pass, so every page
repeats the sidebar with its own share of skills and interests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from resume_layout.constants import SIDEBAR_KINDS, SectionKind
from resume_layout.constants.layout_constants import (
    HEADER_MARGIN_BOTTOM,
    HEADER_NAME_MARGIN_BOTTOM,
    SIDEBAR_CONTACT_LINE_MARGIN,
    SIDEBAR_ITEM_MARGIN,
    SIDEBAR_PADDING,
    SIDEBAR_PHOTO_MARGIN,
    SIDEBAR_PHOTO_SIZE,
    SIDEBAR_SECTION_TITLE_MARGIN_TOP,
    SIDEBAR_WIDTH,
)
from resume_layout.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from resume_layout.models.document import ResumeDocument
    from resume_layout.models.layout import Layout, LeftColumnContent, Page, PageGeometry
    from resume_layout.services.height_estimator import EstimatorConstants
    from resume_layout.services.style_config import StyleConfig

__all__ = ["ModernResumeTemplate"]

_ACCENT = "#c94f4f"

# Job title font size relative to sub_headers_size.
_JOB_TITLE_SCALE = 1.5


class ModernResumeTemplate(ResumeTemplate):
    """Two-column resume with a skills sidebar."""

    sidebar_kinds = SIDEBAR_KINDS

    @property
    def name(self) -> str:
        return "Modern Resume"

    def main_column_width(self, geometry: PageGeometry) -> float:
        return max(geometry.page_width - SIDEBAR_WIDTH - 2 * geometry.margin_horizontal, 0.0)

    def sidebar_reserved_height(self, document: ResumeDocument, style: StyleConfig) -> float:
        lm = style.line_spacing / 10
        height = 0.0
        if document.get("profile_picture"):
            height += SIDEBAR_PHOTO_SIZE + SIDEBAR_PHOTO_MARGIN
        height += style.section_headers_size * lm + SIDEBAR_CONTACT_LINE_MARGIN
        contact_lines = len(self.contact_parts(document))
        height += contact_lines * (style.body_text_size * lm + SIDEBAR_CONTACT_LINE_MARGIN)
        return height

    def estimate_header_height(
        self,
        document: ResumeDocument,
        style: StyleConfig,
        constants: EstimatorConstants | None = None,
    ) -> float:
        # Photo and contact details live in the sidebar.
        from resume_layout.services.height_estimator import estimate_title_block_height

        return estimate_title_block_height(document, style, constants, job_title_scale=_JOB_TITLE_SCALE)

    def stylesheet(self, style: StyleConfig, geometry: PageGeometry) -> str:
        lm = style.line_spacing / 10
        rules = [
            self.base_css(style),
            ".page { display: flex; position: relative; overflow: hidden; background: #fff; }",
            f".sidebar {{ width: {SIDEBAR_WIDTH}px; flex: none; background: #f8f8fa;"
            f" padding: {SIDEBAR_PADDING}px; font-family: sans-serif; }}",
            f".sidebar .photo {{ display: block; width: {SIDEBAR_PHOTO_SIZE}px; height: {SIDEBAR_PHOTO_SIZE}px;"
            f" border-radius: 50%; object-fit: cover; margin: 0 auto {SIDEBAR_PHOTO_MARGIN}px; }}",
            f".sidebar .sidebar-name {{ font-size: {style.section_headers_size}px; font-weight: 600;"
            f" line-height: {lm}; margin-bottom: {SIDEBAR_CONTACT_LINE_MARGIN}px; }}",
            f".sidebar .contact-line {{ color: #666; margin-bottom: {SIDEBAR_CONTACT_LINE_MARGIN}px;"
            " word-break: break-all; }",
            f".sidebar .sidebar-title {{ font-size: {style.section_headers_size}px; font-weight: 700;"
            f" color: {_ACCENT}; text-transform: uppercase; margin-top: {SIDEBAR_SECTION_TITLE_MARGIN_TOP}px;"
            " margin-bottom: 8px; }",
            f".sidebar .sidebar-item {{ margin-bottom: {SIDEBAR_ITEM_MARGIN}px; }}",
            ".sidebar .sidebar-item-title { font-weight: 600; }",
            f".main {{ flex: 1; padding: {style.top_bottom_margin}px {style.side_margins}px; }}",
            f".main .section-header {{ color: {_ACCENT}; border-bottom-color: {_ACCENT}; }}",
            f".header {{ margin-bottom: {HEADER_MARGIN_BOTTOM}px; }}",
            f".header .name {{ font-size: {style.name_size}px; font-weight: 700; color: {_ACCENT};"
            f" line-height: {lm}; margin-bottom: {HEADER_NAME_MARGIN_BOTTOM}px; }}",
            f".header .job-title {{ font-size: {style.sub_headers_size * _JOB_TITLE_SCALE}px; color: #555; }}",
        ]
        return "\n".join(rules)

    def render_header(self, document: ResumeDocument, style: StyleConfig) -> str:
        esc = self.escape_html
        personal = document.get("personal_info", {})
        lines = [
            self.header_open(),
            f'<div class="name">{esc(personal.get("name", ""))}</div>',
        ]
        if document.get("job_title"):
            lines.append(f'<div class="job-title">{esc(document["job_title"])}</div>')
        lines.append("</div>")
        return "\n".join(lines)

    def render_page(self, layout: Layout, page: Page, document: ResumeDocument) -> str:
        lines = [self._render_sidebar(layout.sidebar_for(page), document, page.is_first)]
        lines.append('<div class="main">')
        if page.is_first:
            lines.append(self.render_header(document, layout.style))
        lines.extend(self.render_section(section) for section in layout.sections_for(page))
        lines.append("</div>")
        return self.page_container(layout, page, "\n".join(lines), css_class="page modern")

    # -- sidebar -----------------------------------------------------------

    def _render_sidebar(
        self,
        column: LeftColumnContent | None,
        document: ResumeDocument,
        first_page: bool,
    ) -> str:
        esc = self.escape_html
        lines = ['<div class="sidebar">']
        if first_page:
            if document.get("profile_picture"):
                lines.append(f'<img class="photo" src="{esc(document["profile_picture"])}" alt="">')
            name = document.get("personal_info", {}).get("name", "")
            lines.append(f'<div class="sidebar-name">{esc(name)}</div>')
            lines.extend(f'<div class="contact-line">{part}</div>' for part in self.contact_parts(document))
        if column is not None:
            if column.skills:
                lines.append(f'<div class="sidebar-title">{esc(SectionKind.SKILLS.display_title)}</div>')
                lines.extend(self._sidebar_item(item) for item in column.skills)
            if column.interests:
                lines.append(f'<div class="sidebar-title">{esc(SectionKind.INTERESTS.display_title)}</div>')
                lines.extend(self._sidebar_item(item) for item in column.interests)
        lines.append("</div>")
        return "\n".join(lines)

    def _sidebar_item(self, item: Any) -> str:
        esc = self.escape_html
        if not isinstance(item, dict):
            return f'<div class="sidebar-item">{esc(item)}</div>'
        if item.get("skills"):
            title = item.get("title", "")
            title_html = f'<div class="sidebar-item-title">{esc(title)}</div>' if title else ""
            return f'<div class="sidebar-item">{title_html}{esc(", ".join(item["skills"]))}</div>'
        text = item.get("skill_name") or item.get("name", "")
        return f'<div class="sidebar-item">{esc(text)}</div>'
