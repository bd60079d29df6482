"""Classic resume template.

Single column, serif body, centered name and contact line, ruled section
headers.  Every section, Technical Skills and Interests included, flows
through the main column.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from resume_layout.constants.layout_constants import (
    CONTACT_MARGIN_BOTTOM,
    HEADER_MARGIN_BOTTOM,
    HEADER_NAME_MARGIN_BOTTOM,
    PROFILE_PHOTO_MARGIN,
    PROFILE_PHOTO_SIZE,
)
from resume_layout.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from resume_layout.models.document import ResumeDocument
    from resume_layout.models.layout import Layout, Page, PageGeometry
    from resume_layout.services.style_config import StyleConfig

__all__ = ["ClassicResumeTemplate"]


class ClassicResumeTemplate(ResumeTemplate):
    """Traditional single-column resume."""

    @property
    def name(self) -> str:
        return "Classic Resume"

    def stylesheet(self, style: StyleConfig, geometry: PageGeometry) -> str:
        lm = style.line_spacing / 10
        rules = [
            self.base_css(style),
            f".header {{ text-align: center; margin-bottom: {HEADER_MARGIN_BOTTOM}px; }}",
            f".header .name {{ font-size: {style.name_size}px; font-weight: bold; line-height: {lm};"
            f" margin-bottom: {HEADER_NAME_MARGIN_BOTTOM}px; }}",
            f".header .job-title {{ font-size: {style.sub_headers_size}px; }}",
            f".header .contact {{ margin-bottom: {CONTACT_MARGIN_BOTTOM}px; }}",
            f".header .photo {{ width: {PROFILE_PHOTO_SIZE}px; height: {PROFILE_PHOTO_SIZE}px;"
            f" border-radius: 50%; object-fit: cover; margin-bottom: {PROFILE_PHOTO_MARGIN}px; }}",
            ".page { position: relative; overflow: hidden; background: #fff; }",
            f".page-content {{ padding: {style.top_bottom_margin}px {style.side_margins}px; }}",
        ]
        return "\n".join(rules)

    def render_header(self, document: ResumeDocument, style: StyleConfig) -> str:
        esc = self.escape_html
        personal = document.get("personal_info", {})
        lines = [self.header_open()]
        if document.get("profile_picture"):
            lines.append(f'<img class="photo" src="{esc(document["profile_picture"])}" alt="">')
        lines.append(f'<div class="name">{esc(personal.get("name", ""))}</div>')
        if document.get("job_title"):
            lines.append(f'<div class="job-title">{esc(document["job_title"])}</div>')
        contact = self.contact_parts(document)
        if contact:
            lines.append(f'<div class="contact">{" | ".join(contact)}</div>')
        lines.append("</div>")
        return "\n".join(lines)

    def render_page(self, layout: Layout, page: Page, document: ResumeDocument) -> str:
        lines = ['<div class="page-content">']
        if page.is_first:
            lines.append(self.render_header(document, layout.style))
        lines.extend(self.render_section(section) for section in layout.sections_for(page))
        lines.append("</div>")
        return self.page_container(layout, page, "\n".join(lines))
