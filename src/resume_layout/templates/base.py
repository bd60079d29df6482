"""Abstract base class for pluggable resume templates.

Templates emit self-contained HTML.  The same section markup is used for the
measurement document (one long, unpaginated column the editor measures),
for each preview page and for the export document, so measured and
exported heights agree.
"""

from __future__ import annotations

import html
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from resume_layout.constants import HEADER_SECTION_ID, SectionKind

if TYPE_CHECKING:
    from resume_layout.models.document import ResumeDocument
    from resume_layout.models.layout import Layout, Page, PageGeometry, Section
    from resume_layout.services.height_estimator import EstimatorConstants
    from resume_layout.services.style_config import StyleConfig

logger = logging.getLogger(__name__)

__all__ = ["ResumeTemplate"]

_PROTOCOL = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
_NON_DIGIT = re.compile(r"\D")

_MONTH_ABBR = [
    "",
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]

# Exceptions a malformed entry can raise while being rendered.
_ENTRY_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


class ResumeTemplate(ABC):
    """Interface that every resume template must implement."""

    #: Section kinds rendered outside the main flow.
    sidebar_kinds: frozenset[SectionKind] = frozenset()

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable template name shown in the UI."""

    @abstractmethod
    def stylesheet(self, style: StyleConfig, geometry: PageGeometry) -> str:
        """Return the CSS shared by measurement, preview and export."""

    @abstractmethod
    def render_header(self, document: ResumeDocument, style: StyleConfig) -> str:
        """Return the page-1 header container (``data-section-id="__header__"``)."""

    @abstractmethod
    def render_page(self, layout: Layout, page: Page, document: ResumeDocument) -> str:
        """Return the HTML of one page holding *page*'s sections."""

    @property
    def uses_sidebar(self) -> bool:
        return bool(self.sidebar_kinds)

    def main_column_width(self, geometry: PageGeometry) -> float:
        """Width sections are laid out in."""
        return geometry.content_width

    def sidebar_reserved_height(self, document: ResumeDocument, style: StyleConfig) -> float:
        """Sidebar height taken on page 1 before skills and interests."""
        return 0.0

    def estimate_header_height(
        self,
        document: ResumeDocument,
        style: StyleConfig,
        constants: EstimatorConstants | None = None,
    ) -> float:
        """Estimated height of :meth:`render_header` on the export path.

        The default prices a stacked header (photo, name, job title, contact
        line).  Templates whose header holds less override this.
        """
        from resume_layout.services.height_estimator import estimate_header_height

        return estimate_header_height(document, style, constants)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def render_measurement_document(
        self,
        document: ResumeDocument,
        sections: list[Section],
        style: StyleConfig,
        geometry: PageGeometry,
    ) -> str:
        """Render every section, unpaginated, in measurable containers.

        The column has the same width as the page's main column so wrapping
        matches the paginated output.
        """
        width = self.main_column_width(geometry)
        body = [f'<div class="measure-root" style="width: {width:.2f}px;">']
        body.append(self.render_header(document, style))
        for section in sections:
            body.append(self.render_section(section))
        body.append("</div>")
        return self._html_document(
            title=self._document_title(document),
            css=self.stylesheet(style, geometry),
            body="\n".join(body),
        )

    def render_document(self, layout: Layout, document: ResumeDocument) -> str:
        """Render all pages as one printable document.

        Every page but the last ends with a forced page break, and the
        ``@page`` box equals the page geometry.
        """
        geometry = layout.geometry
        page_rule = (
            f"@page {{ size: {geometry.page_width:.2f}px {geometry.page_height:.2f}px; margin: 0; }}\n"
            ".page { page-break-after: always; break-after: page; }\n"
            ".page:last-child { page-break-after: auto; break-after: auto; }"
        )
        pages = [self.render_page(layout, page, document) for page in layout.pages]
        return self._html_document(
            title=self._document_title(document),
            css=page_rule + "\n" + self.stylesheet(layout.style, geometry),
            body="\n".join(pages),
        )

    def page_container(self, layout: Layout, page: Page, inner: str, css_class: str = "page") -> str:
        geometry = layout.geometry
        return (
            f'<div class="{css_class}" data-page-index="{page.index}" '
            f'style="width: {geometry.page_width:.2f}px; height: {geometry.page_height:.2f}px;">\n'
            f"{inner}\n</div>"
        )

    @staticmethod
    def _html_document(title: str, css: str, body: str) -> str:
        lines = [
            "<!DOCTYPE html>",
            '<html lang="en">',
            "<head>",
            '<meta charset="utf-8">',
            f"<title>{html.escape(title)}</title>",
            "<style>",
            css,
            "</style>",
            "</head>",
            "<body>",
            body,
            "</body>",
            "</html>",
        ]
        return "\n".join(lines)

    @staticmethod
    def _document_title(document: ResumeDocument) -> str:
        name = document.get("personal_info", {}).get("name", "")
        return document.get("title") or (f"{name} - Resume" if name else "Resume")

    def base_css(self, style: StyleConfig) -> str:
        """Section and entry rules shared by all templates.

        Spacing values here are the ones the height estimator is tuned for.
        """
        lm = style.line_spacing / 10
        align = "justify" if style.align_text_left_right else "left"
        return "\n".join(
            [
                "* { box-sizing: border-box; margin: 0; padding: 0; }",
                f"body {{ font-family: '{style.font_family}', serif; font-size: {style.body_text_size}px;"
                f" line-height: {lm}; color: #000; }}",
                f".section {{ margin-bottom: {style.section_spacing}px; }}",
                f".section-header {{ font-size: {style.section_headers_size}px; font-weight: bold;"
                " text-transform: uppercase; border-bottom: 1px solid #000; padding-bottom: 1px;"
                " margin-bottom: 8px; }",
                f".entry {{ margin-bottom: {style.entry_spacing}px; }}",
                ".entry-header { display: flex; justify-content: space-between; margin-bottom: 2px; }",
                f".entry-title {{ font-size: {style.sub_headers_size}px; font-weight: bold; }}",
                f".entry-date {{ font-size: {style.sub_headers_size}px; white-space: nowrap; }}",
                ".entry-position { font-style: italic; margin-bottom: 2px; }",
                f".body-text {{ margin-bottom: 4px; text-align: {align}; }}",
                ".bullet-points { padding-left: 12px; }",
                f".bullet-point {{ margin-bottom: 2px; text-align: {align}; }}",
                "a { color: inherit; text-decoration: none; }",
            ]
        )

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def render_section(self, section: Section) -> str:
        """Render *section* in a measurable container.

        A malformed entry is left out; the rest of the section still renders.
        """
        lines = [
            f'<div class="section" data-section-id="{self.escape_html(section.section_id)}">',
            f'<div class="section-header">{self.escape_html(section.title)}</div>',
        ]
        renderer = self._section_renderers().get(section.kind)
        if renderer is None:
            logger.warning("No renderer for section %s", section.section_id)
        else:
            lines.extend(renderer(section))
        lines.append("</div>")
        return "\n".join(lines)

    def _section_renderers(self) -> dict[SectionKind, Callable[[Section], list[str]]]:
        return {
            SectionKind.SUMMARY: self._render_summary,
            SectionKind.WORK_EXPERIENCE: self._per_entry(self._render_work_entry),
            SectionKind.PROJECTS: self._per_entry(self._render_project_entry),
            SectionKind.EDUCATION: self._per_entry(self._render_education_entry),
            SectionKind.SKILLS: self._render_skills,
            SectionKind.COURSES: self._per_entry(self._render_course_entry),
            SectionKind.INTERESTS: self._render_interests,
            SectionKind.LANGUAGES: self._render_languages,
            SectionKind.PUBLICATIONS: self._per_entry(self._render_publication_entry),
            SectionKind.AWARDS: self._per_entry(self._render_award_entry),
            SectionKind.VOLUNTEER: self._per_entry(self._render_volunteer_entry),
            SectionKind.REFERENCES: self._per_entry(self._render_reference_entry),
        }

    def _per_entry(self, render_entry: Callable[[Any], list[str]]) -> Callable[[Section], list[str]]:
        def render(section: Section) -> list[str]:
            lines: list[str] = []
            for position, entry in enumerate(section.entries):
                try:
                    entry_lines = render_entry(entry)
                except _ENTRY_ERRORS:
                    logger.warning(
                        "Omitting malformed %s entry #%d", section.section_id, position, exc_info=True
                    )
                    continue
                lines.extend(entry_lines)
            return lines

        return render

    # -- building blocks ---------------------------------------------------

    def _entry_header(self, title: str, date: str = "") -> str:
        date_html = f'<div class="entry-date">{self.escape_html(date)}</div>' if date else ""
        return f'<div class="entry-header"><div class="entry-title">{title}</div>{date_html}</div>'

    def _body_text(self, text: str) -> str:
        return f'<div class="body-text">{text}</div>'

    def _bullets(self, bullets: list[str]) -> list[str]:
        if not bullets:
            return []
        esc = self.escape_html
        lines = ['<div class="bullet-points">']
        lines.extend(f'<div class="bullet-point">&bull; {esc(bullet)}</div>' for bullet in bullets)
        lines.append("</div>")
        return lines

    def _link(self, url: str, text: str | None = None) -> str:
        esc = self.escape_html
        display = text if text is not None else self._strip_protocol(url)
        return f'<a href="{esc(self.ensure_protocol(url))}">{esc(display)}</a>'

    # -- per-kind renderers ------------------------------------------------

    def _render_summary(self, section: Section) -> list[str]:
        return [self._body_text(self.escape_html(str(section.entries[0])))]

    def _render_work_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        dates = self.format_date_range(entry.get("start_date"), entry.get("end_date"), entry.get("current", False))
        position = esc(entry.get("position", ""))
        location = ", ".join(part for part in (entry.get("city"), entry.get("state")) if part)
        if location:
            position = f"{position} &middot; {esc(location)}" if position else esc(location)
        lines = ['<div class="entry">', self._entry_header(esc(entry.get("company", "")), dates)]
        lines.append(f'<div class="entry-position">{position}</div>')
        lines.extend(self._bullets(entry.get("bullet_points", [])))
        lines.append("</div>")
        return lines

    def _render_project_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        title = esc(entry.get("title", ""))
        link = entry.get("link")
        if link:
            title = f"{title} | {self._link(link)}"
        dates = self.format_date_range(entry.get("start_date"), entry.get("end_date"), entry.get("current", False))
        lines = ['<div class="entry">', self._entry_header(title, dates)]
        if entry.get("description"):
            lines.append(self._body_text(esc(entry["description"])))
        technologies = entry.get("technologies", [])
        if technologies:
            lines.append(self._body_text(f"Technologies: {esc(', '.join(technologies))}"))
        lines.extend(self._bullets(entry.get("bullet_points", [])))
        lines.append("</div>")
        return lines

    def _render_education_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        degree = esc(entry.get("degree", ""))
        if entry.get("field"):
            degree = f"{degree} in {esc(entry['field'])}" if degree else esc(entry["field"])
        dates = self.format_date_range(entry.get("start_date"), entry.get("end_date"), entry.get("current", False))
        lines = ['<div class="entry">', self._entry_header(degree, dates)]
        if entry.get("institution"):
            lines.append(self._body_text(esc(entry["institution"])))
        gpa = entry.get("gpa")
        if gpa:
            lines.append(self._body_text(f"GPA: {float(gpa):.2f}"))
        lines.append("</div>")
        return lines

    def _render_skills(self, section: Section) -> list[str]:
        esc = self.escape_html
        entries = section.entries
        if "skill_name" in entries[0]:
            names = [entry.get("skill_name", "") for entry in entries if isinstance(entry, dict)]
            return [self._body_text(esc(", ".join(name for name in names if name)))]

        def render_category(entry: dict) -> list[str]:
            return [
                '<div class="entry">',
                self._entry_header(esc(entry.get("title", ""))),
                self._body_text(esc(", ".join(entry["skills"]))),
                "</div>",
            ]

        return self._per_entry(render_category)(section)

    def _render_course_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        title = esc(entry.get("title", ""))
        if entry.get("link"):
            title = f"{title} | {self._link(entry['link'])}"
        lines = ['<div class="entry">', self._entry_header(title)]
        if entry.get("provider"):
            lines.append(self._body_text(esc(entry["provider"])))
        lines.append("</div>")
        return lines

    def _render_interests(self, section: Section) -> list[str]:
        names = [entry.get("name", "") for entry in section.entries if isinstance(entry, dict)]
        return [self._body_text(self.escape_html(", ".join(name for name in names if name)))]

    def _render_languages(self, section: Section) -> list[str]:
        parts: list[str] = []
        for entry in section.entries:
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            proficiency = entry.get("proficiency")
            parts.append(f"{entry['name']} ({proficiency})" if proficiency else entry["name"])
        return [self._body_text(self.escape_html(", ".join(parts)))]

    def _render_publication_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        title = esc(entry.get("title", ""))
        link = entry.get("link") or (f"https://doi.org/{entry['doi']}" if entry.get("doi") else "")
        if link:
            title = f"{title} | {self._link(link)}"
        lines = ['<div class="entry">', self._entry_header(title, entry.get("year", ""))]
        if entry.get("authors"):
            lines.append(self._body_text(esc(entry["authors"])))
        venue = ", ".join(part for part in (entry.get("journal"), entry.get("year")) if part)
        if venue:
            lines.append(self._body_text(esc(venue)))
        lines.append("</div>")
        return lines

    def _render_award_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        lines = ['<div class="entry">', self._entry_header(esc(entry.get("title", "")), entry.get("year", ""))]
        issued = ", ".join(part for part in (entry.get("organization"), entry.get("year")) if part)
        if issued:
            lines.append(self._body_text(esc(issued)))
        lines.extend(self._bullets(entry.get("bullet_points", [])))
        lines.append("</div>")
        return lines

    def _render_volunteer_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        dates = self.format_date_range(entry.get("start_date"), entry.get("end_date"), entry.get("current", False))
        lines = ['<div class="entry">', self._entry_header(esc(entry.get("position", "")), dates)]
        if entry.get("organization"):
            organization = esc(entry["organization"])
            if entry.get("location"):
                organization = f"{organization} &middot; {esc(entry['location'])}"
            lines.append(self._body_text(organization))
        lines.extend(self._bullets(entry.get("bullet_points", [])))
        lines.append("</div>")
        return lines

    def _render_reference_entry(self, entry: dict) -> list[str]:
        esc = self.escape_html
        lines = ['<div class="entry">', self._entry_header(esc(entry.get("name", "")), entry.get("relationship", ""))]
        role = " at ".join(part for part in (entry.get("title"), entry.get("company")) if part)
        if role:
            lines.append(self._body_text(esc(role)))
        phone = self.format_phone(entry.get("phone", ""))
        contact = " &bull; ".join(esc(part) for part in (entry.get("email"), phone) if part)
        if contact:
            lines.append(self._body_text(contact))
        lines.append("</div>")
        return lines

    # -- header helpers ----------------------------------------------------

    def contact_parts(self, document: ResumeDocument) -> list[str]:
        """Escaped contact items (phone, email, location, links) in display order."""
        esc = self.escape_html
        personal = document.get("personal_info", {})
        parts: list[str] = []
        if personal.get("phone"):
            parts.append(esc(self.format_phone(personal["phone"])))
        if personal.get("email"):
            email = personal["email"]
            parts.append(f'<a href="mailto:{esc(email)}">{esc(email)}</a>')
        location = ", ".join(part for part in (personal.get("city"), personal.get("state")) if part)
        if location:
            parts.append(esc(location))
        for key in ("linkedin", "github", "website"):
            if personal.get(key):
                parts.append(self._link(personal[key]))
        return parts

    @staticmethod
    def header_open(css_class: str = "header") -> str:
        return f'<div class="{css_class}" data-section-id="{HEADER_SECTION_ID}">'

    # ------------------------------------------------------------------
    # Shared helpers available to all templates
    # ------------------------------------------------------------------

    @staticmethod
    def escape_html(text: Any) -> str:
        """Escape ``& < > " '`` in *text*; ``None`` becomes an empty string."""
        if text is None:
            return ""
        return html.escape(str(text), quote=True)

    @staticmethod
    def format_date(value: str | None) -> str:
        """Return ``MMM YYYY`` for an ISO-like date (``YYYY-MM[-DD...]``).

        Values that are not ISO dates are returned unchanged.
        """
        if not value:
            return ""
        parts = value.split("-")
        if len(parts) >= 2 and parts[0].isdigit() and parts[1][:2].isdigit():
            month = int(parts[1][:2])
            if 1 <= month <= 12:
                return f"{_MONTH_ABBR[month]} {parts[0]}"
        return value

    @classmethod
    def format_date_range(
        cls,
        start: str | None,
        end: str | None,
        is_current: bool = False,
    ) -> str:
        """Return a formatted date range like ``Aug 2018 - May 2021``."""
        start_str = cls.format_date(start)
        end_str = "Present" if is_current else cls.format_date(end)

        if start_str and end_str:
            return f"{start_str} - {end_str}"
        return start_str or end_str or ""

    @staticmethod
    def format_phone(phone: str | None) -> str:
        """Format ten-digit numbers as ``(xxx) xxx-xxxx``; others are unchanged."""
        if not phone:
            return ""
        digits = _NON_DIGIT.sub("", phone)
        if len(digits) == 10:
            return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
        return phone

    @staticmethod
    def _strip_protocol(url: str) -> str:
        return _PROTOCOL.sub("", url).removeprefix("www.").rstrip("/")

    @staticmethod
    def ensure_protocol(url: str) -> str:
        """Prefix bare links with ``https://``; ``mailto:`` links are kept."""
        if _PROTOCOL.match(url) or url.startswith("mailto:"):
            return url
        return f"https://{url}"
