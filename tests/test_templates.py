"""Tests for resume templates (Classic, Modern) and shared helpers."""

from __future__ import annotations

import logging

import pytest

from resume_layout.constants import HEADER_SECTION_ID, SectionKind
from resume_layout.models.layout import Layout, LeftColumnContent, Page, Section
from resume_layout.services.document import visible_sections
from resume_layout.services.geometry import resolve_geometry
from resume_layout.services.style_config import StyleConfig
from resume_layout.templates import get_template, list_templates
from resume_layout.templates.base import ResumeTemplate
from resume_layout.templates.classic import ClassicResumeTemplate
from resume_layout.templates.modern import ModernResumeTemplate


def _layout(style: StyleConfig, sections: list[Section], pages: list[tuple[str, ...]], sidebar=()) -> Layout:
    return Layout(
        path="estimated",
        style=style,
        geometry=resolve_geometry(style),
        sections=tuple(sections),
        pages=tuple(Page(i, ids, 100.0) for i, ids in enumerate(pages)),
        first_page_header_height=80.0,
        bottom_margin_reserve=60.0,
        sidebar=tuple(sidebar),
    )


# ======================================================================
# Registry
# ======================================================================


class TestRegistry:
    def test_list_templates(self):
        assert list_templates() == ["classic", "modern"]

    def test_get_template(self):
        assert isinstance(get_template("classic"), ClassicResumeTemplate)
        assert isinstance(get_template("modern"), ModernResumeTemplate)

    def test_unknown_template_raises(self):
        with pytest.raises(ValueError, match="Available: classic, modern"):
            get_template("jake")

    def test_sidebar_kinds(self):
        assert not get_template("classic").uses_sidebar
        assert get_template("modern").sidebar_kinds == {SectionKind.SKILLS, SectionKind.INTERESTS}


# ======================================================================
# Base class helpers
# ======================================================================


class TestBaseHelpers:
    def test_strip_https(self):
        assert ResumeTemplate._strip_protocol("https://example.com") == "example.com"

    def test_strip_www_and_trailing_slash(self):
        assert ResumeTemplate._strip_protocol("http://www.example.com/") == "example.com"

    def test_no_protocol(self):
        assert ResumeTemplate._strip_protocol("example.com") == "example.com"

    def test_ensure_protocol(self):
        assert ResumeTemplate.ensure_protocol("github.com/jane") == "https://github.com/jane"
        assert ResumeTemplate.ensure_protocol("http://a.io") == "http://a.io"
        assert ResumeTemplate.ensure_protocol("mailto:a@b.c") == "mailto:a@b.c"

    def test_escape_html(self):
        assert ResumeTemplate.escape_html('<b>"R&D"</b>') == "&lt;b&gt;&quot;R&amp;D&quot;&lt;/b&gt;"
        assert ResumeTemplate.escape_html(None) == ""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2020-01-15", "Jan 2020"),
            ("2019-12", "Dec 2019"),
            ("2021-06-01T00:00:00Z", "Jun 2021"),
            ("Summer 2020", "Summer 2020"),
            ("2020-13", "2020-13"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_format_date(self, value, expected):
        assert ResumeTemplate.format_date(value) == expected

    def test_format_date_range(self):
        assert ResumeTemplate.format_date_range("2020-01", "2021-03") == "Jan 2020 - Mar 2021"
        assert ResumeTemplate.format_date_range("2020-01", None, True) == "Jan 2020 - Present"
        assert ResumeTemplate.format_date_range(None, "2021-03") == "Mar 2021"
        assert ResumeTemplate.format_date_range(None, None) == ""

    def test_format_phone(self):
        assert ResumeTemplate.format_phone("555-123-4567") == "(555) 123-4567"
        assert ResumeTemplate.format_phone("+44 20 7946 0958") == "+44 20 7946 0958"
        assert ResumeTemplate.format_phone("") == ""


# ======================================================================
# Section markup
# ======================================================================


class TestSectionMarkup:
    template = ClassicResumeTemplate()

    def test_work_section(self):
        section = Section(
            "work_experience",
            SectionKind.WORK_EXPERIENCE,
            (
                {
                    "company": "Acme",
                    "position": "Engineer",
                    "city": "Vancouver",
                    "state": "BC",
                    "start_date": "2020-01",
                    "current": True,
                    "bullet_points": ["Shipped", "Fixed"],
                },
            ),
        )

        html = self.template.render_section(section)

        assert 'data-section-id="work_experience"' in html
        assert '<div class="section-header">Work Experience</div>' in html
        assert html.count('class="bullet-point"') == 2
        assert "Jan 2020 - Present" in html
        assert "Vancouver, BC" in html

    def test_malformed_entry_is_omitted(self, caplog):
        section = Section(
            "work_experience",
            SectionKind.WORK_EXPERIENCE,
            (
                {"company": "Good Co", "bullet_points": ["ok"]},
                {"company": "Bad Co", "bullet_points": 5},
            ),
        )

        with caplog.at_level(logging.WARNING, logger="resume_layout.templates.base"):
            html = self.template.render_section(section)

        assert "Good Co" in html
        assert "Bad Co" not in html
        assert "Omitting malformed work_experience entry #1" in caplog.text

    def test_text_is_escaped(self):
        section = Section("professional_summary", SectionKind.SUMMARY, ("<script>alert(1)</script>",))

        html = self.template.render_section(section)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_education_gpa(self):
        section = Section(
            "education",
            SectionKind.EDUCATION,
            ({"institution": "UBC", "degree": "BSc", "field": "CS", "gpa": 3.8},),
        )

        html = self.template.render_section(section)

        assert "BSc in CS" in html
        assert "GPA: 3.80" in html

    def test_strengths_joined(self):
        section = Section(
            "technical_skills",
            SectionKind.SKILLS,
            ({"skill_name": "Python"}, {"skill_name": "Go"}),
        )

        assert "Python, Go" in self.template.render_section(section)

    def test_languages_with_proficiency(self):
        section = Section(
            "languages",
            SectionKind.LANGUAGES,
            ({"name": "English", "proficiency": "Native"}, {"name": "French", "proficiency": ""}),
        )

        assert "English (Native), French" in self.template.render_section(section)

    def test_project_link_gets_protocol(self):
        section = Section("projects", SectionKind.PROJECTS, ({"title": "Site", "link": "example.com/x"},))

        assert 'href="https://example.com/x"' in self.template.render_section(section)

    def test_body_text_count_matches_estimator_shape(self, document):
        from resume_layout.services.height_estimator import section_shape

        for section in visible_sections(document):
            html = self.template.render_section(section)
            shape = section_shape(section)
            assert html.count('<div class="body-text">') == shape.body_texts, section.section_id
            assert html.count('<div class="bullet-point">') == shape.bullets, section.section_id
            assert html.count('<div class="entry">') == shape.entries, section.section_id


# ======================================================================
# Documents
# ======================================================================


class TestClassicTemplate:
    template = ClassicResumeTemplate()
    style = StyleConfig()

    def test_measurement_document_wraps_every_section(self, document):
        sections = visible_sections(document)

        html = self.template.render_measurement_document(document, sections, self.style, resolve_geometry(self.style))

        assert f'data-section-id="{HEADER_SECTION_ID}"' in html
        for section in sections:
            assert f'data-section-id="{section.section_id}"' in html
        assert 'style="width: 750.00px;"' in html
        assert "page-break-after" not in html

    def test_header_only_on_first_page(self, document):
        sections = visible_sections(document)
        layout = _layout(
            self.style,
            sections,
            [tuple(s.section_id for s in sections[:2]), tuple(s.section_id for s in sections[2:])],
        )

        first = self.template.render_page(layout, layout.pages[0], document)
        second = self.template.render_page(layout, layout.pages[1], document)

        assert HEADER_SECTION_ID in first
        assert "Jane Doe" in first
        assert HEADER_SECTION_ID not in second
        assert 'data-section-id="professional_summary"' in first
        assert 'data-section-id="professional_summary"' not in second

    def test_render_document_page_breaks_and_size(self, document):
        sections = visible_sections(document)
        layout = _layout(self.style, sections, [(sections[0].section_id,), tuple(s.section_id for s in sections[1:])])

        html = self.template.render_document(layout, document)

        assert html.startswith("<!DOCTYPE html>")
        assert "@page { size: 816.00px 1056.00px; margin: 0; }" in html
        assert "page-break-after: always" in html
        assert html.count("data-page-index=") == 2
        assert html.count(f'data-section-id="{HEADER_SECTION_ID}"') == 1

    def test_a4_page_size(self, document):
        style = StyleConfig(page_size="a4")
        layout = _layout(style, [], [()])

        assert "@page { size: 793.33px 1122.67px; margin: 0; }" in self.template.render_document(layout, document)

    def test_contact_line(self, document):
        header = self.template.render_header(document, self.style)

        assert "(555) 123-4567" in header
        assert 'href="mailto:jane@example.com"' in header
        assert "github.com/janedoe" in header
        assert "Software Engineer" in header

    def test_justified_text(self):
        css = self.template.stylesheet(StyleConfig(align_text_left_right=True), resolve_geometry(self.style))

        assert "text-align: justify" in css


class TestModernTemplate:
    template = ModernResumeTemplate()
    style = StyleConfig(template="modern")

    def test_main_column_is_narrower(self):
        geometry = resolve_geometry(self.style)

        assert self.template.main_column_width(geometry) == pytest.approx(816 - 221 - 66)

    def test_sidebar_renders_page_share(self, document):
        sections = [s for s in visible_sections(document) if s.kind not in self.template.sidebar_kinds]
        sidebar = [
            LeftColumnContent(skills=({"title": "Languages", "skills": ["Python"]},), height=40.0),
            LeftColumnContent(interests=({"name": "Chess"},), height=20.0),
        ]
        layout = _layout(
            self.style,
            sections,
            [tuple(s.section_id for s in sections[:2]), tuple(s.section_id for s in sections[2:])],
            sidebar,
        )

        first = self.template.render_page(layout, layout.pages[0], document)
        second = self.template.render_page(layout, layout.pages[1], document)

        assert 'class="sidebar"' in first
        assert "Technical Skills" in first
        assert "Python" in first
        assert "Chess" not in first
        assert "Chess" in second
        assert "Interests" in second
        assert "jane@example.com" in first
        assert "jane@example.com" not in second
        assert 'data-section-id="technical_skills"' not in first + second

    def test_reserved_height_includes_photo(self, document):
        without = self.template.sidebar_reserved_height(document, self.style)
        document["profile_picture"] = "https://example.com/me.png"
        with_photo = self.template.sidebar_reserved_height(document, self.style)

        assert with_photo == pytest.approx(without + 80 + 20)

    def test_header_estimate_leaves_photo_and_contact_to_sidebar(self, document):
        classic = ClassicResumeTemplate().estimate_header_height(document, self.style)
        modern = self.template.estimate_header_height(document, self.style)
        document["profile_picture"] = "https://example.com/me.png"

        # Name, then a job title at 1.5x the sub-header size.
        assert modern == pytest.approx(40 * 1.2 + 4 + 10.5 * 1.5 * 1.2 + 16)
        assert self.template.estimate_header_height(document, self.style) == pytest.approx(modern)
        assert ClassicResumeTemplate().estimate_header_height(document, self.style) == pytest.approx(classic + 132)
        assert modern != pytest.approx(classic)
