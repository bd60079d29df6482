"""
Closed enumeration of resume section kinds.
"""

from __future__ import annotations

from enum import Enum


class SectionKind(str, Enum):
    """Every section a resume can contain.

    Values are the slugs used as section ids throughout layout.
    """

    SUMMARY = "professional_summary"
    WORK_EXPERIENCE = "work_experience"
    PROJECTS = "projects"
    EDUCATION = "education"
    SKILLS = "technical_skills"
    COURSES = "courses"
    INTERESTS = "interests"
    LANGUAGES = "languages"
    PUBLICATIONS = "publications"
    AWARDS = "awards"
    VOLUNTEER = "volunteer_experience"
    REFERENCES = "references"

    @property
    def display_title(self) -> str:
        """Heading shown above the section."""
        return SECTION_TITLES[self]

    @classmethod
    def from_name(cls, name: str) -> SectionKind:
        """Look up a kind by slug or by display title.

        Raises:
            ValueError: If *name* is not a known section.
        """
        key = name.strip()
        for kind in cls:
            if key == kind.value or key.lower() == SECTION_TITLES[kind].lower():
                return kind
        msg = f"Unknown section {name!r}"
        raise ValueError(msg)


SECTION_TITLES: dict[SectionKind, str] = {
    SectionKind.SUMMARY: "Professional Summary",
    SectionKind.WORK_EXPERIENCE: "Work Experience",
    SectionKind.PROJECTS: "Projects",
    SectionKind.EDUCATION: "Education",
    SectionKind.SKILLS: "Technical Skills",
    SectionKind.COURSES: "Courses",
    SectionKind.INTERESTS: "Interests",
    SectionKind.LANGUAGES: "Languages",
    SectionKind.PUBLICATIONS: "Publications",
    SectionKind.AWARDS: "Awards",
    SectionKind.VOLUNTEER: "Volunteer Experience",
    SectionKind.REFERENCES: "References",
}

# Order used when a document does not specify one.
DEFAULT_SECTION_ORDER: tuple[SectionKind, ...] = (
    SectionKind.SUMMARY,
    SectionKind.WORK_EXPERIENCE,
    SectionKind.PROJECTS,
    SectionKind.EDUCATION,
    SectionKind.SKILLS,
    SectionKind.COURSES,
    SectionKind.INTERESTS,
    SectionKind.LANGUAGES,
    SectionKind.PUBLICATIONS,
    SectionKind.AWARDS,
    SectionKind.VOLUNTEER,
    SectionKind.REFERENCES,
)

# Document key holding the entry list of each kind.  The summary lives in
# ``personal_info.summary`` and skills fall back to ``strengths``.
SECTION_DATA_KEYS: dict[SectionKind, str] = {
    SectionKind.WORK_EXPERIENCE: "work_experience",
    SectionKind.PROJECTS: "projects",
    SectionKind.EDUCATION: "education",
    SectionKind.SKILLS: "skill_categories",
    SectionKind.COURSES: "courses",
    SectionKind.INTERESTS: "interests",
    SectionKind.LANGUAGES: "languages",
    SectionKind.PUBLICATIONS: "publications",
    SectionKind.AWARDS: "awards",
    SectionKind.VOLUNTEER: "volunteer_experience",
    SectionKind.REFERENCES: "references",
}

# Sections the modern template moves out of the main flow into its sidebar.
SIDEBAR_KINDS: frozenset[SectionKind] = frozenset({SectionKind.SKILLS, SectionKind.INTERESTS})

# Pseudo section id of the name/contact block in measurement documents.
HEADER_SECTION_ID = "__header__"
