"""Data contracts for resume documents.

These TypedDicts describe the plain structured data the layout engine
consumes.  Templates and the estimator depend ONLY on these contracts (not on
whatever storage produced them), so persistence can evolve independently.
After :func:`resume_layout.services.document.load_document` every entry
carries all of its keys, with blanks for missing values.
"""

from __future__ import annotations

from typing import TypedDict

__all__ = [
    "AwardEntry",
    "CourseEntry",
    "EducationEntry",
    "InterestEntry",
    "LanguageEntry",
    "PersonalInfo",
    "ProjectEntry",
    "PublicationEntry",
    "ReferenceEntry",
    "ResumeDocument",
    "SkillCategoryEntry",
    "StrengthEntry",
    "VolunteerEntry",
    "WorkEntry",
]


class PersonalInfo(TypedDict, total=False):
    """Name and contact details shown in the resume header."""

    name: str
    email: str
    phone: str
    city: str
    state: str
    summary: str
    website: str
    linkedin: str
    github: str


class SkillCategoryEntry(TypedDict, total=False):
    """A titled group of skills, e.g. ``Languages: Python, Go``."""

    title: str
    skills: list[str]


class StrengthEntry(TypedDict, total=False):
    skill_name: str
    rating: int


class WorkEntry(TypedDict, total=False):
    """A single job."""

    company: str
    position: str
    city: str
    state: str
    start_date: str  # ISO date string or human-readable
    end_date: str
    current: bool
    bullet_points: list[str]


class EducationEntry(TypedDict, total=False):
    institution: str
    degree: str
    field: str
    start_date: str
    end_date: str
    current: bool
    gpa: float | None


class ProjectEntry(TypedDict, total=False):
    title: str
    description: str
    bullet_points: list[str]
    technologies: list[str]
    link: str
    start_date: str
    end_date: str
    current: bool


class CourseEntry(TypedDict, total=False):
    title: str
    provider: str
    link: str


class LanguageEntry(TypedDict, total=False):
    name: str
    proficiency: str


class PublicationEntry(TypedDict, total=False):
    title: str
    authors: str
    journal: str
    year: str
    doi: str
    link: str


class AwardEntry(TypedDict, total=False):
    title: str
    organization: str
    year: str
    bullet_points: list[str]


class VolunteerEntry(TypedDict, total=False):
    organization: str
    position: str
    location: str
    start_date: str
    end_date: str
    current: bool
    bullet_points: list[str]
    hours_per_week: str


class ReferenceEntry(TypedDict, total=False):
    name: str
    title: str
    company: str
    email: str
    phone: str
    relationship: str


class InterestEntry(TypedDict, total=False):
    name: str
    icon: str


class ResumeDocument(TypedDict, total=False):
    """Top-level bundle handed to the layout engine."""

    title: str
    job_title: str
    profile_picture: str
    personal_info: PersonalInfo
    section_order: list[str]
    deleted_sections: list[str]
    skill_categories: list[SkillCategoryEntry]
    strengths: list[StrengthEntry]
    work_experience: list[WorkEntry]
    education: list[EducationEntry]
    projects: list[ProjectEntry]
    courses: list[CourseEntry]
    languages: list[LanguageEntry]
    publications: list[PublicationEntry]
    awards: list[AwardEntry]
    volunteer_experience: list[VolunteerEntry]
    references: list[ReferenceEntry]
    interests: list[InterestEntry]
