from __future__ import annotations

import copy
import logging
from typing import Any

import pytest

from resume_layout.models.layout import PageGeometry

SAMPLE_DOCUMENT: dict[str, Any] = {
    "title": "Jane Doe - Resume",
    "job_title": "Software Engineer",
    "personal_info": {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "5551234567",
        "city": "Kelowna",
        "state": "BC",
        "summary": "Backend engineer focused on data pipelines.",
        "github": "https://github.com/janedoe",
    },
    "section_order": [
        "professional_summary",
        "work_experience",
        "projects",
        "education",
        "technical_skills",
        "interests",
    ],
    "work_experience": [
        {
            "company": "Acme Corp",
            "position": "Software Engineer",
            "city": "Vancouver",
            "state": "BC",
            "start_date": "2021-05-01",
            "current": True,
            "bullet_points": ["Built the ingestion service", "Cut report latency by 40%"],
        },
        {
            "company": "Initech",
            "position": "Intern",
            "start_date": "2020-05",
            "end_date": "2020-08",
            "bullet_points": ["Wrote integration tests"],
        },
    ],
    "projects": [
        {
            "title": "Pagewise",
            "description": "Project artifact analyzer",
            "technologies": ["Python", "FastAPI"],
            "link": "github.com/janedoe/pagewise",
            "bullet_points": ["Detected languages and frameworks"],
        }
    ],
    "education": [
        {
            "institution": "UBC Okanagan",
            "degree": "BSc",
            "field": "Computer Science",
            "start_date": "2017-09",
            "end_date": "2021-04",
            "gpa": 3.8,
        }
    ],
    "skill_categories": [
        {"title": "Languages", "skills": ["Python", "TypeScript"]},
        {"title": "Tools", "skills": ["Docker", "PostgreSQL"]},
    ],
    "interests": [{"name": "Climbing"}, {"name": "Chess"}],
}


@pytest.fixture
def raw_document() -> dict[str, Any]:
    """A fresh copy of the sample resume document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def document(raw_document: dict[str, Any]):
    """The sample document after loading."""
    from resume_layout.services.document import load_document

    return load_document(raw_document)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handlers and levels set by ``configure_logging`` during a test."""
    logger = logging.getLogger("resume_layout")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


def make_geometry(content_height: float, page_size: str = "letter") -> PageGeometry:
    """Geometry with an arbitrary content height, for paginator tests."""
    return PageGeometry(
        page_size=page_size,
        page_width=816.0,
        page_height=content_height + 66.0,
        content_width=750.0,
        content_height=content_height,
        margin_vertical=33.0,
        margin_horizontal=33.0,
    )
