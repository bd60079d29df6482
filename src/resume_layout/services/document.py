"""Resume document loading and section extraction.

Turns loosely-shaped input (straight from the editor or a database row) into
a normalized :class:`ResumeDocument` whose entries carry every key, then
derives the ordered list of visible :class:`Section` objects that layout
works on.

Only a wholly malformed document is fatal (:class:`DocumentError`).  Bad
entries are dropped with a warning and missing fields become blanks.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from resume_layout.constants import (
    DEFAULT_SECTION_ORDER,
    SECTION_DATA_KEYS,
    SectionKind,
)
from resume_layout.models.document import ResumeDocument
from resume_layout.models.layout import DocumentError, Section

logger = logging.getLogger(__name__)

__all__ = ["load_document", "resolve_section_order", "visible_sections"]

# Field kinds: "text", "bool", "list" (of strings), "gpa" (float or None).
_ENTRY_FIELDS: dict[str, dict[str, str]] = {
    "skill_categories": {"title": "text", "skills": "list"},
    "strengths": {"skill_name": "text", "rating": "int"},
    "work_experience": {
        "company": "text",
        "position": "text",
        "city": "text",
        "state": "text",
        "start_date": "text",
        "end_date": "text",
        "current": "bool",
        "bullet_points": "list",
    },
    "education": {
        "institution": "text",
        "degree": "text",
        "field": "text",
        "start_date": "text",
        "end_date": "text",
        "current": "bool",
        "gpa": "gpa",
    },
    "projects": {
        "title": "text",
        "description": "text",
        "bullet_points": "list",
        "technologies": "list",
        "link": "text",
        "start_date": "text",
        "end_date": "text",
        "current": "bool",
    },
    "courses": {"title": "text", "provider": "text", "link": "text"},
    "languages": {"name": "text", "proficiency": "text"},
    "publications": {
        "title": "text",
        "authors": "text",
        "journal": "text",
        "year": "text",
        "doi": "text",
        "link": "text",
    },
    "awards": {"title": "text", "organization": "text", "year": "text", "bullet_points": "list"},
    "volunteer_experience": {
        "organization": "text",
        "position": "text",
        "location": "text",
        "start_date": "text",
        "end_date": "text",
        "current": "bool",
        "bullet_points": "list",
        "hours_per_week": "text",
    },
    "references": {
        "name": "text",
        "title": "text",
        "company": "text",
        "email": "text",
        "phone": "text",
        "relationship": "text",
    },
    "interests": {"name": "text", "icon": "text"},
}

_PERSONAL_FIELDS = ("name", "email", "phone", "city", "state", "summary", "website", "linkedin", "github")

# Top-level keys written by the editor front end.
_DOCUMENT_ALIASES = {
    "jobTitle": "job_title",
    "profilePicture": "profile_picture",
    "personalInfo": "personal_info",
    "sectionOrder": "section_order",
    "deletedSections": "deleted_sections",
    "skillCategories": "skill_categories",
    "workExperience": "work_experience",
    "volunteerExperience": "volunteer_experience",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _text_list(value: Any) -> list[str]:
    """Coerce bullets/skills/technologies into a list of non-empty strings.

    Items may be plain strings or objects such as ``{"description": ...}``
    and ``{"name": ...}``.
    """
    if not isinstance(value, list):
        return []
    items: list[str] = []
    for item in value:
        if isinstance(item, Mapping):
            item = item.get("description", item.get("name", ""))
        text = _text(item)
        if text:
            items.append(text)
    return items


def _gpa(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


_COERCERS = {
    "text": _text,
    "bool": bool,
    "list": _text_list,
    "gpa": _gpa,
    "int": _int,
}


def _normalize_entry(key: str, raw: Mapping[str, Any]) -> dict[str, Any]:
    data = {_snake(k): v for k, v in raw.items()}
    if key == "awards" and "organization" not in data and "issuer" in data:
        data["organization"] = data["issuer"]
    entry: dict[str, Any] = {}
    for name, kind in _ENTRY_FIELDS[key].items():
        entry[name] = _COERCERS[kind](data.get(name))
    return entry


def _normalize_entries(key: str, value: Any) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"Expected a list for {key!r}, got {type(value).__name__}"
        raise DocumentError(msg)
    entries: list[dict[str, Any]] = []
    for position, item in enumerate(value):
        if not isinstance(item, Mapping):
            logger.warning("Dropping malformed %s entry #%d (%s)", key, position, type(item).__name__)
            continue
        entries.append(_normalize_entry(key, item))
    return entries


def _normalize_names(key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"Expected a list of section names for {key!r}"
        raise DocumentError(msg)
    return [str(name) for name in value]


def load_document(raw: Mapping[str, Any]) -> ResumeDocument:
    """Validate and normalize a resume document.

    Args:
        raw: Plain structured data; snake_case or the editor's camelCase keys.

    Returns:
        A :class:`ResumeDocument` whose entries carry every field.

    Raises:
        DocumentError: If *raw* is not a mapping, names a section outside
            the closed enumeration, or holds a non-list entry collection.
    """
    if not isinstance(raw, Mapping):
        msg = f"Resume document must be a mapping, got {type(raw).__name__}"
        raise DocumentError(msg)

    data = {_DOCUMENT_ALIASES.get(k, k): v for k, v in raw.items()}

    personal_raw = data.get("personal_info") or {}
    if not isinstance(personal_raw, Mapping):
        msg = "personal_info must be a mapping"
        raise DocumentError(msg)
    personal = {name: _text(personal_raw.get(name)) for name in _PERSONAL_FIELDS}

    document: ResumeDocument = {
        "title": _text(data.get("title")),
        "job_title": _text(data.get("job_title")),
        "profile_picture": _text(data.get("profile_picture")),
        "personal_info": personal,  # type: ignore[typeddict-item]
        "section_order": _normalize_names("section_order", data.get("section_order")),
        "deleted_sections": _normalize_names("deleted_sections", data.get("deleted_sections")),
    }
    for key in _ENTRY_FIELDS:
        document[key] = _normalize_entries(key, data.get(key))  # type: ignore[literal-required]

    # Validate order names up front so layout never sees an unknown kind.
    resolve_section_order(document)
    return document


def resolve_section_order(document: ResumeDocument) -> list[SectionKind]:
    """Return the user's section order minus deleted sections.

    Raises:
        DocumentError: If a name is not a known section kind.
    """
    names = document.get("section_order") or [kind.value for kind in DEFAULT_SECTION_ORDER]
    try:
        order = [SectionKind.from_name(name) for name in names]
        deleted = {SectionKind.from_name(name) for name in document.get("deleted_sections", [])}
    except ValueError as exc:
        raise DocumentError(str(exc)) from None

    result: list[SectionKind] = []
    for kind in order:
        if kind in deleted:
            continue
        if kind in result:
            logger.warning("Section %s listed twice; keeping the first position", kind.value)
            continue
        result.append(kind)
    return result


def _section_entries(document: ResumeDocument, kind: SectionKind) -> list[Any]:
    if kind is SectionKind.SUMMARY:
        summary = document.get("personal_info", {}).get("summary", "")
        return [summary] if summary else []
    if kind is SectionKind.SKILLS:
        categories = [c for c in document.get("skill_categories", []) if c.get("skills")]
        if categories:
            return categories
        return [s for s in document.get("strengths", []) if s.get("skill_name")]
    return list(document.get(SECTION_DATA_KEYS[kind], []))  # type: ignore[misc]


def visible_sections(
    document: ResumeDocument,
    exclude: frozenset[SectionKind] | set[SectionKind] = frozenset(),
) -> list[Section]:
    """Return the document's non-empty, non-deleted sections in user order.

    Args:
        document: A document returned by :func:`load_document`.
        exclude: Kinds to leave out (e.g. sidebar sections).
    """
    sections: list[Section] = []
    for kind in resolve_section_order(document):
        if kind in exclude:
            continue
        entries = _section_entries(document, kind)
        if not entries:
            continue
        sections.append(Section(section_id=kind.value, kind=kind, entries=tuple(entries)))
    return sections
