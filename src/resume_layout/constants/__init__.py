from __future__ import annotations

from resume_layout.constants.section_kinds import (
    DEFAULT_SECTION_ORDER,
    HEADER_SECTION_ID,
    SECTION_DATA_KEYS,
    SECTION_TITLES,
    SIDEBAR_KINDS,
    SectionKind,
)

__all__ = [
    "DEFAULT_SECTION_ORDER",
    "HEADER_SECTION_ID",
    "SECTION_DATA_KEYS",
    "SECTION_TITLES",
    "SIDEBAR_KINDS",
    "SectionKind",
]
