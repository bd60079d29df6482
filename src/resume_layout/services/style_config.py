"""Style/config resolution.

Normalizes user-tunable visual settings into the numeric values every other
layout component consumes.  Unknown or malformed values never fail: they are
replaced with the documented default and logged.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from resume_layout.constants.layout_constants import (
    FALLBACK_PAGE_SIZE,
    PAGE_SIZES_PT,
    TEMPLATE_IDS,
)

logger = logging.getLogger(__name__)

__all__ = [
    "PRESETS",
    "StyleConfig",
    "apply_preset",
    "list_presets",
    "resolve_style_config",
]


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Resolved visual settings.  All sizes and spacings are CSS pixels."""

    template: str = "classic"
    preset: str = "standard"
    page_size: str = "letter"
    font_family: str = "Times New Roman"
    name_size: float = 40.0
    section_headers_size: float = 14.0
    sub_headers_size: float = 10.5
    body_text_size: float = 11.0
    section_spacing: float = 12.0
    entry_spacing: float = 9.0
    line_spacing: float = 12.0
    top_bottom_margin: float = 33.0
    side_margins: float = 33.0
    align_text_left_right: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Bulk overwrites applied by a preset.  Template and page size are untouched.
PRESETS: dict[str, dict[str, Any]] = {
    "standard": {
        "font_family": "Times New Roman",
        "name_size": 40.0,
        "section_headers_size": 14.0,
        "sub_headers_size": 10.5,
        "body_text_size": 11.0,
        "section_spacing": 12.0,
        "entry_spacing": 9.0,
        "line_spacing": 12.0,
        "top_bottom_margin": 33.0,
        "side_margins": 33.0,
        "align_text_left_right": False,
    },
    "compact": {
        "font_family": "Times New Roman",
        "name_size": 36.0,
        "section_headers_size": 13.5,
        "sub_headers_size": 10.5,
        "body_text_size": 10.5,
        "section_spacing": 8.0,
        "entry_spacing": 6.0,
        "line_spacing": 10.0,
        "top_bottom_margin": 25.0,
        "side_margins": 24.0,
        "align_text_left_right": False,
    },
}

_NUMERIC_FIELDS = (
    "name_size",
    "section_headers_size",
    "sub_headers_size",
    "body_text_size",
    "section_spacing",
    "entry_spacing",
    "line_spacing",
    "top_bottom_margin",
    "side_margins",
)

# Sizes that must stay strictly positive; spacings and margins may be 0.
_POSITIVE_FIELDS = frozenset(
    {"name_size", "section_headers_size", "sub_headers_size", "body_text_size", "line_spacing"}
)

# Keys used by the editor front end.
_CAMEL_ALIASES = {
    "pageSize": "page_size",
    "fontFamily": "font_family",
    "nameSize": "name_size",
    "sectionHeadersSize": "section_headers_size",
    "subHeadersSize": "sub_headers_size",
    "bodyTextSize": "body_text_size",
    "sectionSpacing": "section_spacing",
    "entrySpacing": "entry_spacing",
    "lineSpacing": "line_spacing",
    "topBottomMargin": "top_bottom_margin",
    "sideMargins": "side_margins",
    "alignTextLeftRight": "align_text_left_right",
}

_DEFAULTS = StyleConfig()


def list_presets() -> list[str]:
    """Return sorted names of all presets."""
    return sorted(PRESETS)


def apply_preset(style: StyleConfig, name: str) -> StyleConfig:
    """Return *style* with the numeric fields of preset *name* applied.

    Raises:
        ValueError: If no preset with that name exists.
    """
    try:
        values = PRESETS[name]
    except KeyError:
        available = ", ".join(list_presets())
        msg = f"Unknown preset {name!r}. Available: {available}"
        raise ValueError(msg) from None
    return replace(style, preset=name, **values)


def _coerce_number(key: str, value: Any, default: float) -> float:
    if isinstance(value, bool):
        logger.warning("Ignoring boolean value for %s; using %s", key, default)
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Malformed value %r for %s; using %s", value, key, default)
        return default
    if not math.isfinite(number) or number < 0 or (number == 0 and key in _POSITIVE_FIELDS):
        logger.warning("Out-of-range value %r for %s; using %s", value, key, default)
        return default
    return number


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _normalize_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        normalized[_CAMEL_ALIASES.get(key, key)] = value
    return normalized


def resolve_style_config(raw: Mapping[str, Any] | StyleConfig | None = None) -> StyleConfig:
    """Build a :class:`StyleConfig` from partial user settings.

    Accepts snake_case keys or the editor's camelCase keys.  When *raw* names
    a known preset the preset's values are the starting point and explicit
    fields win over them.

    Args:
        raw: Partial settings, a ready config, or *None* for all defaults.

    Returns:
        A fully populated config.
    """
    if isinstance(raw, StyleConfig):
        return raw
    if raw is None:
        return _DEFAULTS
    if not isinstance(raw, Mapping):
        logger.warning("Style settings must be a mapping, got %s; using defaults", type(raw).__name__)
        return _DEFAULTS

    data = _normalize_keys(raw)
    base = _DEFAULTS

    preset = data.get("preset")
    template_value = data.get("template")
    if preset is None and isinstance(template_value, str) and template_value in PRESETS:
        # The editor stores the preset name in ``template``.
        preset = template_value
        data = {k: v for k, v in data.items() if k != "template"}
    if preset is not None:
        if isinstance(preset, str) and preset in PRESETS:
            base = apply_preset(base, preset)
        else:
            logger.warning("Unknown preset %r; using %s", preset, base.preset)

    values: dict[str, Any] = {}
    overridden = False
    for name in _NUMERIC_FIELDS:
        if name in data and data[name] is not None:
            values[name] = _coerce_number(name, data[name], getattr(base, name))
            overridden = overridden or values[name] != getattr(base, name)

    if data.get("align_text_left_right") is not None:
        values["align_text_left_right"] = _coerce_bool(data["align_text_left_right"])

    font = data.get("font_family")
    if isinstance(font, str) and font.strip():
        values["font_family"] = font.strip()

    template = data.get("template")
    if template is not None:
        template = str(template).strip().lower()
        if template in TEMPLATE_IDS:
            values["template"] = template
        else:
            logger.warning("Unknown template %r; using %s", template, base.template)

    page_size = data.get("page_size")
    if page_size is not None:
        page_size = str(page_size).strip().lower()
        if page_size not in PAGE_SIZES_PT:
            logger.warning("Unknown page size %r; using %s", page_size, FALLBACK_PAGE_SIZE)
            page_size = FALLBACK_PAGE_SIZE
        values["page_size"] = page_size

    if overridden and preset is None:
        values["preset"] = "custom"

    return replace(base, **values)
