"""Value normalization — raw property input to its canonical stored form.

``normalize_value`` is total: every input, including None and malformed
values, yields a value of the right shape for the declared type.

- text: ``str``
- multitext, tags, aliases: ``list[str]`` of non-empty trimmed strings
- number: ``int`` or ``float``
- checkbox: ``bool``
- date, datetime: ``YYYY-MM-DD`` string (time of day is dropped)
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime
from typing import Any

from autoprops.domain.tags import sanitize_tag
from autoprops.domain.types import PropertyType, parse_property_type

_TRUE_STRINGS = frozenset({"true", "yes", "1"})
_NOW_TOKENS = frozenset({"today", "now"})


def current_date() -> date:
    """Today's calendar date in UTC."""
    return datetime.now(UTC).date()


def is_sequence_value(value: object) -> bool:
    """Whether *value* is a list-like frontmatter value (strings are not)."""
    return isinstance(value, (list, tuple))


def stringify(value: object) -> str:
    """Render *value* as text the way it reads in frontmatter.

    None becomes ``""``, booleans are lower-case, integral floats drop
    their ``.0`` and sequences are joined with commas.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_sequence_value(value):
        return ",".join(stringify(v) for v in value)  # type: ignore[union-attr]
    return str(value)


def split_values(raw: Any) -> list[str]:
    """Split *raw* into trimmed, non-empty strings.

    Lists keep their elements (each stringified); anything else is
    stringified and split on commas. Order and duplicates are preserved.
    """
    if is_sequence_value(raw):
        pieces = [stringify(v) for v in raw]
    else:
        pieces = stringify(raw).split(",")
    return [p.strip() for p in pieces if p.strip()]


def default_value(declared_type: PropertyType | str) -> Any:
    """Canonical empty value for *declared_type* (used for None input)."""
    match _resolve_type(declared_type):
        case PropertyType.MULTITEXT | PropertyType.TAGS | PropertyType.ALIASES:
            return []
        case PropertyType.NUMBER:
            return 0
        case PropertyType.CHECKBOX:
            return False
        case PropertyType.TEXT | PropertyType.DATE | PropertyType.DATETIME | None:
            return ""


def normalize_value(
    raw: Any,
    declared_type: PropertyType | str,
    *,
    today: date | None = None,
) -> Any:
    """Convert *raw* into the canonical value for *declared_type*.

    Args:
        raw: User-typed string, a stored frontmatter value, or None.
        declared_type: Property type; unknown names pass *raw* through.
        today: Date substituted for the ``today``/``now`` tokens
            (defaults to :func:`current_date`).

    Examples:
        >>> normalize_value("Draft, #Review!", "tags")
        ['Draft', 'Review']
        >>> normalize_value("abc", "number")
        0
        >>> normalize_value("Yes", "checkbox")
        True
    """
    property_type = _resolve_type(declared_type)
    if property_type is None:
        return raw
    if raw is None:
        return default_value(property_type)

    match property_type:
        case PropertyType.TEXT:
            return stringify(raw)
        case PropertyType.MULTITEXT | PropertyType.ALIASES:
            return split_values(raw)
        case PropertyType.TAGS:
            return [tag for tag in (sanitize_tag(p) for p in split_values(raw)) if tag]
        case PropertyType.NUMBER:
            return _to_number(raw)
        case PropertyType.CHECKBOX:
            return _to_bool(raw)
        case PropertyType.DATE | PropertyType.DATETIME:
            return _to_date_string(raw, today)


# ---------------------------------------------------------------------------
# Per-type coercions
# ---------------------------------------------------------------------------


def _resolve_type(declared_type: PropertyType | str) -> PropertyType | None:
    if isinstance(declared_type, PropertyType):
        return declared_type
    return parse_property_type(declared_type)


def _finite_number(value: float) -> int | float:
    if not math.isfinite(value):
        return 0
    return int(value) if value.is_integer() else value


def _to_number(raw: Any) -> int | float:
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return _finite_number(raw)
    if not isinstance(raw, str):
        return 0

    text = raw.strip()
    if not text or "_" in text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return _finite_number(float(text))
    except ValueError:
        return 0


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUE_STRINGS
    return bool(raw)


def _to_date_string(raw: Any, today: date | None) -> str:
    if not raw:
        return ""
    # datetime subclasses date, so it must be checked first.
    if isinstance(raw, datetime):
        moment = raw.astimezone(UTC) if raw.tzinfo is not None else raw
        return moment.date().isoformat()
    if isinstance(raw, date):
        return raw.isoformat()

    text = stringify(raw).strip()
    if text in _NOW_TOKENS:
        return (today or current_date()).isoformat()
    return text
