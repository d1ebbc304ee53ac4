"""Property types and classification enums.

The eight property types mirror the widget types of the note application.
Every per-type dispatch in the domain layer (normalize, default value,
appendability, sequence detection) matches exhaustively on
:class:`PropertyType`.
"""

from __future__ import annotations

from enum import StrEnum


class PropertyType(StrEnum):
    """Declared type of a frontmatter property."""

    TEXT = "text"
    MULTITEXT = "multitext"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    DATE = "date"
    DATETIME = "datetime"
    TAGS = "tags"
    ALIASES = "aliases"


class ExclusionKind(StrEnum):
    """What a content exclusion rule inspects."""

    TAG = "tag"
    PROPERTY = "property"


# Types whose values are scalars that must never accumulate into a list.
NON_APPENDABLE_TYPES: frozenset[PropertyType] = frozenset(
    {
        PropertyType.NUMBER,
        PropertyType.DATE,
        PropertyType.DATETIME,
        PropertyType.CHECKBOX,
    }
)


def parse_property_type(value: str | None) -> PropertyType | None:
    """Return the :class:`PropertyType` named by *value*, or None if unknown."""
    if value is None:
        return None
    try:
        return PropertyType(value.strip().lower())
    except ValueError:
        return None


def is_sequence_type(property_type: PropertyType) -> bool:
    """Whether values of *property_type* are stored as a list."""
    match property_type:
        case PropertyType.MULTITEXT | PropertyType.TAGS | PropertyType.ALIASES:
            return True
        case (
            PropertyType.TEXT
            | PropertyType.NUMBER
            | PropertyType.CHECKBOX
            | PropertyType.DATE
            | PropertyType.DATETIME
        ):
            return False


def can_be_appended(declared_type: str, existing_type: str | None = None) -> bool:
    """Whether a value of *declared_type* may be merged into an existing value.

    *existing_type* is the host's own type for the property, if known.
    Unknown type names never block appending.
    """
    for name in (declared_type, existing_type):
        parsed = parse_property_type(name)
        if parsed is not None and parsed in NON_APPENDABLE_TYPES:
            return False
    return True
