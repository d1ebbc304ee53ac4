"""Merge resolution — combine a normalized value with an existing one.

Policy:

- an explicit overwrite, or no existing value, always writes the new value;
- scalar types (number, date, datetime, checkbox) are never merged, so a
  conflicting existing value is kept;
- compatible new values are unioned into a list, never silently dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from autoprops.domain.normalize import is_sequence_value, stringify
from autoprops.domain.types import PropertyType, can_be_appended, parse_property_type


class MergeAction(StrEnum):
    """What to do with a property on the target document."""

    SKIP = "skip"
    OVERWRITE = "overwrite"
    MERGE = "merge"


@dataclass(frozen=True)
class MergeDecision:
    """Outcome of :func:`resolve_merge`. ``value`` is None for skips."""

    action: MergeAction
    value: Any = None


def merge_into_list(*values: Any) -> list[Any]:
    """Flatten *values* into one list, keeping the first occurrence of each item.

    Scalars count as one-element sequences.

    Examples:
        >>> merge_into_list(["a", "b"], ["b", "c"])
        ['a', 'b', 'c']
        >>> merge_into_list("old", "new")
        ['old', 'new']
        >>> merge_into_list([1], [True])
        [1, True]
    """
    merged: list[Any] = []
    for value in values:
        items = value if is_sequence_value(value) else [value]
        for item in items:
            if not any(_same_item(item, seen) for seen in merged):
                merged.append(item)
    return merged


def _same_item(a: Any, b: Any) -> bool:
    # `True == 1` in Python; a bool and a number stay separate entries.
    return isinstance(a, bool) == isinstance(b, bool) and a == b


def values_equal(a: Any, b: Any, declared_type: PropertyType | str | None = None) -> bool:
    """Strict equality between two frontmatter values.

    Sequences are equal only to sequences with the same items in the same
    order. Booleans never equal numbers. Date values compare by their text
    form, since YAML loads ``2024-01-01`` as a date object.
    """
    if is_sequence_value(a) or is_sequence_value(b):
        return is_sequence_value(a) and is_sequence_value(b) and list(a) == list(b)
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if parse_property_type(declared_type) in (PropertyType.DATE, PropertyType.DATETIME):
        return stringify(a) == stringify(b)
    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and str(a) == str(b)
    if _both_numbers(a, b):
        return a == b
    return type(a) is type(b) and a == b


def resolve_merge(
    existing: Any,
    new: Any,
    declared_type: PropertyType | str,
    existing_type: str | None = None,
    force_overwrite: bool = False,
) -> MergeDecision:
    """Decide how *new* combines with *existing*.

    Args:
        existing: Value currently stored on the document (None if absent).
        new: Normalized value from the property definition.
        declared_type: Type declared by the property definition.
        existing_type: The host application's own type for the property.
        force_overwrite: Replace the existing value unconditionally.

    Examples:
        >>> resolve_merge("old", "new", "text", None, True)
        MergeDecision(action=<MergeAction.OVERWRITE: 'overwrite'>, value='new')
        >>> resolve_merge(5, 7, "number").action
        <MergeAction.SKIP: 'skip'>
    """
    if force_overwrite or not existing:
        return MergeDecision(MergeAction.OVERWRITE, new)

    if not can_be_appended(declared_type, existing_type):
        return MergeDecision(MergeAction.SKIP)

    if new and not values_equal(new, existing, declared_type):
        return MergeDecision(MergeAction.MERGE, merge_into_list(existing, new))

    return MergeDecision(MergeAction.SKIP)


def _both_numbers(a: Any, b: Any) -> bool:
    return isinstance(a, (int, float)) and isinstance(b, (int, float))
