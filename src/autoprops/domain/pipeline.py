"""Property application plan — normalize, then resolve each definition in order.

``plan_properties`` is pure: it works on a copy of the frontmatter so that
a later definition targeting the same key sees the result of an earlier
one, and returns one :class:`PropertyChange` per actionable definition.
Committing the plan to a real document is the caller's job
(:func:`apply_changes` does it for any mutable mapping).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from autoprops.domain.merge import MergeAction, resolve_merge, values_equal
from autoprops.domain.models import PropertyDefinition
from autoprops.domain.normalize import normalize_value


@dataclass(frozen=True)
class PropertyChange:
    """The decision for one property definition on one document."""

    name: str
    type: str
    action: MergeAction
    value: Any = None
    changed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "action": str(self.action),
            "value": self.value,
            "changed": self.changed,
        }


def plan_properties(
    definitions: Iterable[PropertyDefinition],
    frontmatter: Mapping[str, Any] | None,
    type_hints: Mapping[str, str] | None = None,
    *,
    today: date | None = None,
) -> list[PropertyChange]:
    """Compute the change for every enabled, named definition.

    Args:
        definitions: Definitions in user order.
        frontmatter: Current frontmatter (None if the document has none).
        type_hints: Host property types keyed by lower-cased property name.
        today: Date used for ``today``/``now`` values.
    """
    working: dict[str, Any] = dict(frontmatter or {})
    hints = type_hints or {}
    changes: list[PropertyChange] = []

    for definition in definitions:
        if not definition.is_actionable:
            continue
        name = definition.key
        existing = working.get(name)
        normalized = normalize_value(definition.value, definition.type, today=today)
        decision = resolve_merge(
            existing,
            normalized,
            definition.type,
            hints.get(name.lower()),
            definition.overwrite,
        )

        changed = False
        if decision.action is not MergeAction.SKIP:
            changed = name not in working or not values_equal(
                existing, decision.value, definition.type
            )
            working[name] = decision.value

        changes.append(
            PropertyChange(
                name=name,
                type=str(definition.type),
                action=decision.action,
                value=decision.value,
                changed=changed,
            )
        )

    return changes


def apply_changes(frontmatter: MutableMapping[str, Any], changes: Iterable[PropertyChange]) -> int:
    """Write every change that alters the document into *frontmatter*.

    Returns the number of properties written. Skips and no-op overwrites
    leave the mapping (and its YAML formatting) untouched.
    """
    added = 0
    for change in changes:
        if change.action is MergeAction.SKIP or not change.changed:
            continue
        frontmatter[change.name] = change.value
        added += 1
    return added
