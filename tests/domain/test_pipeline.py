"""Tests for planning and applying property changes."""

from __future__ import annotations

from datetime import date

from autoprops.domain.merge import MergeAction
from autoprops.domain.models import PropertyDefinition
from autoprops.domain.pipeline import PropertyChange, apply_changes, plan_properties

TODAY = date(2026, 3, 14)


def _defn(name: str, type_: str = "text", value: object = None, **kwargs: object) -> PropertyDefinition:
    return PropertyDefinition(name=name, type=type_, value=value, **kwargs)


class TestPlanProperties:
    def test_invalid_number_on_missing_key(self) -> None:
        changes = plan_properties([_defn("priority", "number", "abc")], {})
        assert changes == [
            PropertyChange(
                name="priority",
                type="number",
                action=MergeAction.OVERWRITE,
                value=0,
                changed=True,
            )
        ]

    def test_tags_merge_with_existing(self) -> None:
        changes = plan_properties([_defn("tags", "tags", "Draft, #Review!")], {"tags": ["Draft"]})
        assert changes[0].action is MergeAction.MERGE
        assert changes[0].value == ["Draft", "Review"]
        assert changes[0].changed is True

    def test_no_frontmatter(self) -> None:
        changes = plan_properties([_defn("created", "date", "today")], None, today=TODAY)
        assert changes[0].value == "2026-03-14"
        assert changes[0].changed is True

    def test_disabled_and_unnamed_definitions_dropped(self) -> None:
        definitions = [
            _defn("off", value="x", enabled=False),
            _defn("   ", value="x"),
            _defn("on", value="x"),
        ]
        assert [c.name for c in plan_properties(definitions, {})] == ["on"]

    def test_name_is_trimmed(self) -> None:
        changes = plan_properties([_defn(" status ", value="new")], {})
        assert changes[0].name == "status"

    def test_type_hint_blocks_merge(self) -> None:
        changes = plan_properties(
            [_defn("Rating", "text", "5")],
            {"Rating": "4"},
            {"rating": "number"},
        )
        assert changes[0].action is MergeAction.SKIP
        assert changes[0].changed is False

    def test_overwrite_with_same_value_is_unchanged(self) -> None:
        changes = plan_properties([_defn("status", value="open", overwrite=True)], {"status": "open"})
        assert changes[0].action is MergeAction.OVERWRITE
        assert changes[0].changed is False

    def test_overwrite_present_null_key_is_changed(self) -> None:
        changes = plan_properties([_defn("status", value="")], {"status": None})
        assert changes[0].changed is True

    def test_later_definition_sees_earlier_result(self) -> None:
        definitions = [_defn("tags", "tags", "a"), _defn("tags", "tags", "b")]
        changes = plan_properties(definitions, {})
        assert changes[0].value == ["a"]
        assert changes[1].action is MergeAction.MERGE
        assert changes[1].value == ["a", "b"]

    def test_input_not_mutated(self) -> None:
        frontmatter = {"tags": ["x"]}
        plan_properties([_defn("tags", "tags", "y")], frontmatter)
        assert frontmatter == {"tags": ["x"]}


class TestApplyChanges:
    def test_writes_only_changed(self) -> None:
        frontmatter: dict[str, object] = {"status": "open", "n": 5}
        changes = plan_properties(
            [
                _defn("status", value="open", overwrite=True),
                _defn("n", "number", "7"),
                _defn("tags", "tags", "new"),
            ],
            frontmatter,
        )
        assert apply_changes(frontmatter, changes) == 1
        assert frontmatter == {"status": "open", "n": 5, "tags": ["new"]}

    def test_to_dict(self) -> None:
        change = PropertyChange("a", "text", MergeAction.MERGE, ["x"], True)
        assert change.to_dict() == {
            "name": "a",
            "type": "text",
            "action": "merge",
            "value": ["x"],
            "changed": True,
        }
