"""Tests for merge resolution."""

from __future__ import annotations

from datetime import date

import pytest

from autoprops.domain.merge import (
    MergeAction,
    MergeDecision,
    merge_into_list,
    resolve_merge,
    values_equal,
)


class TestMergeIntoList:
    def test_union_keeps_first_occurrence(self) -> None:
        assert merge_into_list(["a", "b"], ["b", "c"]) == ["a", "b", "c"]

    def test_scalars_become_items(self) -> None:
        assert merge_into_list("old", "new") == ["old", "new"]

    def test_duplicates_within_one_value_removed(self) -> None:
        assert merge_into_list(["a", "a"], ["a"]) == ["a"]

    def test_unhashable_items(self) -> None:
        assert merge_into_list([{"k": 1}], [{"k": 1}, {"k": 2}]) == [{"k": 1}, {"k": 2}]

    def test_bool_and_number_kept_apart(self) -> None:
        assert merge_into_list([1, False], [True, 0, 1]) == [1, False, True, 0]

    def test_int_and_float_collapse(self) -> None:
        assert merge_into_list([2], [2.0]) == [2]


class TestValuesEqual:
    def test_sequences_ordered(self) -> None:
        assert values_equal(["a", "b"], ["a", "b"]) is True
        assert values_equal(["a", "b"], ["b", "a"]) is False

    def test_sequence_never_equals_scalar(self) -> None:
        assert values_equal(["a"], "a") is False

    def test_bool_never_equals_number(self) -> None:
        assert values_equal(True, 1) is False
        assert values_equal(False, False) is True

    def test_string_never_equals_number(self) -> None:
        assert values_equal("5", 5) is False

    def test_numbers(self) -> None:
        assert values_equal(2, 2.0) is True

    def test_dates_compare_by_text(self) -> None:
        assert values_equal(date(2024, 1, 1), "2024-01-01", "date") is True
        assert values_equal(date(2024, 1, 1), "2024-01-01") is False

    def test_str_subclass(self) -> None:
        class Quoted(str):
            pass

        assert values_equal(Quoted("x"), "x") is True


class TestResolveMerge:
    def test_force_overwrite(self) -> None:
        assert resolve_merge("old", "new", "text", None, True) == MergeDecision(
            MergeAction.OVERWRITE, "new"
        )

    def test_force_overwrite_scalar(self) -> None:
        assert resolve_merge(5, 7, "number", None, True) == MergeDecision(MergeAction.OVERWRITE, 7)

    @pytest.mark.parametrize("existing", [None, "", [], 0, False])
    def test_falsy_existing_overwritten(self, existing: object) -> None:
        decision = resolve_merge(existing, "v", "text")
        assert decision == MergeDecision(MergeAction.OVERWRITE, "v")

    def test_non_appendable_skips(self) -> None:
        assert resolve_merge(5, 7, "number") == MergeDecision(MergeAction.SKIP)
        assert resolve_merge(True, False, "checkbox").action is MergeAction.SKIP
        assert resolve_merge("2024-01-01", "2026-01-01", "date").action is MergeAction.SKIP

    def test_host_type_blocks_merge(self) -> None:
        decision = resolve_merge("3", "4", "text", "number")
        assert decision.action is MergeAction.SKIP

    def test_tags_union(self) -> None:
        decision = resolve_merge(["a", "b"], ["b", "c"], "tags")
        assert decision == MergeDecision(MergeAction.MERGE, ["a", "b", "c"])

    def test_text_scalars_merge_into_list(self) -> None:
        decision = resolve_merge("old", "new", "text")
        assert decision == MergeDecision(MergeAction.MERGE, ["old", "new"])

    def test_identical_value_skips(self) -> None:
        assert resolve_merge(["a"], ["a"], "tags").action is MergeAction.SKIP
        assert resolve_merge("same", "same", "text").action is MergeAction.SKIP

    def test_empty_new_value_skips(self) -> None:
        assert resolve_merge(["a"], [], "tags").action is MergeAction.SKIP
        assert resolve_merge("keep", "", "text").action is MergeAction.SKIP

    def test_skip_carries_no_value(self) -> None:
        assert resolve_merge(1, 2, "number").value is None
