"""Tests for config section models and entry-level validation."""

from __future__ import annotations

import logging

import pytest

from autoprops.config.models import ExclusionsConfig, GeneralConfig, VaultConfig, keep_valid_entries
from autoprops.domain.models import ExclusionRule, PropertyDefinition


class TestKeepValidEntries:
    def test_valid_entries_kept_in_order(self) -> None:
        raw = [{"name": "a"}, {"name": "b", "type": "number"}]
        result = keep_valid_entries(raw, PropertyDefinition, "properties")
        assert [p.name for p in result] == ["a", "b"]

    def test_invalid_entry_dropped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        raw = [{"type": "text"}, {"name": "ok"}]
        with caplog.at_level(logging.WARNING, logger="autoprops.config.models"):
            result = keep_valid_entries(raw, PropertyDefinition, "properties")
        assert [p.name for p in result] == ["ok"]
        assert "Skipping invalid properties entry #0" in caplog.text

    def test_none(self) -> None:
        assert keep_valid_entries(None, ExclusionRule, "exclusions.rules") == []

    def test_not_a_list(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="autoprops.config.models"):
            assert keep_valid_entries({"name": "x"}, PropertyDefinition, "properties") == []
        assert "expected a list" in caplog.text


class TestSections:
    def test_general_defaults(self) -> None:
        general = GeneralConfig()
        assert general.enabled is True
        assert general.show_notifications is True

    def test_vault_skip_dirs(self) -> None:
        assert VaultConfig().skip_dirs == [".obsidian", ".git", ".trash"]

    def test_exclusions_folder_rules(self) -> None:
        config = ExclusionsConfig(folders=["A", "B/C"], use_regex=False)
        rules = config.folder_rules()
        assert [(r.pattern, r.use_regex) for r in rules] == [("A", False), ("B/C", False)]

    def test_exclusions_drop_bad_rules(self) -> None:
        config = ExclusionsConfig(rules=[{"kind": "tag"}, {"pattern": "x"}, "junk"])
        assert config.rules == [ExclusionRule(kind="tag", pattern="")]


class TestPropertyDefinition:
    def test_type_name_case_insensitive(self) -> None:
        assert PropertyDefinition(name="x", type=" Number ").type == "number"

    def test_key_trimmed(self) -> None:
        definition = PropertyDefinition(name="  due ")
        assert definition.key == "due"
        assert definition.is_actionable is True

    def test_blank_name_not_actionable(self) -> None:
        assert PropertyDefinition(name="  ").is_actionable is False

    def test_disabled_not_actionable(self) -> None:
        assert PropertyDefinition(name="x", enabled=False).is_actionable is False
