"""Tests for PluginManager — discovery, registration, and hook relay."""

from __future__ import annotations

from typing import Any

import pluggy
import pytest

from autoprops.plugins.manager import ENTRY_POINT_GROUP, PluginManager

hookimpl = pluggy.HookimplMarker("autoprops")


class _DummyPlugin:
    """Minimal plugin for registration tests."""

    @hookimpl
    def post_exclude(self, path: str) -> None:
        pass


class _CountingPlugin:
    calls: list[int] = []

    @hookimpl
    def post_apply(self, path: str, properties_added: int, changes: list[dict[str, Any]]) -> None:
        type(self).calls.append(properties_added)


class _Unbuildable:
    def __init__(self) -> None:
        raise RuntimeError("cannot build")


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        assert hasattr(pm.hook, "post_apply")
        assert hasattr(pm.hook, "post_exclude")

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_discover_marks_loaded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        pm = PluginManager()
        groups: list[str] = []
        monkeypatch.setattr(
            pm._pm, "load_setuptools_entrypoints", lambda group: groups.append(group) or 0
        )
        assert pm.is_loaded is False
        pm.discover_and_load()
        assert pm.is_loaded is True
        assert groups == [ENTRY_POINT_GROUP]

    def test_hook_call_reaches_plugin(self) -> None:
        pm = PluginManager()
        _CountingPlugin.calls = []
        pm.register_plugin(_CountingPlugin())
        pm.hook.post_apply(path="a.md", properties_added=2, changes=[])
        assert _CountingPlugin.calls == [2]


class TestNormalizePluginInstances:
    def test_class_registration_is_instantiated(self) -> None:
        pm = PluginManager()
        pm._pm.register(_CountingPlugin, name="counting")
        pm._normalize_plugin_instances()
        plugins = pm._pm.get_plugins()
        assert len(plugins) == 1
        assert isinstance(next(iter(plugins)), _CountingPlugin)
        assert pm.list_plugin_names() == ["counting"]

    def test_failing_constructor_is_dropped(self) -> None:
        pm = PluginManager()
        pm._pm.register(_Unbuildable, name="broken")
        pm._normalize_plugin_instances()
        assert pm.list_plugin_names() == []
