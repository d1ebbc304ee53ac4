"""Shared pytest fixtures and test helpers for autoprops tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from autoprops.config.settings import AutoPropsSettings
from autoprops.infrastructure.vault import Vault

BASIC_CONFIG = """\
[[properties]]
name = "status"
type = "text"
value = "inbox"

[[properties]]
name = "tags"
type = "tags"
value = "Draft, #Review!"

[[properties]]
name = "priority"
type = "number"
value = "abc"

[exclusions]
folders = ["Templates"]
rules = [
    { kind = "tag", pattern = "#private" },
    { kind = "property", pattern = "status:done" },
]
"""


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's AUTOPROPS_* environment out of the tests."""
    monkeypatch.delenv("AUTOPROPS_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary vault directory with a notes folder and the basic config.

    This is the single source of truth for the vault directory layout.
    All vault-related fixtures (vault, _isolated_vault) build on this.
    """
    (tmp_path / "notes").mkdir()
    (tmp_path / "Templates").mkdir()
    write_config(tmp_path, BASIC_CONFIG)
    return tmp_path


@pytest.fixture
def vault(vault_root: Path) -> Vault:
    """Vault over :func:`vault_root` with the basic config loaded."""
    return make_vault(vault_root)


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp vault root so the CLI discovers its config.

    Use via ``@pytest.mark.usefixtures("_isolated_vault")`` on command test
    classes.
    """
    monkeypatch.chdir(vault_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_config(root: Path, text: str) -> Path:
    """Write ``autoprops.toml`` at *root*, replacing any existing one."""
    path = root / "autoprops.toml"
    path.write_text(text, encoding="utf-8")
    return path


def write_note(root: Path, relative: str, content: str) -> Path:
    """Create a note (and its folders) under *root*."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def make_vault(root: Path, **cli_flags: object) -> Vault:
    """Build a Vault from whatever ``autoprops.toml`` *root* holds."""
    settings = AutoPropsSettings.from_cli(vault_root=root, **cli_flags)
    return Vault(settings)
