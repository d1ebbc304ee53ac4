"""Filesystem operations for markdown notes.

INVARIANT: Files are truth. Every read goes to disk; nothing is cached
between operations except the host's property type hints.

Pure parsing/rendering utilities live in :mod:`autoprops.domain.content`
(correct dependency direction: infrastructure -> domain). This module
handles actual file I/O, path resolution, and file discovery.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from autoprops.domain.content import parse_frontmatter, render_frontmatter

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_markdown(path: Path) -> tuple[dict[str, Any] | None, str]:
    """Read a markdown file, returning ``(frontmatter, body)``.

    ``frontmatter`` is None when the file has no frontmatter block.
    """
    content = path.read_text(encoding="utf-8")
    return parse_frontmatter(content)


def write_markdown(path: Path, frontmatter: dict[str, Any], body: str) -> None:
    """Write frontmatter + body to a markdown file."""
    rendered = render_frontmatter(frontmatter, body)
    path.write_text(rendered, encoding="utf-8")


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() == MARKDOWN_SUFFIX


def vault_relative(vault_root: Path, path: Path) -> str:
    """POSIX path of *path* relative to *vault_root*.

    Paths outside the vault are returned absolute.
    """
    resolved = path.resolve()
    try:
        return resolved.relative_to(vault_root.resolve()).as_posix()
    except ValueError:
        return resolved.as_posix()


def folder_of(vault_root: Path, path: Path) -> str:
    """Vault-relative folder of *path*; ``""`` for files at the vault root."""
    relative = vault_relative(vault_root, path)
    return relative.rpartition("/")[0]


def find_markdown_files(root: Path, *, skip_dirs: Iterable[str] = ()) -> list[Path]:
    """Discover all ``.md`` files under *root*, sorted.

    Any path with a component in *skip_dirs* (``.obsidian``, ``.git``, ...)
    is ignored.
    """
    skipped = frozenset(skip_dirs)
    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file() or not is_markdown(path):
            continue
        if any(part in skipped for part in path.relative_to(root).parts):
            continue
        results.append(path)
    return sorted(results)


# ---------------------------------------------------------------------------
# Host metadata
# ---------------------------------------------------------------------------


def load_type_hints(path: Path) -> dict[str, str]:
    """Read the host's property types file, keyed by lower-cased name.

    The file looks like ``{"types": {"priority": "number", ...}}``.
    A missing or malformed file yields no hints.
    """
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Ignoring unreadable property types file: %s", path)
        return {}

    types = data.get("types") if isinstance(data, dict) else None
    if not isinstance(types, dict):
        return {}
    return {
        str(name).lower(): widget
        for name, widget in types.items()
        if isinstance(widget, str)
    }
