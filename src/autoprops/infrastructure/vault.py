"""Vault — the single dependency injected into every service.

The Vault owns the vault root, the host's property type hints and the
plugin manager. Its :meth:`edit_frontmatter` context manager is the only
way services modify a note: it serializes the read-modify-write of each
document behind a per-path lock and restores the original file if the
write fails.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ruamel.yaml.comments import CommentedMap

from autoprops.domain.content import parse_frontmatter
from autoprops.domain.models import TargetDocumentView
from autoprops.domain.normalize import stringify
from autoprops.domain.tags import extract_inline_tags
from autoprops.infrastructure.filesystem import (
    find_markdown_files,
    folder_of,
    load_type_hints,
    read_markdown,
    vault_relative,
    write_markdown,
)
from autoprops.plugins.manager import PluginManager

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from autoprops.config.settings import AutoPropsSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DocumentEdit: yielded to callers within edit_frontmatter()
# ---------------------------------------------------------------------------


@dataclass
class DocumentEdit:
    """An open read-modify-write of one note.

    Mutate :attr:`frontmatter` and set :attr:`changed` to have the vault
    write the file back when the block exits.
    """

    path: Path
    frontmatter: dict[str, Any]
    body: str
    view: TargetDocumentView
    changed: bool = False


class Vault:
    """Access point for notes inside one vault directory."""

    def __init__(self, settings: AutoPropsSettings) -> None:
        self._settings = settings
        self._root = settings.vault_root
        self._plugin_manager: PluginManager | None = None
        self._locks: dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings(self) -> AutoPropsSettings:
        return self._settings

    @cached_property
    def type_hints(self) -> dict[str, str]:
        """Host property types keyed by lower-cased property name."""
        return load_type_hints(self._root / self._settings.vault.types_file)

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    @property
    def plugin_manager(self) -> PluginManager | None:
        return self._plugin_manager

    def init_plugins(self) -> PluginManager:
        """Load entry-point plugins and register the built-in ones."""
        if self._plugin_manager is not None:
            return self._plugin_manager

        pm = PluginManager()
        try:
            pm.discover_and_load()
        except Exception:
            logger.warning("Plugin discovery failed", exc_info=True)

        s = self._settings
        if s.general.show_notifications and not (s.quiet or s.json_output):
            from autoprops.plugins.builtins.notify import NotifyPlugin

            pm.register_plugin(NotifyPlugin(), name="notify")

        self._plugin_manager = pm
        return pm

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def resolve(self, path: str | Path) -> Path:
        """Resolve *path* against the vault root (absolute paths pass through)."""
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self._root / candidate
        return candidate

    def relative(self, path: Path) -> str:
        return vault_relative(self._root, path)

    def expand(self, paths: Iterable[str | Path]) -> list[Path]:
        """Turn files and directories into a de-duplicated list of notes."""
        skip = self._settings.vault.skip_dirs
        seen: set[Path] = set()
        results: list[Path] = []
        for raw in paths:
            path = self.resolve(raw)
            found = find_markdown_files(path, skip_dirs=skip) if path.is_dir() else [path]
            for item in found:
                key = item.resolve()
                if key not in seen:
                    seen.add(key)
                    results.append(item)
        return results

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def build_view(
        self,
        path: Path,
        frontmatter: dict[str, Any] | None,
        body: str,
    ) -> TargetDocumentView:
        """Snapshot the metadata the engine needs from one note."""
        return TargetDocumentView(
            inline_tags=tuple(extract_inline_tags(body)),
            frontmatter=_string_keys(frontmatter) if frontmatter is not None else None,
            folder=folder_of(self._root, path),
            path=self.relative(path),
        )

    def read_view(self, path: Path) -> TargetDocumentView:
        """Read a note and return its :class:`TargetDocumentView`.

        Raises:
            OSError: The file cannot be read.
            UnicodeDecodeError: The file is not UTF-8.
            FrontmatterError: The frontmatter block is malformed.
        """
        with self._lock_for(path):
            frontmatter, body = read_markdown(path)
        return self.build_view(path, frontmatter, body)

    @contextmanager
    def edit_frontmatter(self, path: Path) -> Iterator[DocumentEdit]:
        """Read-modify-write a note's frontmatter under its lock.

        The file is written only if the caller sets ``edit.changed``.
        If the write fails, the original content is restored and the
        error propagates.
        """
        with self._lock_for(path):
            original = path.read_text(encoding="utf-8")
            frontmatter, body = parse_frontmatter(original)
            edit = DocumentEdit(
                path=path,
                frontmatter=frontmatter if frontmatter is not None else CommentedMap(),
                body=body,
                view=self.build_view(path, frontmatter, body),
            )
            yield edit

            if not edit.changed:
                return
            try:
                write_markdown(path, edit.frontmatter, edit.body)
            except OSError:
                _restore(path, original)
                raise
            logger.debug("Wrote frontmatter: %s", edit.view.path)

    def _lock_for(self, path: Path) -> threading.Lock:
        key = path.resolve()
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


def _string_keys(frontmatter: dict[Any, Any]) -> dict[str, Any]:
    """YAML allows non-string keys (``2024:``, ``true:``); the host treats every key as text."""
    return {stringify(key): value for key, value in frontmatter.items()}


def _restore(path: Path, original: str) -> None:
    """Put *original* back after a failed write (best-effort)."""
    try:
        path.write_text(original, encoding="utf-8")
    except OSError:
        logger.warning("Failed to restore %s after write error", path)
