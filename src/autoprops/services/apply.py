"""ApplyService — inject configured properties into notes.

Pipeline per note: READ → EXCLUDE → PLAN → WRITE → NOTIFY

- READ: parse the note under its lock (files are truth).
- EXCLUDE: folder, tag and property exclusion rules.
- PLAN: normalize each definition and resolve it against the frontmatter.
- WRITE: commit changed properties; untouched notes are not rewritten.
- NOTIFY: ``post_apply`` / ``post_exclude`` plugin hooks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any

from autoprops.config.logging import document_context
from autoprops.domain.content import FrontmatterError
from autoprops.domain.exclusion import is_excluded
from autoprops.domain.models import TargetDocumentView
from autoprops.domain.pipeline import PropertyChange, apply_changes, plan_properties
from autoprops.infrastructure.filesystem import is_markdown
from autoprops.services.base import BaseService
from autoprops.services.result import ServiceResult

if TYPE_CHECKING:
    from autoprops.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class ApplyError(Exception):
    """A single note could not be processed."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ApplyService(BaseService):
    """Applies the configured property definitions to notes."""

    def __init__(self, vault: Vault, *, today: date | None = None) -> None:
        super().__init__(vault)
        self._today = today

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply_file(self, path: str | Path) -> ServiceResult:
        """Apply all enabled properties to one note."""
        op = "apply"
        warnings: list[str] = []
        file_path = self._vault.resolve(path)

        try:
            self._check_target(file_path)
        except ApplyError as exc:
            return ServiceResult.failure(op, exc.code, exc.message, path=str(path))

        inactive = self._inactive_reason()
        if inactive is not None:
            return ServiceResult(
                ok=True,
                op=op,
                data=self._empty_data(file_path),
                warnings=[inactive],
            )

        try:
            data = self._apply(file_path, warnings)
        except ApplyError as exc:
            return ServiceResult.failure(op, exc.code, exc.message, path=str(path))
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def apply_batch(self, paths: Iterable[str | Path]) -> ServiceResult:
        """Apply all enabled properties to every note under *paths*.

        Directories are searched recursively. A note that fails is
        reported in ``errors`` and never stops the rest of the batch.
        """
        op = "apply_batch"
        warnings: list[str] = []
        files = self._vault.expand(paths)
        if not files:
            return ServiceResult.failure(op, "NO_FILES", "No markdown files found")

        inactive = self._inactive_reason()
        if inactive is not None:
            return ServiceResult(
                ok=True,
                op=op,
                data={"files": len(files), "updated": 0, "excluded": 0, "properties_added": 0},
                warnings=[inactive],
            )

        items: list[dict[str, Any]] = []
        errors: list[dict[str, Any]] = []
        for file_path in files:
            try:
                data = self._apply(file_path, warnings)
            except ApplyError as exc:
                errors.append({"path": self._vault.relative(file_path), "error": exc.message})
                warnings.append(f"{self._vault.relative(file_path)}: {exc.message}")
                continue
            items.append(
                {
                    "path": data["path"],
                    "excluded": data["excluded"],
                    "properties_added": data["properties_added"],
                }
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "files": len(files),
                "updated": sum(1 for item in items if item["properties_added"] > 0),
                "excluded": sum(1 for item in items if item["excluded"]),
                "properties_added": sum(item["properties_added"] for item in items),
                "items": items,
                "errors": errors,
            },
            warnings=warnings,
        )

    def plan_file(self, path: str | Path) -> ServiceResult:
        """Show what :meth:`apply_file` would do, without writing."""
        op = "plan"
        file_path = self._vault.resolve(path)
        try:
            self._check_target(file_path)
            view = self._vault.read_view(file_path)
        except ApplyError as exc:
            return ServiceResult.failure(op, exc.code, exc.message, path=str(path))
        except FrontmatterError as exc:
            return ServiceResult.failure(op, "INVALID_FRONTMATTER", str(exc), path=str(path))
        except UnicodeDecodeError:
            return ServiceResult.failure(
                op,
                "INVALID_ENCODING",
                f"{self._vault.relative(file_path)} is not valid UTF-8",
                path=str(path),
            )
        except OSError as exc:
            return ServiceResult.failure(op, "IO_ERROR", str(exc), path=str(path))

        warnings: list[str] = []
        inactive = self._inactive_reason()
        if inactive is not None:
            warnings.append(inactive)

        excluded = self._is_excluded(view)
        changes: list[PropertyChange] = []
        if not excluded:
            changes = plan_properties(
                self._vault.settings.enabled_properties,
                view.frontmatter,
                self._vault.type_hints,
                today=self._today,
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": view.path,
                "folder": view.folder,
                "excluded": excluded,
                "properties_added": sum(1 for c in changes if c.changed),
                "changes": [c.to_dict() for c in changes],
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(self, file_path: Path, warnings: list[str]) -> dict[str, Any]:
        self._check_target(file_path)
        relative = self._vault.relative(file_path)
        settings = self._vault.settings
        changes: list[PropertyChange] = []
        added = 0

        with document_context(relative):
            try:
                with self._vault.edit_frontmatter(file_path) as edit:
                    excluded = self._is_excluded(edit.view)
                    if not excluded:
                        changes = plan_properties(
                            settings.enabled_properties,
                            edit.frontmatter,
                            self._vault.type_hints,
                            today=self._today,
                        )
                        added = apply_changes(edit.frontmatter, changes)
                        edit.changed = added > 0
            except FrontmatterError as exc:
                raise ApplyError("INVALID_FRONTMATTER", str(exc)) from exc
            except UnicodeDecodeError as exc:
                raise ApplyError("INVALID_ENCODING", f"{relative} is not valid UTF-8") from exc
            except OSError as exc:
                raise ApplyError("IO_ERROR", f"Cannot update {relative}: {exc}") from exc

            change_dicts = [c.to_dict() for c in changes]
            if excluded:
                logger.debug("Excluded by rule")
                self._dispatch_event("post_exclude", {"path": relative}, warnings)
            else:
                logger.debug("Applied %d properties", added)
                self._dispatch_event(
                    "post_apply",
                    {"path": relative, "properties_added": added, "changes": change_dicts},
                    warnings,
                )

        return {
            "path": relative,
            "excluded": excluded,
            "properties_added": added,
            "changes": change_dicts,
        }

    def _check_target(self, file_path: Path) -> None:
        if not file_path.is_file():
            raise ApplyError("NOT_FOUND", f"No such file: {file_path}")
        if not is_markdown(file_path):
            raise ApplyError("NOT_MARKDOWN", f"Not a markdown file: {file_path}")

    def _inactive_reason(self) -> str | None:
        settings = self._vault.settings
        if not settings.general.enabled:
            return "Property application is disabled ([general] enabled = false)"
        if not settings.enabled_properties:
            return "No enabled properties to apply"
        return None

    def _is_excluded(self, view: TargetDocumentView) -> bool:
        exclusions = self._vault.settings.exclusions
        return is_excluded(view, exclusions.folder_rules(), exclusions.rules)

    def _empty_data(self, file_path: Path) -> dict[str, Any]:
        return {
            "path": self._vault.relative(file_path),
            "excluded": False,
            "properties_added": 0,
            "changes": [],
        }
