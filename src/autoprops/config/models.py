"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, autoprops.toml only contains
overrides. A fresh vault needs only its ``[[properties]]`` entries.

Rule lists are validated entry by entry: an invalid property or exclusion
entry is logged and dropped, the rest of the configuration still loads.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from autoprops.domain.models import ExclusionRule, FolderRule, PropertyDefinition

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def keep_valid_entries(raw: Any, model_cls: type[_M], section: str) -> list[_M]:
    """Validate each entry of *raw* as *model_cls*, dropping invalid ones."""
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        logger.warning("Ignoring [%s]: expected a list of tables", section)
        return []

    valid: list[_M] = []
    for index, entry in enumerate(raw):
        try:
            valid.append(model_cls.model_validate(entry))
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid %s entry #%d: %s",
                section,
                index,
                exc.errors(include_url=False)[0]["msg"],
            )
    return valid


# --- autoprops.toml sections ---


class GeneralConfig(BaseModel):
    """[general] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    show_notifications: bool = True


class VaultConfig(BaseModel):
    """[vault] section."""

    model_config = {"frozen": True}

    types_file: str = ".obsidian/types.json"
    skip_dirs: list[str] = Field(default_factory=lambda: [".obsidian", ".git", ".trash"])


class ExclusionsConfig(BaseModel):
    """[exclusions] section.

    ``folders`` share one ``use_regex`` switch; ``rules`` are tag or
    property rules (``{ kind = "tag", pattern = "#draft" }``).
    """

    model_config = {"frozen": True}

    folders: list[str] = Field(default_factory=list)
    use_regex: bool = False
    rules: list[ExclusionRule] = Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def _drop_invalid_rules(cls, value: Any) -> list[ExclusionRule]:
        return keep_valid_entries(value, ExclusionRule, "exclusions.rules")

    def folder_rules(self) -> list[FolderRule]:
        """Folder patterns as :class:`FolderRule` objects."""
        return [FolderRule(pattern=folder, use_regex=self.use_regex) for folder in self.folders]
