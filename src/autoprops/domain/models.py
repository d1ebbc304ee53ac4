"""Rule and document models consumed by the engine.

All models use Pydantic with frozen config so a single application pass
can never mutate its inputs.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from autoprops.domain.types import ExclusionKind, PropertyType


class PropertyDefinition(BaseModel):
    """A user-authored rule: inject *value* under *name* with type *type*."""

    model_config = {"frozen": True}

    name: str
    type: PropertyType = PropertyType.TEXT
    value: Any = None
    enabled: bool = True
    overwrite: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def _lowercase_type(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @property
    def key(self) -> str:
        """The frontmatter key this definition targets."""
        return self.name.strip()

    @property
    def is_actionable(self) -> bool:
        return self.enabled and bool(self.key)


class ExclusionRule(BaseModel):
    """Skip documents carrying a tag, or a frontmatter ``key`` / ``key:value``."""

    model_config = {"frozen": True}

    kind: ExclusionKind
    pattern: str = ""


class FolderRule(BaseModel):
    """Skip documents whose folder equals (or regex-matches) *pattern*."""

    model_config = {"frozen": True}

    pattern: str = ""
    use_regex: bool = False


class TargetDocumentView(BaseModel):
    """Read-only snapshot of a document's metadata.

    Attributes:
        inline_tags: Tags found in the body, with their leading ``#``.
        frontmatter: Parsed frontmatter, or None when the document has no
            frontmatter block.
        folder: Vault-relative folder path, ``""`` for the vault root.
    """

    model_config = {"frozen": True}

    inline_tags: tuple[str, ...] = ()
    frontmatter: dict[str, Any] | None = None
    folder: str = ""
    path: str = Field(default="", description="Vault-relative path, for reporting.")
