"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``AUTOPROPS_*`` prefix
  3. TOML file    — ``autoprops.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`autoprops.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from autoprops.config.discovery import find_config
from autoprops.config.models import (
    ExclusionsConfig,
    GeneralConfig,
    VaultConfig,
    keep_valid_entries,
)
from autoprops.domain.models import PropertyDefinition


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``autoprops.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class AutoPropsSettings(BaseSettings):
    """Unified settings for the autoprops CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object. Stored on the
    :class:`~autoprops.commands._context.AppContext` at the CLI root.

    Attributes:
        vault_root: Resolved vault directory (parent of ``autoprops.toml``,
            or CWD if no config found).
        config_path: The TOML file in use, or None.
        properties: Property definitions, applied in this order.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "AUTOPROPS_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (derived from config location, never read from TOML) ---
    vault_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    general: GeneralConfig = Field(default_factory=GeneralConfig)
    vault: VaultConfig = Field(default_factory=VaultConfig)
    exclusions: ExclusionsConfig = Field(default_factory=ExclusionsConfig)
    properties: list[PropertyDefinition] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def _drop_invalid_properties(cls, value: Any) -> list[PropertyDefinition]:
        return keep_valid_entries(value, PropertyDefinition, "properties")

    @property
    def enabled_properties(self) -> list[PropertyDefinition]:
        """Definitions that are switched on, in configured order."""
        return [p for p in self.properties if p.enabled]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        vault_root: Path | None = None,
        **cli_flags: Any,
    ) -> AutoPropsSettings:
        """Construct settings from CLI invocation.

        Discovers ``autoprops.toml`` via walk-up (or explicit *config_path*),
        resolves *vault_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(vault_root)

        resolved_root = vault_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                vault_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
