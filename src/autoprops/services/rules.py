"""RulesService — inspect and check the configured rules.

Invalid rules never abort an application pass: the engine silently skips
them. This service is where they surface, so ``autoprops rules validate``
can report what the engine will ignore.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from autoprops.domain.exclusion import compile_folder_pattern, split_property_pattern
from autoprops.domain.normalize import normalize_value
from autoprops.domain.types import ExclusionKind, PropertyType, can_be_appended, parse_property_type
from autoprops.services.base import BaseService
from autoprops.services.result import ServiceResult

_IGNORED = "ignored"
_WARNING = "warning"


def _issue(section: str, index: int, severity: str, message: str) -> dict[str, Any]:
    return {"section": section, "index": index, "severity": severity, "message": message}


class RulesService(BaseService):
    """Read-only views over property definitions and exclusion rules."""

    def list_rules(self) -> ServiceResult:
        """Return every configured property, exclusion rule and folder rule."""
        settings = self._vault.settings
        exclusions = settings.exclusions
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={
                "enabled": settings.general.enabled,
                "properties": [p.model_dump(mode="json") for p in settings.properties],
                "exclusion_rules": [r.model_dump(mode="json") for r in exclusions.rules],
                "excluded_folders": list(exclusions.folders),
                "folders_use_regex": exclusions.use_regex,
            },
            meta={"config_path": str(settings.config_path) if settings.config_path else None},
        )

    def validate_rules(self) -> ServiceResult:
        """Report rules the engine will ignore, and rules that can never merge."""
        settings = self._vault.settings
        hints = self._vault.type_hints
        issues: list[dict[str, Any]] = []

        seen: dict[str, int] = {}
        for index, prop in enumerate(settings.properties):
            if not prop.key:
                issues.append(_issue("properties", index, _IGNORED, "Property name is empty"))
                continue
            host_type = hints.get(prop.key.lower())
            if host_type is not None and parse_property_type(host_type) not in (None, prop.type):
                detail = f"'{prop.key}' is declared {prop.type} but the vault types it {host_type}"
                if can_be_appended(prop.type) and not can_be_appended(prop.type, host_type):
                    detail += "; existing values will never be merged"
                issues.append(_issue("properties", index, _WARNING, detail))
            if prop.key in seen and prop.enabled:
                issues.append(
                    _issue(
                        "properties",
                        index,
                        _WARNING,
                        f"'{prop.key}' is also defined by entry #{seen[prop.key]}; "
                        "both apply in order",
                    )
                )
            seen.setdefault(prop.key, index)

        for index, rule in enumerate(settings.exclusions.rules):
            pattern = rule.pattern.strip()
            if not pattern:
                issues.append(_issue("exclusions.rules", index, _IGNORED, "Pattern is empty"))
            elif rule.kind is ExclusionKind.PROPERTY and not split_property_pattern(pattern)[0]:
                issues.append(
                    _issue("exclusions.rules", index, _IGNORED, f"No property key in {pattern!r}")
                )

        for index, folder in enumerate(settings.exclusions.folders):
            if not folder:
                issues.append(_issue("exclusions.folders", index, _IGNORED, "Folder is empty"))
            elif settings.exclusions.use_regex and compile_folder_pattern(folder) is None:
                issues.append(
                    _issue(
                        "exclusions.folders",
                        index,
                        _IGNORED,
                        f"Invalid regular expression {folder!r}",
                    )
                )

        return ServiceResult(
            ok=True,
            op="validate_rules",
            data={
                "valid": not any(issue["severity"] == _IGNORED for issue in issues),
                "checked": (
                    len(settings.properties)
                    + len(settings.exclusions.rules)
                    + len(settings.exclusions.folders)
                ),
                "issues": issues,
            },
            warnings=[issue["message"] for issue in issues if issue["severity"] == _IGNORED],
        )

    def normalize(self, value: str, type_name: str, *, today: date | None = None) -> ServiceResult:
        """Preview how a raw value is stored for a property type."""
        op = "normalize"
        property_type = parse_property_type(type_name)
        if property_type is None:
            choices = ", ".join(t.value for t in PropertyType)
            return ServiceResult.failure(
                op,
                "UNKNOWN_TYPE",
                f"Unknown property type {type_name!r} (expected one of: {choices})",
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "type": str(property_type),
                "raw": value,
                "value": normalize_value(value, property_type, today=today),
            },
        )
