"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from autoprops.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="apply", data={"path": "a.md"})
        assert result.ok is True
        assert result.op == "apply"
        assert result.data == {"path": "a.md"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure("apply", "NOT_FOUND", "No such file", path="x.md")
        assert result.ok is False
        assert result.data == {}
        assert result.error == ServiceError(
            code="NOT_FOUND", message="No such file", detail={"path": "x.md"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="plan",
            data={"changes": [{"name": "tags", "value": ["a"]}]},
            meta={"config_path": None},
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["changes"][0]["value"] == ["a"]
        assert parsed["meta"]["config_path"] is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]
