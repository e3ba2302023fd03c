"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from typemodel.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="inspect", data={"types": []})
        assert result.ok is True
        assert result.op == "inspect"
        assert result.data == {"types": []}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="UNKNOWN_TYPE", message="Unknown type 'X'")
        result = ServiceResult(ok=False, op="resolve_function", error=error)
        assert result.error is not None
        assert result.error.code == "UNKNOWN_TYPE"
        assert result.error.detail == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="resolve_operation", data={"result": "Integer"})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["result"] == "Integer"
        assert parsed["error"] is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="inspect")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
