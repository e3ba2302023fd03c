"""Shared pytest fixtures for typemodel tests."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from typemodel import DomainModel, assemble

NUMERIC_TYPES = ["Integer", "Long", "Double"]

SAMPLE_DOCUMENT: dict[str, Any] = {
    "types": [
        {
            "name": "Integer",
            "kind": "B",
            "ops": ["+", "-", "*", "/", "%", "M", "P"],
            "preds": ["N", "E", "R"],
            "meta": [{"doc": "A whole number"}],
        },
        {"name": "Long", "kind": "B", "ops": ["+", "-", "*"], "preds": ["N", "E", "R"]},
        {"name": "Double", "kind": "B", "ops": ["+", "-"], "preds": ["N", "E", "R"]},
        {"name": "String", "kind": "B", "ops": ["+"], "preds": ["N", "E", "R"]},
        {"name": "Boolean", "kind": "B", "ops": ["!"], "preds": ["N", "E"]},
        {
            "name": "Person",
            "kind": "E",
            "preds": ["N", "E"],
            "meta": [{"label": "person"}, {"doc": "Somebody"}],
            "attrs": [
                {"name": "name", "type": "String", "meta": [{"doc": "Full name"}]},
                {"name": "manager", "type": "Person"},
                {"name": "address", "type": "Address"},
                {"name": "nicknames", "type": "Collection[String]"},
                {"name": "gender", "type": "Gender"},
            ],
        },
        {"name": "Address", "kind": "E", "attrs": [{"name": "city", "type": "String"}]},
        {
            "name": "Gender",
            "kind": "N",
            "preds": ["N", "E"],
            "vals": [{"name": "MALE", "meta": [{"doc": "Male"}]}, {"name": "FEMALE"}],
        },
        {"name": "Collection[String]", "kind": "C", "preds": ["C"]},
        {"name": "Collection", "kind": "C", "preds": ["C"]},
    ],
    "funcs": [
        {
            "name": "concat",
            "minArgCount": 2,
            "argCount": 2,
            "type": "String",
            "meta": [{"doc": "Concatenates two strings"}],
            "args": [{"name": "a", "type": "String"}, {"name": "b", "type": "String"}],
        },
        {
            "name": "coalesce",
            "minArgCount": 1,
            "argCount": -1,
            "typeResolver": "FirstArgumentDomainFunctionTypeResolver",
            "args": [{"name": "value"}],
        },
        {
            "name": "size",
            "minArgCount": 1,
            "argCount": 1,
            "type": "Integer",
            "args": [{"name": "collection", "type": "Collection"}],
        },
        {
            "name": "abs",
            "minArgCount": 1,
            "argCount": 1,
            "typeResolver": {"WidestDomainFunctionTypeResolver": [NUMERIC_TYPES]},
            "args": [{"name": "number"}],
        },
        {
            "name": "now",
            "minArgCount": 0,
            "argCount": 0,
            "typeResolver": {"FixedDomainFunctionTypeResolver": ["Long"]},
        },
    ],
    "opResolvers": [
        {
            "typeOps": {
                "Integer": ["+", "-", "*", "/", "%"],
                "Long": ["+", "-", "*"],
                "Double": ["+", "-"],
            },
            "resolver": {"WidestDomainOperationTypeResolver": [NUMERIC_TYPES]},
        },
        {
            "typeOps": {"String": ["+"]},
            "resolver": {"FixedDomainOperationTypeResolver": ["String"]},
        },
        {
            "typeOps": {"Boolean": ["!"]},
            "resolver": {"RestrictedDomainOperationTypeResolver": ["Boolean", ["Boolean"]]},
        },
    ],
    "predResolvers": [
        {"resolver": {"FixedDomainPredicateTypeResolver": ["Boolean"]}},
        {
            "typePreds": {"Integer": ["R"], "Long": ["R"]},
            "resolver": {
                "RestrictedDomainPredicateTypeResolver": ["Boolean", ["Integer", "Long"]]
            },
        },
    ],
}


@pytest.fixture
def document() -> dict[str, Any]:
    """A fresh copy of the sample document (safe to mutate)."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def model(document: dict[str, Any]) -> DomainModel:
    """The sample document, assembled without a base model."""
    return assemble(document)


@pytest.fixture
def document_file(tmp_path: Path, document: dict[str, Any]) -> Path:
    """The sample document written to disk as JSON."""
    path = tmp_path / "model.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config discovery inside the test's temp directory."""
    monkeypatch.delenv("TYPEMODEL_CONFIG", raising=False)
    monkeypatch.delenv("TYPEMODEL_STRICT", raising=False)
    monkeypatch.delenv("TYPEMODEL_ASSEMBLY__STRICT_REFERENCES", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler and level changes made by configure_logging (the CLI calls it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package = logging.getLogger("typemodel")
    package_level = package.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.setLevel(package_level)
