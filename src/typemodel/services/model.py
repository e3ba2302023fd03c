"""ModelService — assemble documents from disk and run resolution queries.

Documents are layered in order: every ``--base`` document seeds the next one
and the main document goes on top. Plugin resolver factories are collected
once per service and passed to every assembly.

Resolution and document errors are converted into failed ServiceResults
here; the core below this layer never catches them. Type references that
assembly left unset are reported as result warnings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from typemodel.assembly.assembler import ModelAssembler, UnresolvedReference
from typemodel.config.settings import TypemodelSettings
from typemodel.domain.errors import (
    DocumentError,
    TypeResolutionError,
    UnresolvedReferenceError,
)
from typemodel.domain.kinds import lookup_operator, lookup_predicate
from typemodel.domain.model import DomainModel
from typemodel.domain.types import DomainType
from typemodel.plugins.manager import PluginManager
from typemodel.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )


def _resolution_failure(op: str, exc: TypeResolutionError) -> ServiceResult:
    detail = {
        "index": exc.index,
        "actual": exc.actual,
        "expected": list(exc.expected),
        "function": exc.function,
        "argument": exc.argument,
    }
    return _failure(
        op,
        "TYPE_RESOLUTION",
        str(exc),
        **{key: value for key, value in detail.items() if value not in (None, [])},
    )


class ModelService:
    """Loads type model documents and answers type questions about them."""

    def __init__(self, settings: TypemodelSettings, plugins: PluginManager | None = None) -> None:
        self._settings = settings
        self._plugins = plugins
        self._assembler: ModelAssembler | None = None

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _extensions(self) -> dict[str, Callable[..., Any]]:
        if not self._settings.plugins.enabled:
            return {}
        if self._plugins is None:
            self._plugins = PluginManager()
        if not self._plugins.is_loaded:
            names = self._plugins.discover_and_load(local_dir=self._settings.plugin_dir)
            logger.debug("Loaded plugins: %s", names)
        return self._plugins.collect_resolver_factories()

    @property
    def assembler(self) -> ModelAssembler:
        """The assembler (created on first use so plugin discovery stays lazy)."""
        if self._assembler is None:
            self._assembler = ModelAssembler(
                self._extensions(),
                strict_references=self._settings.strict_references,
            )
        return self._assembler

    def load_model(
        self,
        path: Path,
        base_paths: Sequence[Path] = (),
        unresolved: list[UnresolvedReference] | None = None,
    ) -> DomainModel:
        """Assemble *path* on top of the documents in *base_paths*.

        References the assembler leaves unset are appended to *unresolved*.

        Raises:
            OSError: If a document cannot be read.
            DocumentError: If a document is malformed.
        """
        base_model: DomainModel | None = None
        for base_path in base_paths:
            base_model = self._assemble_file(base_path, base_model, unresolved)
        return self._assemble_file(path, base_model, unresolved)

    def _assemble_file(
        self,
        path: Path,
        base_model: DomainModel | None,
        unresolved: list[UnresolvedReference] | None,
    ) -> DomainModel:
        logger.debug("Assembling %s", path)
        return self.assembler.assemble(path.read_bytes(), base_model, unresolved=unresolved)

    def _load(
        self, op: str, path: Path, base_paths: Sequence[Path], warnings: list[str]
    ) -> DomainModel | ServiceResult:
        """Load the model, adding one warning per reference left unset."""
        unresolved: list[UnresolvedReference] = []
        try:
            model = self.load_model(path, base_paths, unresolved)
        except UnresolvedReferenceError as exc:
            return _failure(
                op,
                "UNRESOLVED_REFERENCE",
                str(exc),
                type_name=exc.type_name,
                referenced_by=exc.referenced_by,
            )
        except DocumentError as exc:
            return _failure(op, "INVALID_DOCUMENT", str(exc))
        except OSError as exc:
            return _failure(op, "READ_ERROR", f"Cannot read document: {exc}")
        warnings.extend(str(reference) for reference in unresolved)
        return model

    # ------------------------------------------------------------------
    # inspect
    # ------------------------------------------------------------------

    def inspect(self, path: Path, base_paths: Sequence[Path] = ()) -> ServiceResult:
        """Summarize the types, functions and resolver coverage of a document."""
        op = "inspect"
        warnings: list[str] = []
        loaded = self._load(op, path, base_paths, warnings)
        if isinstance(loaded, ServiceResult):
            return loaded
        model = loaded

        types = [
            {
                "name": domain_type.name,
                "kind": domain_type.kind.value,
                "operators": sorted(o.value for o in domain_type.enabled_operators),
                "predicates": sorted(p.value for p in domain_type.enabled_predicates),
                "documentation": domain_type.documentation,
            }
            for domain_type in model.types.values()
        ]
        functions = [
            {
                "name": function.name,
                "signature": function.signature(),
                "result_type": function.result_type_name,
                "resolver": type(function.result_type_resolver).__name__,
                "documentation": function.documentation,
            }
            for function in model.functions.values()
        ]
        return ServiceResult(
            ok=True,
            op=op,
            warnings=warnings,
            data={
                "types": types,
                "functions": functions,
                "operation_resolvers": {
                    name: sorted(o.value for o in table)
                    for name, table in model.operation_type_resolvers.items()
                    if table
                },
                "predicate_resolvers": {
                    name: sorted(p.value for p in table)
                    for name, table in model.predicate_type_resolvers.items()
                    if table
                },
            },
        )

    # ------------------------------------------------------------------
    # resolve
    # ------------------------------------------------------------------

    @staticmethod
    def _operand_types(
        op: str, model: DomainModel, names: Sequence[str]
    ) -> list[DomainType] | ServiceResult:
        resolved: list[DomainType] = []
        for name in names:
            domain_type = model.get_type(name)
            if domain_type is None:
                return _failure(op, "UNKNOWN_TYPE", f"Unknown type '{name}'", type_name=name)
            resolved.append(domain_type)
        return resolved

    def resolve_operation(
        self,
        path: Path,
        type_name: str,
        operator: str,
        operand_names: Sequence[str],
        base_paths: Sequence[Path] = (),
    ) -> ServiceResult:
        """Resolve the result type of *operator* via *type_name*'s resolver table."""
        op = "resolve_operation"
        parsed = lookup_operator(operator)
        if parsed is None:
            return _failure(op, "UNKNOWN_OPERATOR", f"Unknown operator '{operator}'")
        warnings: list[str] = []
        loaded = self._load(op, path, base_paths, warnings)
        if isinstance(loaded, ServiceResult):
            return loaded
        operands = self._operand_types(op, loaded, operand_names)
        if isinstance(operands, ServiceResult):
            return operands
        try:
            result = loaded.resolve_operation_type(type_name, parsed, operands)
        except TypeResolutionError as exc:
            return _resolution_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            warnings=warnings,
            data={
                "type": type_name,
                "operator": parsed.value,
                "operands": list(operand_names),
                "result": str(result) if result is not None else None,
            },
        )

    def resolve_predicate(
        self,
        path: Path,
        type_name: str,
        predicate: str,
        operand_names: Sequence[str],
        base_paths: Sequence[Path] = (),
    ) -> ServiceResult:
        """Resolve the result type of *predicate* via *type_name*'s resolver table."""
        op = "resolve_predicate"
        parsed = lookup_predicate(predicate)
        if parsed is None:
            return _failure(op, "UNKNOWN_PREDICATE", f"Unknown predicate '{predicate}'")
        warnings: list[str] = []
        loaded = self._load(op, path, base_paths, warnings)
        if isinstance(loaded, ServiceResult):
            return loaded
        operands = self._operand_types(op, loaded, operand_names)
        if isinstance(operands, ServiceResult):
            return operands
        try:
            result = loaded.resolve_predicate_type(type_name, parsed, operands)
        except TypeResolutionError as exc:
            return _resolution_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            warnings=warnings,
            data={
                "type": type_name,
                "predicate": parsed.value,
                "operands": list(operand_names),
                "result": str(result) if result is not None else None,
            },
        )

    def resolve_function(
        self,
        path: Path,
        function: str,
        argument_names: Sequence[str],
        base_paths: Sequence[Path] = (),
    ) -> ServiceResult:
        """Type-check a call of *function* with the given argument types."""
        op = "resolve_function"
        warnings: list[str] = []
        loaded = self._load(op, path, base_paths, warnings)
        if isinstance(loaded, ServiceResult):
            return loaded
        arguments = self._operand_types(op, loaded, argument_names)
        if isinstance(arguments, ServiceResult):
            return arguments
        try:
            result = loaded.resolve_function_type(function, arguments)
        except TypeResolutionError as exc:
            return _resolution_failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            warnings=warnings,
            data={
                "function": function,
                "arguments": list(argument_names),
                "result": str(result) if result is not None else None,
            },
        )
