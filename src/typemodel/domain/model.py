"""DomainModel — the immutable aggregate handed to downstream consumers.

Holds four tables: types by name, functions by name, and the two-level
operator and predicate resolver tables (type name -> operator/predicate ->
resolver). Every table is exposed as a read-only view, so a model can be
shared between threads without synchronization.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

from typemodel.domain.errors import TypeResolutionError
from typemodel.domain.kinds import DomainOperator, DomainPredicate
from typemodel.domain.types import DomainFunction, DomainType, collection_type_name

if TYPE_CHECKING:
    from typemodel.resolvers.base import (
        FunctionTypeResolver,
        OperationTypeResolver,
        PredicateTypeResolver,
    )


def _freeze_nested[K, V](table: Mapping[str, Mapping[K, V]]) -> Mapping[str, Mapping[K, V]]:
    return MappingProxyType({name: MappingProxyType(dict(inner)) for name, inner in table.items()})


class DomainModel:
    """Read-only view over an assembled type model.

    Instances are produced by :func:`typemodel.assemble`; the constructor
    copies the tables it is given so later changes to those dicts are not
    visible through the model.
    """

    __slots__ = ("_functions", "_operation_resolvers", "_predicate_resolvers", "_types")

    def __init__(
        self,
        types: Mapping[str, DomainType],
        functions: Mapping[str, DomainFunction],
        operation_type_resolvers: Mapping[str, Mapping[DomainOperator, OperationTypeResolver]],
        predicate_type_resolvers: Mapping[str, Mapping[DomainPredicate, PredicateTypeResolver]],
    ) -> None:
        self._types: Mapping[str, DomainType] = MappingProxyType(dict(types))
        self._functions: Mapping[str, DomainFunction] = MappingProxyType(dict(functions))
        self._operation_resolvers = _freeze_nested(operation_type_resolvers)
        self._predicate_resolvers = _freeze_nested(predicate_type_resolvers)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    @property
    def types(self) -> Mapping[str, DomainType]:
        return self._types

    @property
    def functions(self) -> Mapping[str, DomainFunction]:
        return self._functions

    @property
    def operation_type_resolvers(
        self,
    ) -> Mapping[str, Mapping[DomainOperator, OperationTypeResolver]]:
        return self._operation_resolvers

    @property
    def predicate_type_resolvers(
        self,
    ) -> Mapping[str, Mapping[DomainPredicate, PredicateTypeResolver]]:
        return self._predicate_resolvers

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_type(self, name: str | None) -> DomainType | None:
        if name is None:
            return None
        return self._types.get(name)

    def get_entity_type(self, name: str) -> DomainType | None:
        """Return the type named *name* only if it is an entity."""
        domain_type = self._types.get(name)
        if domain_type is None or not domain_type.is_entity:
            return None
        return domain_type

    def get_collection_type(self, element_type: DomainType | str | None) -> DomainType | None:
        """Return the collection type whose elements are *element_type*.

        ``None`` asks for the generic ``Collection`` type.
        """
        element_name = element_type.name if isinstance(element_type, DomainType) else element_type
        candidate = self._types.get(collection_type_name(element_name))
        if candidate is None or not candidate.is_collection:
            return None
        return candidate

    def get_function(self, name: str) -> DomainFunction | None:
        return self._functions.get(name)

    def get_function_type_resolver(self, name: str) -> FunctionTypeResolver | None:
        function = self._functions.get(name)
        return function.result_type_resolver if function is not None else None

    def get_operation_type_resolver(
        self, type_name: str, operator: DomainOperator
    ) -> OperationTypeResolver | None:
        return self._operation_resolvers.get(type_name, {}).get(operator)

    def get_predicate_type_resolver(
        self, type_name: str, predicate: DomainPredicate
    ) -> PredicateTypeResolver | None:
        return self._predicate_resolvers.get(type_name, {}).get(predicate)

    # ------------------------------------------------------------------
    # Resolution entry points
    # ------------------------------------------------------------------

    def resolve_operation_type(
        self,
        type_name: str,
        operator: DomainOperator,
        operand_types: Sequence[DomainType | None],
    ) -> DomainType | None:
        """Resolve *operator* applied to *operand_types* via *type_name*'s table."""
        resolver = self.get_operation_type_resolver(type_name, operator)
        if resolver is None:
            msg = f"No resolver registered for operator {operator.value} on type '{type_name}'"
            raise TypeResolutionError(msg, actual=type_name)
        return resolver.resolve_type(self, operand_types)

    def resolve_predicate_type(
        self,
        type_name: str,
        predicate: DomainPredicate,
        operand_types: Sequence[DomainType | None],
    ) -> DomainType | None:
        """Resolve *predicate* over *operand_types* via *type_name*'s table."""
        resolver = self.get_predicate_type_resolver(type_name, predicate)
        if resolver is None:
            msg = f"No resolver registered for predicate {predicate.value} on type '{type_name}'"
            raise TypeResolutionError(msg, actual=type_name)
        return resolver.resolve_type(self, operand_types)

    def resolve_function_type(
        self,
        name: str,
        argument_types: Sequence[DomainType | None],
    ) -> DomainType | None:
        """Check arity, then delegate to the function's result type resolver."""
        function = self._functions.get(name)
        if function is None:
            msg = f"Unknown function '{name}'"
            raise TypeResolutionError(msg, function=name)
        if not function.accepts_argument_count(len(argument_types)):
            msg = (
                f"Function '{function.signature()}' does not accept "
                f"{len(argument_types)} argument(s)"
            )
            raise TypeResolutionError(msg, function=name, index=len(argument_types))
        return function.result_type_resolver.resolve_type(self, function, argument_types)

    def __repr__(self) -> str:
        return (
            f"DomainModel(types={len(self._types)}, functions={len(self._functions)}, "
            f"operation_resolvers={len(self._operation_resolvers)}, "
            f"predicate_resolvers={len(self._predicate_resolvers)})"
        )
