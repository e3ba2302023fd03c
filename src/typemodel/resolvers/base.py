"""Resolver capability protocols and the shared argument validation rule.

Extensions implement one of the three protocols below; they are structural,
so any object with a matching ``resolve_type`` qualifies.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from typemodel.domain.errors import TypeResolutionError

if TYPE_CHECKING:
    from typemodel.domain.model import DomainModel
    from typemodel.domain.types import DomainFunction, DomainType


@runtime_checkable
class OperationTypeResolver(Protocol):
    """Computes the result type of an operator from its operand types."""

    def resolve_type(
        self, model: DomainModel, operand_types: Sequence[DomainType | None]
    ) -> DomainType | None: ...


@runtime_checkable
class PredicateTypeResolver(Protocol):
    """Computes the result type of a predicate from its operand types."""

    def resolve_type(
        self, model: DomainModel, operand_types: Sequence[DomainType | None]
    ) -> DomainType | None: ...


@runtime_checkable
class FunctionTypeResolver(Protocol):
    """Computes the result type of a function call from its argument types."""

    def resolve_type(
        self,
        model: DomainModel,
        function: DomainFunction,
        argument_types: Sequence[DomainType | None],
    ) -> DomainType | None: ...


def validate_argument_types(
    model: DomainModel,
    function: DomainFunction,
    argument_types: Sequence[DomainType | None],
) -> None:
    """Check supplied argument types against the declared ones, position by position.

    A position matches when either side is unknown, when both sides are
    collections and either lacks an element type, or when both refer to the
    same registry entry. Supplied positions beyond the declared arguments are
    not checked.

    Raises:
        TypeResolutionError: On the first mismatching position.
    """
    for index, supplied in enumerate(argument_types):
        if index >= len(function.arguments):
            break
        argument = function.arguments[index]
        declared = model.get_type(argument.type_name)
        if declared is None or supplied is None:
            continue
        if declared.is_collection and supplied.is_collection:
            if declared.element_type_name is None or supplied.element_type_name is None:
                continue
        if declared is not supplied:
            msg = (
                f"Unsupported argument type '{supplied}' for argument '{argument}' "
                f"of function '{function.name}'! Expected type: {declared}"
            )
            raise TypeResolutionError(
                msg,
                index=index,
                actual=supplied.name,
                expected=(declared.name,),
                function=function.name,
                argument=argument.name,
            )
