"""Built-in resolver strategies.

Operator and predicate resolvers share their behaviour; the two families only
differ in the wording of their error messages and in which table the
assembler installs them into. Function resolvers additionally receive the
function being called so they can validate its declared argument types.

Each class is its own factory: the constructor takes the arguments listed in
the document, in order.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from typemodel.domain.errors import TypeResolutionError
from typemodel.resolvers.base import validate_argument_types

if TYPE_CHECKING:
    from typemodel.domain.model import DomainModel
    from typemodel.domain.types import DomainFunction, DomainType


def _format_types(type_names: Sequence[str]) -> str:
    return "[" + ", ".join(type_names) + "]"


def _unsupported_operand(
    family: str, index: int, operand: DomainType | None, allowed: Sequence[str]
) -> TypeResolutionError:
    actual = operand.name if operand is not None else None
    msg = (
        f"The {family} operand at index {index} with the domain type '{operand}' "
        f"is unsupported! Expected one of the following types: {_format_types(allowed)}"
    )
    return TypeResolutionError(msg, index=index, actual=actual, expected=allowed)


def _narrowest_index(
    ordered_types: Sequence[str],
    operand_types: Sequence[DomainType | None],
    on_missing: Callable[[int, DomainType | None], TypeResolutionError],
) -> int:
    """Smallest position in *ordered_types* among the operands (0 without operands)."""
    type_index: int | None = None
    for index, operand in enumerate(operand_types):
        name = operand.name if operand is not None else None
        if name not in ordered_types:
            raise on_missing(index, operand)
        position = ordered_types.index(name)
        type_index = position if type_index is None else min(type_index, position)
    return 0 if type_index is None else type_index


# ---------------------------------------------------------------------------
# Operand strategies (operator + predicate families)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _FixedOperandResolver:
    """Ignores its operands and always yields one type."""

    type_name: str

    def resolve_type(
        self, model: DomainModel, operand_types: Sequence[DomainType | None]
    ) -> DomainType | None:
        return model.get_type(self.type_name)


@dataclass(frozen=True)
class _RestrictedOperandResolver:
    """Every operand must be one of ``supported_types``."""

    returning_type: str
    supported_types: tuple[str, ...]

    family: ClassVar[str] = "operation"

    def __post_init__(self) -> None:
        object.__setattr__(self, "supported_types", tuple(self.supported_types))

    def resolve_type(
        self, model: DomainModel, operand_types: Sequence[DomainType | None]
    ) -> DomainType | None:
        for index, operand in enumerate(operand_types):
            if operand is None or operand.name not in self.supported_types:
                raise _unsupported_operand(self.family, index, operand, self.supported_types)
        return model.get_type(self.returning_type)


@dataclass(frozen=True)
class _OperandRestrictedOperandResolver:
    """Like the restricted resolver, with one allowed-type list per operand position."""

    returning_type: str
    supported_types_per_operand: tuple[tuple[str, ...], ...]

    family: ClassVar[str] = "operation"

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "supported_types_per_operand",
            tuple(tuple(types) for types in self.supported_types_per_operand),
        )

    def resolve_type(
        self, model: DomainModel, operand_types: Sequence[DomainType | None]
    ) -> DomainType | None:
        expected_count = len(self.supported_types_per_operand)
        if len(operand_types) != expected_count:
            msg = (
                f"The {self.family} expects {expected_count} operand(s) "
                f"but got {len(operand_types)}"
            )
            raise TypeResolutionError(msg, index=min(len(operand_types), expected_count))
        for index, operand in enumerate(operand_types):
            allowed = self.supported_types_per_operand[index]
            if operand is None or operand.name not in allowed:
                raise _unsupported_operand(self.family, index, operand, allowed)
        return model.get_type(self.returning_type)


@dataclass(frozen=True)
class _WidestOperandResolver:
    """Picks the earliest entry of a narrow-to-wide ordering present among the operands.

    With operands ``Long`` and ``Integer`` over ``[Integer, Long, Double]``
    the result is ``Integer``: the minimum index wins.
    """

    types: tuple[str, ...]

    family: ClassVar[str] = "operation"

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", tuple(self.types))

    def resolve_type(
        self, model: DomainModel, operand_types: Sequence[DomainType | None]
    ) -> DomainType | None:
        index = _narrowest_index(
            self.types,
            operand_types,
            lambda i, operand: _unsupported_operand(self.family, i, operand, self.types),
        )
        if not self.types:
            return None
        return model.get_type(self.types[index])


class FixedOperationTypeResolver(_FixedOperandResolver):
    pass


class RestrictedOperationTypeResolver(_RestrictedOperandResolver):
    pass


class OperandRestrictedOperationTypeResolver(_OperandRestrictedOperandResolver):
    pass


class WidestOperationTypeResolver(_WidestOperandResolver):
    pass


class FixedPredicateTypeResolver(_FixedOperandResolver):
    pass


class RestrictedPredicateTypeResolver(_RestrictedOperandResolver):
    family = "predicate"


class OperandRestrictedPredicateTypeResolver(_OperandRestrictedOperandResolver):
    family = "predicate"


class WidestPredicateTypeResolver(_WidestOperandResolver):
    family = "predicate"


# ---------------------------------------------------------------------------
# Function strategies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DeclaredResultFunctionTypeResolver:
    """Default for functions without a resolver: validate, then return the declared result."""

    def resolve_type(
        self,
        model: DomainModel,
        function: DomainFunction,
        argument_types: Sequence[DomainType | None],
    ) -> DomainType | None:
        validate_argument_types(model, function, argument_types)
        return model.get_type(function.result_type_name)


@dataclass(frozen=True)
class FirstArgumentFunctionTypeResolver:
    """Validate, then return the type of the first argument."""

    def resolve_type(
        self,
        model: DomainModel,
        function: DomainFunction,
        argument_types: Sequence[DomainType | None],
    ) -> DomainType | None:
        validate_argument_types(model, function, argument_types)
        return argument_types[0] if argument_types else None


@dataclass(frozen=True)
class FixedFunctionTypeResolver:
    """Validate, then return a fixed type."""

    type_name: str

    def resolve_type(
        self,
        model: DomainModel,
        function: DomainFunction,
        argument_types: Sequence[DomainType | None],
    ) -> DomainType | None:
        validate_argument_types(model, function, argument_types)
        return model.get_type(self.type_name)


@dataclass(frozen=True)
class WidestFunctionTypeResolver:
    """Widest rule applied to function arguments."""

    types: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", tuple(self.types))

    def resolve_type(
        self,
        model: DomainModel,
        function: DomainFunction,
        argument_types: Sequence[DomainType | None],
    ) -> DomainType | None:
        def unsupported(index: int, operand: DomainType | None) -> TypeResolutionError:
            argument = function.arguments[index] if index < len(function.arguments) else None
            label = str(argument) if argument is not None else f"argument{index + 1}"
            msg = (
                f"Unsupported argument type '{operand}' for argument '{label}' of function "
                f"'{function.name}'! Expected one of the following types: "
                f"{_format_types(self.types)}"
            )
            return TypeResolutionError(
                msg,
                index=index,
                actual=operand.name if operand is not None else None,
                expected=self.types,
                function=function.name,
                argument=argument.name if argument is not None else None,
            )

        index = _narrowest_index(self.types, argument_types, unsupported)
        if not self.types:
            return None
        return model.get_type(self.types[index])


BUILTIN_FACTORIES: dict[str, Callable[..., object]] = {
    "FixedDomainOperationTypeResolver": FixedOperationTypeResolver,
    "RestrictedDomainOperationTypeResolver": RestrictedOperationTypeResolver,
    "OperandRestrictedDomainOperationTypeResolver": OperandRestrictedOperationTypeResolver,
    "WidestDomainOperationTypeResolver": WidestOperationTypeResolver,
    "FixedDomainPredicateTypeResolver": FixedPredicateTypeResolver,
    "RestrictedDomainPredicateTypeResolver": RestrictedPredicateTypeResolver,
    "OperandRestrictedDomainPredicateTypeResolver": OperandRestrictedPredicateTypeResolver,
    "WidestDomainPredicateTypeResolver": WidestPredicateTypeResolver,
    "FirstArgumentDomainFunctionTypeResolver": FirstArgumentFunctionTypeResolver,
    "FixedDomainFunctionTypeResolver": FixedFunctionTypeResolver,
    "WidestDomainFunctionTypeResolver": WidestFunctionTypeResolver,
}
