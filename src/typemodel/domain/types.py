"""Type nodes and function signatures of the domain model.

A :class:`DomainType` is a single tagged value class: ``kind`` selects which
payload field is meaningful (``attributes`` for entities, ``enum_values`` for
enums, ``element_type_name`` for collections). Cross references are always
held by type *name* and resolved through the owning model, so entity
attributes may point at their own type or at types declared later.

All objects here compare by identity; "the same type" means "the same
registry entry".
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from typemodel.domain.kinds import DomainOperator, DomainPredicate, DomainTypeKind

if TYPE_CHECKING:
    from typemodel.resolvers.base import FunctionTypeResolver

COLLECTION_PREFIX = "Collection["
COLLECTION_SUFFIX = "]"
GENERIC_COLLECTION_NAME = "Collection"


def extract_documentation(metadata: Iterable[Any]) -> str | None:
    """Return the ``doc`` field of the first metadata record that has one."""
    for record in metadata:
        if isinstance(record, Mapping) and "doc" in record:
            return record["doc"]
    return None


def collection_element_name(name: str) -> str | None:
    """Derive the element type name from a ``Collection[...]`` type name.

    Returns None for the bare generic ``Collection`` or any name that does
    not carry the wrapper.
    """
    if len(name) <= len(COLLECTION_PREFIX) + len(COLLECTION_SUFFIX):
        return None
    if not (name.startswith(COLLECTION_PREFIX) and name.endswith(COLLECTION_SUFFIX)):
        return None
    return name[len(COLLECTION_PREFIX) : -len(COLLECTION_SUFFIX)]


def collection_type_name(element_name: str | None) -> str:
    """Inverse of :func:`collection_element_name`."""
    if element_name is None:
        return GENERIC_COLLECTION_NAME
    return f"{COLLECTION_PREFIX}{element_name}{COLLECTION_SUFFIX}"


@dataclass(frozen=True, eq=False)
class EnumValue:
    """One named value of an enum type."""

    value: str
    documentation: str | None = None
    metadata: tuple[Any, ...] = ()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class EntityAttribute:
    """A named attribute of an entity type.

    ``type_name`` is None when the declared type was not found in the
    registry at wiring time.
    """

    name: str
    type_name: str | None
    documentation: str | None = None
    metadata: tuple[Any, ...] = ()


@dataclass(frozen=True, eq=False)
class DomainType:
    """A named type node, tagged by :class:`DomainTypeKind`."""

    name: str
    kind: DomainTypeKind
    enabled_operators: frozenset[DomainOperator] = frozenset()
    enabled_predicates: frozenset[DomainPredicate] = frozenset()
    metadata: tuple[Any, ...] = ()
    documentation: str | None = None
    attributes: Mapping[str, EntityAttribute] = field(default_factory=dict)
    enum_values: Mapping[str, EnumValue] = field(default_factory=dict)
    element_type_name: str | None = None

    def __post_init__(self) -> None:
        # Payload maps are exposed read-only regardless of what was passed in.
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.enum_values, MappingProxyType):
            object.__setattr__(self, "enum_values", MappingProxyType(dict(self.enum_values)))

    @property
    def is_collection(self) -> bool:
        return self.kind is DomainTypeKind.COLLECTION

    @property
    def is_entity(self) -> bool:
        return self.kind is DomainTypeKind.ENTITY

    @property
    def is_enum(self) -> bool:
        return self.kind is DomainTypeKind.ENUM

    def __str__(self) -> str:
        match self.kind:
            case DomainTypeKind.COLLECTION:
                return collection_type_name(self.element_type_name)
            case DomainTypeKind.BASIC | DomainTypeKind.ENTITY | DomainTypeKind.ENUM:
                return self.name

    def __repr__(self) -> str:
        return f"DomainType(name={self.name!r}, kind={self.kind.value})"


@dataclass(frozen=True, eq=False)
class DomainFunctionArgument:
    """A positional function argument; ``type_name`` None matches any type."""

    name: str | None
    position: int
    type_name: str | None = None
    documentation: str | None = None
    metadata: tuple[Any, ...] = ()

    def __str__(self) -> str:
        type_part = self.type_name if self.type_name is not None else "null"
        if self.name is None:
            return f"DomainFunctionArgument{{index={self.position}, type={type_part}}}"
        return (
            f"DomainFunctionArgument{{name='{self.name}', "
            f"index={self.position}, type={type_part}}}"
        )


@dataclass(frozen=True, eq=False)
class DomainFunction:
    """A function signature together with its result type resolver.

    ``argument_count`` is the upper bound on arguments; a value smaller than
    ``min_argument_count`` marks the function as variadic.
    """

    name: str
    min_argument_count: int
    argument_count: int
    result_type_resolver: FunctionTypeResolver
    result_type_name: str | None = None
    documentation: str | None = None
    arguments: tuple[DomainFunctionArgument, ...] = ()
    metadata: tuple[Any, ...] = ()

    @property
    def is_variadic(self) -> bool:
        return self.argument_count < self.min_argument_count

    def accepts_argument_count(self, count: int) -> bool:
        """Whether *count* arguments fall inside the declared arity bounds."""
        if count < self.min_argument_count:
            return False
        return self.is_variadic or count <= self.argument_count

    def signature(self) -> str:
        """Render ``name (a, b)`` with placeholders for unnamed arguments."""
        if self.arguments:
            names = [
                argument.name if argument.name is not None else f"argument{index + 1}"
                for index, argument in enumerate(self.arguments)
            ]
        else:
            names = [f"argument{index + 1}" for index in range(self.min_argument_count)]
            if self.min_argument_count and self.is_variadic:
                names.append("...")
        return f"{self.name} ({', '.join(names)})"

    def __str__(self) -> str:
        return self.signature()
