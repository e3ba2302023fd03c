"""Model assembly — the only phase in which the type model is mutable.

Steps, in order:

1. Seed the tables from an optional base model (entries are shared, not copied).
2. Creation pass: one node per type record, registered by name.
3. Wiring pass: entity attribute types and collection element types are
   looked up by name, so forward and cyclic references work.
4. Functions: arguments in declared order, result type resolver from the
   document or the declared-result default.
5. Operator, then predicate resolver declarations.

Malformed pieces (unknown codes, unknown factories, dangling type names) are
dropped with a debug log line. With ``strict_references`` a dangling type name
raises :class:`UnresolvedReferenceError` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from typemodel.assembly.document import (
    ArgumentRecord,
    DomainDocument,
    FunctionRecord,
    OperationResolverRecord,
    PredicateResolverRecord,
    TypeRecord,
    parse_document,
)
from typemodel.domain.errors import UnresolvedReferenceError
from typemodel.domain.kinds import (
    DomainOperator,
    DomainPredicate,
    DomainTypeKind,
    parse_kind,
    parse_operator,
    parse_predicate,
)
from typemodel.domain.model import DomainModel
from typemodel.domain.types import (
    DomainFunction,
    DomainFunctionArgument,
    DomainType,
    EntityAttribute,
    EnumValue,
    collection_element_name,
    extract_documentation,
)
from typemodel.resolvers.builtin import DeclaredResultFunctionTypeResolver
from typemodel.resolvers.registry import ResolverFactory, ResolverRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnresolvedReference:
    """A type name that was not registered when the assembler looked it up."""

    type_name: str
    referenced_by: str

    def __str__(self) -> str:
        return f"Unresolved type '{self.type_name}' referenced by {self.referenced_by}"


@dataclass
class _Tables:
    """Mutable working copy of the four model tables."""

    types: dict[str, DomainType] = field(default_factory=dict)
    functions: dict[str, DomainFunction] = field(default_factory=dict)
    operation_resolvers: dict[str, dict[DomainOperator, Any]] = field(default_factory=dict)
    predicate_resolvers: dict[str, dict[DomainPredicate, Any]] = field(default_factory=dict)
    unresolved: list[UnresolvedReference] = field(default_factory=list)

    @classmethod
    def seeded_from(cls, base_model: DomainModel | None) -> _Tables:
        if base_model is None:
            return cls()
        return cls(
            types=dict(base_model.types),
            functions=dict(base_model.functions),
            operation_resolvers={
                name: dict(table) for name, table in base_model.operation_type_resolvers.items()
            },
            predicate_resolvers={
                name: dict(table) for name, table in base_model.predicate_type_resolvers.items()
            },
        )

    def freeze(self) -> DomainModel:
        return DomainModel(
            self.types,
            self.functions,
            self.operation_resolvers,
            self.predicate_resolvers,
        )


def _decode_codes[T](codes: Iterable[Any], decode: Any, owner: str, label: str) -> frozenset[T]:
    decoded: set[T] = set()
    for code in codes:
        value = decode(code)
        if value is None:
            logger.debug("Dropping unknown %s code %r on %s", label, code, owner)
            continue
        decoded.add(value)
    return frozenset(decoded)


class ModelAssembler:
    """Builds :class:`DomainModel` instances from serialized documents.

    An assembler holds only its factory registry and options, so one instance
    may assemble any number of documents.
    """

    def __init__(
        self,
        extensions: ResolverRegistry | Mapping[str, ResolverFactory] | None = None,
        *,
        strict_references: bool = False,
    ) -> None:
        if isinstance(extensions, ResolverRegistry):
            self._registry = extensions
        else:
            self._registry = ResolverRegistry(extensions)
        self._strict_references = strict_references

    @property
    def registry(self) -> ResolverRegistry:
        return self._registry

    def assemble(
        self,
        source: DomainDocument | Mapping[str, Any] | str | bytes,
        base_model: DomainModel | None = None,
        *,
        unresolved: list[UnresolvedReference] | None = None,
    ) -> DomainModel:
        """Assemble *source*, layered on top of *base_model* when given.

        References left unset are appended to *unresolved* when a list is passed.
        """
        document = parse_document(source)
        tables = _Tables.seeded_from(base_model)

        created = self._create_types(document.types, tables)
        self._wire_types(created, tables)
        self._build_functions(document.funcs, tables)
        self._install_operation_resolvers(document.op_resolvers, tables)
        self._install_predicate_resolvers(document.pred_resolvers, tables)

        model = tables.freeze()
        if unresolved is not None:
            unresolved.extend(tables.unresolved)
        logger.debug(
            "Assembled model: %d types, %d functions (base model: %s)",
            len(model.types),
            len(model.functions),
            "yes" if base_model is not None else "no",
        )
        return model

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _create_types(
        self, records: list[TypeRecord], tables: _Tables
    ) -> dict[str, tuple[TypeRecord, DomainType]]:
        """Creation pass. Returns the records that produced a node, by type name."""
        created: dict[str, tuple[TypeRecord, DomainType]] = {}
        for record in records:
            kind = parse_kind(record.kind)
            if kind is None:
                logger.debug("Dropping type %s with unknown kind code %r", record.name, record.kind)
                continue

            owner = f"type {record.name}"
            metadata = tuple(record.meta)
            node = DomainType(
                name=record.name,
                kind=kind,
                enabled_operators=_decode_codes(record.ops, parse_operator, owner, "operator"),
                enabled_predicates=_decode_codes(record.preds, parse_predicate, owner, "predicate"),
                metadata=metadata,
                documentation=extract_documentation(metadata),
            )
            if node.is_enum:
                node = replace(node, enum_values=self._enum_values(record))

            tables.types[record.name] = node
            created[record.name] = (record, node)
        return created

    @staticmethod
    def _enum_values(record: TypeRecord) -> dict[str, EnumValue]:
        values: dict[str, EnumValue] = {}
        for value in record.vals:
            metadata = tuple(value.meta)
            values[value.name] = EnumValue(value.name, extract_documentation(metadata), metadata)
        return values

    def _wire_types(
        self, created: dict[str, tuple[TypeRecord, DomainType]], tables: _Tables
    ) -> None:
        """Wiring pass over the nodes created from this document."""
        for name, (record, node) in created.items():
            match node.kind:
                case DomainTypeKind.ENTITY:
                    attributes: dict[str, EntityAttribute] = {}
                    for attribute in record.attrs:
                        metadata = tuple(attribute.meta)
                        attributes[attribute.name] = EntityAttribute(
                            name=attribute.name,
                            type_name=self._reference(
                                tables, attribute.type, f"attribute {name}.{attribute.name}"
                            ),
                            documentation=extract_documentation(metadata),
                            metadata=metadata,
                        )
                    tables.types[name] = replace(node, attributes=attributes)
                case DomainTypeKind.COLLECTION:
                    element_name = collection_element_name(name)
                    if element_name is None:
                        continue
                    element = self._reference(tables, element_name, f"collection type {name}")
                    tables.types[name] = replace(node, element_type_name=element)
                case DomainTypeKind.BASIC | DomainTypeKind.ENUM:
                    pass

    def _reference(self, tables: _Tables, type_name: str | None, referenced_by: str) -> str | None:
        """Resolve *type_name* against the registry; None means wildcard/unresolved."""
        if type_name is None:
            return None
        if type_name in tables.types:
            return type_name
        if self._strict_references:
            msg = f"Unknown type '{type_name}' referenced by {referenced_by}"
            raise UnresolvedReferenceError(msg, type_name=type_name, referenced_by=referenced_by)
        logger.debug("Unresolved type reference %r from %s", type_name, referenced_by)
        tables.unresolved.append(UnresolvedReference(type_name, referenced_by))
        return None

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def _build_functions(self, records: list[FunctionRecord], tables: _Tables) -> None:
        for record in records:
            arguments = tuple(
                self._argument(tables, record.name, position, argument)
                for position, argument in enumerate(record.args)
            )
            metadata = tuple(record.meta)

            result_type_name: str | None = None
            resolver = self._registry.instantiate(record.type_resolver)
            if resolver is None:
                if record.type_resolver is not None:
                    logger.debug(
                        "Function %s: unknown result type resolver %r, using declared result",
                        record.name,
                        record.type_resolver,
                    )
                result_type_name = self._reference(
                    tables, record.type, f"result of function {record.name}"
                )
                resolver = DeclaredResultFunctionTypeResolver()

            declared_count = len(arguments)
            tables.functions[record.name] = DomainFunction(
                name=record.name,
                min_argument_count=(
                    record.min_arg_count if record.min_arg_count is not None else declared_count
                ),
                argument_count=record.arg_count if record.arg_count is not None else declared_count,
                result_type_resolver=resolver,
                result_type_name=result_type_name,
                documentation=extract_documentation(metadata),
                arguments=arguments,
                metadata=metadata,
            )

    def _argument(
        self, tables: _Tables, function_name: str, position: int, record: ArgumentRecord
    ) -> DomainFunctionArgument:
        metadata = tuple(record.meta)
        label = record.name if record.name is not None else f"#{position}"
        return DomainFunctionArgument(
            name=record.name,
            position=position,
            type_name=self._reference(
                tables, record.type, f"argument {label} of function {function_name}"
            ),
            documentation=extract_documentation(metadata),
            metadata=metadata,
        )

    # ------------------------------------------------------------------
    # Operator and predicate resolvers
    # ------------------------------------------------------------------

    def _install_operation_resolvers(
        self, declarations: list[OperationResolverRecord], tables: _Tables
    ) -> None:
        for declaration in declarations:
            resolver = self._registry.instantiate(declaration.resolver)
            if resolver is None:
                logger.debug("Skipping operator resolver declaration %r", declaration.resolver)
                continue
            for type_name, codes in declaration.type_ops.items():
                if type_name not in tables.types or not isinstance(codes, list):
                    logger.debug("Skipping operator resolver entry for type %r", type_name)
                    continue
                table = tables.operation_resolvers.setdefault(type_name, {})
                for operator in _decode_codes(
                    codes, parse_operator, f"operator resolver for {type_name}", "operator"
                ):
                    table[operator] = resolver

    def _install_predicate_resolvers(
        self, declarations: list[PredicateResolverRecord], tables: _Tables
    ) -> None:
        for declaration in declarations:
            resolver = self._registry.instantiate(declaration.resolver)
            if resolver is None:
                logger.debug("Skipping predicate resolver declaration %r", declaration.resolver)
                continue

            if declaration.is_wildcard:
                # Reaches the types registered so far, base model included.
                for type_name, domain_type in tables.types.items():
                    if not domain_type.enabled_predicates:
                        continue
                    table = tables.predicate_resolvers.setdefault(type_name, {})
                    for predicate in domain_type.enabled_predicates:
                        table[predicate] = resolver
                continue

            for type_name, codes in (declaration.type_preds or {}).items():
                if type_name not in tables.types or not isinstance(codes, list):
                    logger.debug("Skipping predicate resolver entry for type %r", type_name)
                    continue
                table = tables.predicate_resolvers.setdefault(type_name, {})
                for predicate in _decode_codes(
                    codes, parse_predicate, f"predicate resolver for {type_name}", "predicate"
                ):
                    table[predicate] = resolver


def assemble(
    document: DomainDocument | Mapping[str, Any] | str | bytes,
    base_model: DomainModel | None = None,
    extensions: ResolverRegistry | Mapping[str, ResolverFactory] | None = None,
    *,
    strict_references: bool = False,
) -> DomainModel:
    """Assemble a :class:`DomainModel` from a serialized document.

    Args:
        document: JSON text, a decoded mapping, or a parsed ``DomainDocument``.
        base_model: Previously assembled model whose tables seed this one;
            the document's entries override by key.
        extensions: Resolver factories by name. They take precedence over
            built-ins of the same name.
        strict_references: Raise on type names that are not registered
            instead of leaving the reference unset.

    Raises:
        DocumentError: If the document does not have the expected shape.
        UnresolvedReferenceError: Dangling type name with ``strict_references``.
    """
    assembler = ModelAssembler(extensions, strict_references=strict_references)
    return assembler.assemble(document, base_model)
