"""Pydantic models for the serialized type model document.

Field names on the wire are compact (``minArgCount``, ``typeOps`` ...); the
models accept them through aliases. Parsing is permissive: list-valued fields
that carry anything other than a list are read as empty, and unknown keys are
kept but ignored. Only a document that cannot be read as this shape at all is
rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from typemodel.domain.errors import DocumentError


def _as_list(value: Any) -> Any:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> Any:
    return value if isinstance(value, Mapping) else {}


def _as_dict_or_none(value: Any) -> Any:
    return None if value is None else _as_dict(value)


LenientList = Annotated[list[Any], BeforeValidator(_as_list)]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class AttributeRecord(_Record):
    """Entity attribute: ``{name, type, meta}``."""

    name: str
    type: str | None = None
    meta: LenientList = Field(default_factory=list)


class EnumValueRecord(_Record):
    """Enum value: ``{name, meta}``."""

    name: str
    meta: LenientList = Field(default_factory=list)


class TypeRecord(_Record):
    """Type declaration.

    ``kind`` is a single-character code; ``attrs`` applies to entities and
    ``vals`` to enums.
    """

    name: str
    kind: str | None = None
    ops: LenientList = Field(default_factory=list)
    preds: LenientList = Field(default_factory=list)
    meta: LenientList = Field(default_factory=list)
    attrs: Annotated[list[AttributeRecord], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )
    vals: Annotated[list[EnumValueRecord], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )


class ArgumentRecord(_Record):
    """Function argument: ``{name, type, meta}``; both name and type are optional."""

    name: str | None = None
    type: str | None = None
    meta: LenientList = Field(default_factory=list)


class FunctionRecord(_Record):
    """Function declaration."""

    name: str
    min_arg_count: int | None = Field(default=None, alias="minArgCount")
    arg_count: int | None = Field(default=None, alias="argCount")
    type: str | None = None
    type_resolver: Any = Field(default=None, alias="typeResolver")
    meta: LenientList = Field(default_factory=list)
    args: Annotated[list[ArgumentRecord], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )


class OperationResolverRecord(_Record):
    """Operator resolver declaration: ``{typeOps: {type: [code]}, resolver}``."""

    type_ops: Annotated[dict[str, Any], BeforeValidator(_as_dict)] = Field(
        default_factory=dict, alias="typeOps"
    )
    resolver: Any = None


class PredicateResolverRecord(_Record):
    """Predicate resolver declaration.

    When ``typePreds`` is absent the declaration is a wildcard; check with
    :attr:`is_wildcard` rather than comparing against None.
    """

    type_preds: Annotated[dict[str, Any] | None, BeforeValidator(_as_dict_or_none)] = Field(
        default=None, alias="typePreds"
    )
    resolver: Any = None

    @property
    def is_wildcard(self) -> bool:
        return "type_preds" not in self.model_fields_set


class DomainDocument(_Record):
    """Top-level document: ``{types, funcs, opResolvers, predResolvers}``."""

    types: list[TypeRecord]
    funcs: Annotated[list[FunctionRecord], BeforeValidator(_as_list)] = Field(
        default_factory=list
    )
    op_resolvers: Annotated[list[OperationResolverRecord], BeforeValidator(_as_list)] = Field(
        default_factory=list, alias="opResolvers"
    )
    pred_resolvers: Annotated[list[PredicateResolverRecord], BeforeValidator(_as_list)] = Field(
        default_factory=list, alias="predResolvers"
    )


def parse_document(source: DomainDocument | Mapping[str, Any] | str | bytes) -> DomainDocument:
    """Read *source* (JSON text, a decoded mapping, or a document) as a DomainDocument.

    Raises:
        DocumentError: If *source* does not have the document shape.
    """
    if isinstance(source, DomainDocument):
        return source
    try:
        if isinstance(source, (str, bytes)):
            return DomainDocument.model_validate_json(source)
        if isinstance(source, Mapping):
            return DomainDocument.model_validate(dict(source))
    except ValidationError as exc:
        msg = f"Invalid type model document: {exc.error_count()} error(s)\n{exc}"
        raise DocumentError(msg) from exc
    msg = f"Unsupported document source type: {type(source).__name__}"
    raise DocumentError(msg)
