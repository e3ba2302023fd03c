"""Type kinds, operators, predicates and their single-character wire codes.

Codes that are not listed here decode to ``None`` so callers can drop them.
"""

from __future__ import annotations

from enum import StrEnum


class DomainTypeKind(StrEnum):
    """Discriminator for the four kinds of domain type."""

    BASIC = "BASIC"
    ENUM = "ENUM"
    ENTITY = "ENTITY"
    COLLECTION = "COLLECTION"


class DomainOperator(StrEnum):
    """Operators a domain type may enable."""

    UNARY_PLUS = "UNARY_PLUS"
    UNARY_MINUS = "UNARY_MINUS"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLICATION = "MULTIPLICATION"
    DIVISION = "DIVISION"
    MODULO = "MODULO"
    NOT = "NOT"


class DomainPredicate(StrEnum):
    """Predicate families a domain type may enable."""

    NULLNESS = "NULLNESS"
    COLLECTION = "COLLECTION"
    RELATIONAL = "RELATIONAL"
    EQUALITY = "EQUALITY"


KIND_CODES: dict[str, DomainTypeKind] = {
    "B": DomainTypeKind.BASIC,
    "C": DomainTypeKind.COLLECTION,
    "E": DomainTypeKind.ENTITY,
    "N": DomainTypeKind.ENUM,
}

OPERATOR_CODES: dict[str, DomainOperator] = {
    "M": DomainOperator.UNARY_MINUS,
    "P": DomainOperator.UNARY_PLUS,
    "/": DomainOperator.DIVISION,
    "-": DomainOperator.MINUS,
    "%": DomainOperator.MODULO,
    "*": DomainOperator.MULTIPLICATION,
    "+": DomainOperator.PLUS,
    "!": DomainOperator.NOT,
}

PREDICATE_CODES: dict[str, DomainPredicate] = {
    "N": DomainPredicate.NULLNESS,
    "C": DomainPredicate.COLLECTION,
    "R": DomainPredicate.RELATIONAL,
    "E": DomainPredicate.EQUALITY,
}


def parse_kind(code: object) -> DomainTypeKind | None:
    """Decode a kind code (``B``/``C``/``E``/``N``)."""
    if not isinstance(code, str):
        return None
    return KIND_CODES.get(code)


def parse_operator(code: object) -> DomainOperator | None:
    """Decode an operator code, returning None for anything unrecognized."""
    if not isinstance(code, str):
        return None
    return OPERATOR_CODES.get(code)


def parse_predicate(code: object) -> DomainPredicate | None:
    """Decode a predicate code, returning None for anything unrecognized."""
    if not isinstance(code, str):
        return None
    return PREDICATE_CODES.get(code)


def lookup_operator(token: str) -> DomainOperator | None:
    """Accept either an operator name (``plus``, ``PLUS``) or its wire code (``+``)."""
    by_name = token.strip().upper()
    if by_name in DomainOperator.__members__:
        return DomainOperator[by_name]
    return parse_operator(token.strip())


def lookup_predicate(token: str) -> DomainPredicate | None:
    """Accept either a predicate name (``equality``) or its wire code (``E``)."""
    by_name = token.strip().upper()
    if by_name in DomainPredicate.__members__:
        return DomainPredicate[by_name]
    return parse_predicate(token.strip())
