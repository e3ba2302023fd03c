"""Exception hierarchy for the type model.

Resolution failures always propagate to whoever invoked ``resolve_type``;
nothing in the core catches them.
"""

from __future__ import annotations

from collections.abc import Sequence


class TypeModelError(Exception):
    """Base class for every error raised by typemodel."""


class TypeResolutionError(TypeModelError):
    """Operand or argument types violate a resolver's constraint.

    Attributes:
        index: Position of the offending operand/argument, if known.
        actual: Name of the offending type (None for an unknown type).
        expected: Expected type names. One entry for a function argument
            mismatch; the allowed set for restricted resolvers.
        function: Function name for argument mismatches.
        argument: Argument name for argument mismatches.
    """

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        actual: str | None = None,
        expected: Sequence[str] = (),
        function: str | None = None,
        argument: str | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.actual = actual
        self.expected = tuple(expected)
        self.function = function
        self.argument = argument


class DocumentError(TypeModelError):
    """The serialized document cannot be parsed into the expected shape."""


class UnresolvedReferenceError(DocumentError):
    """A type name does not exist in the registry (strict assembly only)."""

    def __init__(self, message: str, *, type_name: str, referenced_by: str) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.referenced_by = referenced_by
