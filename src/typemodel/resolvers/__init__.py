"""Resolver layer — capability protocols, built-in strategies, factory registry.

Resolvers are stateless: they keep only their constructor arguments and
receive the model on every call.
"""

from typemodel.resolvers.base import (
    FunctionTypeResolver,
    OperationTypeResolver,
    PredicateTypeResolver,
    validate_argument_types,
)
from typemodel.resolvers.registry import ResolverRegistry

__all__ = [
    "FunctionTypeResolver",
    "OperationTypeResolver",
    "PredicateTypeResolver",
    "ResolverRegistry",
    "validate_argument_types",
]
