"""typemodel — an immutable domain type model with pluggable type resolution."""

from typemodel.assembly.assembler import assemble
from typemodel.domain.errors import (
    DocumentError,
    TypeModelError,
    TypeResolutionError,
    UnresolvedReferenceError,
)
from typemodel.domain.model import DomainModel

__version__ = "0.1.0"

__all__ = [
    "DocumentError",
    "DomainModel",
    "TypeModelError",
    "TypeResolutionError",
    "UnresolvedReferenceError",
    "__version__",
    "assemble",
]
