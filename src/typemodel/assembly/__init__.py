"""Assembly layer — parse the serialized document and wire the model."""

from typemodel.assembly.assembler import UnresolvedReference, assemble
from typemodel.assembly.document import DomainDocument, parse_document

__all__ = ["DomainDocument", "UnresolvedReference", "assemble", "parse_document"]
