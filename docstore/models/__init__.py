"""
DocStore Model System — typed documents over a single JSON container.

Public API:
    - Document: Base class for hosts that own a JSON container
    - EmbeddableDocument: Base class for nested sub-documents
    - Attribute / bind_attribute: Typed field definitions
    - EmbedsOne / EmbedsMany / EmbeddedList: Nested document relations
    - DocumentRegistry: Global document class registry
    - PredicateHintTable / predicate_hints: Query engine hints
"""

from .attributes import Attribute, bind_attribute
from .base import Document, EmbeddableDocument
from .embedding import (
    EmbeddedList,
    Embedding,
    EmbedsMany,
    EmbedsOne,
    camelize,
    singularize,
)
from .metaclass import DocumentMeta, bind_embedding
from .options import Options
from .predicates import PredicateHintTable, predicate_hints
from .registry import DocumentRegistry

__all__ = [
    "Attribute",
    "bind_attribute",
    "Document",
    "EmbeddableDocument",
    "DocumentMeta",
    "Options",
    "Embedding",
    "EmbedsOne",
    "EmbedsMany",
    "EmbeddedList",
    "bind_embedding",
    "camelize",
    "singularize",
    "DocumentRegistry",
    "PredicateHintTable",
    "predicate_hints",
]
