"""
DocStore Document Metaclass — attribute/embedding collection, Meta parsing,
predicate hints, registration.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple, Type, TYPE_CHECKING

from .attributes import Attribute
from .embedding import Embedding
from .options import Options
from .predicates import PredicateHintTable
from .registry import DocumentRegistry

if TYPE_CHECKING:
    from .base import Document

logger = logging.getLogger("docstore.models.metaclass")

__all__ = ["DocumentMeta", "bind_embedding"]


def _relation_helpers(embedding: Embedding) -> Dict[str, Any]:
    """``build_<x>``, ``ensure_<x>`` and ``<relation>_attributes`` for one embedding."""

    def build(self, **attributes):
        return embedding.build(self, attributes)

    def ensure(self):
        return embedding.ensure(self)

    def assign(self, payload):
        embedding.assign(self, payload)

    singular = embedding.singular_name
    build.__name__ = f"build_{singular}"
    ensure.__name__ = f"ensure_{singular}"
    return {
        f"build_{singular}": build,
        f"ensure_{singular}": ensure,
        f"{embedding.name}_attributes": property(fset=assign, doc=f"Mass-assign '{embedding.name}'."),
    }


def bind_embedding(owner: Type[Document], name: str, embedding: Embedding) -> Embedding:
    """
    Install an embedding on ``owner``: the relation accessor itself plus its
    build/ensure/mass-assign helpers. Helpers the class defines itself are
    left alone.
    """
    embedding.bind(owner, name)
    if owner.__dict__.get(name) is not embedding:
        setattr(owner, name, embedding)
    for helper_name, helper in _relation_helpers(embedding).items():
        if helper_name not in owner.__dict__:
            setattr(owner, helper_name, helper)
    owner._embeddings = {**owner._embeddings, name: embedding}
    return embedding


class DocumentMeta(type):
    """
    Metaclass for DocStore documents.

    Handles:
    - Attribute and embedding collection (inherited ones first)
    - Meta class parsing → Options
    - Attribute type resolution against the class's TypeRegistry
    - Predicate hint table per class
    - Relation helper installation
    - Registration in DocumentRegistry
    """

    def __new__(
        mcs,
        name: str,
        bases: Tuple[type, ...],
        namespace: Dict[str, Any],
        **kwargs,
    ) -> DocumentMeta:
        # Don't process the base Document class itself
        parents = [b for b in bases if isinstance(b, DocumentMeta)]
        if not parents:
            return super().__new__(mcs, name, bases, namespace)

        meta_class = namespace.pop("Meta", None)

        attributes: Dict[str, Attribute] = {}
        embeddings: Dict[str, Embedding] = {}
        hints = PredicateHintTable()

        # Inherit from parents
        for parent in parents:
            attributes.update(parent._attributes)
            embeddings.update(parent._embeddings)
            hints.update(parent._predicate_hints)

        new_attributes = {
            key: value for key, value in namespace.items() if isinstance(value, Attribute)
        }
        new_embeddings = {
            key: value for key, value in namespace.items() if isinstance(value, Embedding)
        }

        opts = Options(name, meta_class, parents[0]._meta)

        cls = super().__new__(mcs, name, bases, namespace)

        cls._meta = opts
        cls._attributes = attributes
        cls._embeddings = embeddings
        cls._predicate_hints = hints

        for attr_name, attribute in new_attributes.items():
            attribute.bind(cls, attr_name, opts.registry)
            cls._attributes[attr_name] = attribute

        for relation, embedding in new_embeddings.items():
            bind_embedding(cls, relation, embedding)

        logger.debug(
            f"Prepared document {name}: attributes={list(cls._attributes)}, "
            f"embeddings={list(cls._embeddings)}"
        )

        if not opts.abstract:
            DocumentRegistry.register(cls)

        return cls
