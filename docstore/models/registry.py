"""
DocStore Document Registry — global registry for all Document subclasses.

Embedding relations name their target by class (or leave it to be derived
from the relation name), so targets are looked up here lazily on first use.
That allows forward references between documents defined in any order.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple, Type, TYPE_CHECKING

from ..faults import UnknownDocumentError

if TYPE_CHECKING:
    from .base import Document

logger = logging.getLogger("docstore.models.registry")

__all__ = ["DocumentRegistry"]


class DocumentRegistry:
    """
    Global registry for all concrete Document subclasses.

    Classes are tracked by name and by ``(module, name)``; lookups prefer a
    class defined in the caller's module when several share a name.
    """

    _documents: Dict[str, Type[Document]] = {}
    _module_documents: Dict[Tuple[str, str], Type[Document]] = {}

    @classmethod
    def register(cls, document_cls: Type[Document]) -> None:
        """Register a document class."""
        name = document_cls.__name__
        cls._documents[name] = document_cls
        cls._module_documents[(document_cls.__module__, name)] = document_cls
        logger.debug(f"Registered document: {document_cls.__module__}.{name}")

    @classmethod
    def get(cls, name: str, module: Optional[str] = None) -> Optional[Type[Document]]:
        """Get document class by name."""
        if module is not None:
            found = cls._module_documents.get((module, name))
            if found is not None:
                return found
        return cls._documents.get(name)

    @classmethod
    def resolve(
        cls, name: str, module: Optional[str] = None, relation: str = ""
    ) -> Type[Document]:
        """
        Get document class by name or fail.

        Raises:
            UnknownDocumentError: If no class with that name was defined
        """
        document_cls = cls.get(name, module)
        if document_cls is None:
            raise UnknownDocumentError(name, relation)
        return document_cls

    @classmethod
    def all_documents(cls) -> Dict[str, Type[Document]]:
        """Get all registered documents."""
        return dict(cls._documents)

    @classmethod
    def reset(cls) -> None:
        """Clear registry (for testing)."""
        cls._documents.clear()
        cls._module_documents.clear()
