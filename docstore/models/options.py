"""
DocStore Document Options — parsed from the inner ``Meta`` class.
"""

from __future__ import annotations

from typing import Optional

from ..types.registry import TypeRegistry, default_registry

__all__ = ["Options"]


class Options:
    """
    Parsed document options from inner Meta class.

    Attributes:
        document_name: Class name of the document
        json_column: Attribute holding the JSON container (None → configured default)
        registry: TypeRegistry used to resolve attribute type names
        abstract: Whether the class is left out of the DocumentRegistry

    ``json_column`` and ``registry`` are inherited from the parent's options;
    ``abstract`` is not.
    """

    __slots__ = (
        "document_name",
        "json_column",
        "registry",
        "abstract",
    )

    def __init__(
        self,
        document_name: str,
        meta: Optional[type] = None,
        parent: Optional[Options] = None,
    ):
        self.document_name = document_name
        self.abstract: bool = getattr(meta, "abstract", False) if meta else False
        self.json_column: Optional[str] = getattr(meta, "json_column", None)
        if self.json_column is None and parent is not None:
            self.json_column = parent.json_column

        # TypeRegistry defines __len__, so an empty one is falsy
        registry = getattr(meta, "registry", None)
        if registry is None and parent is not None:
            registry = parent.registry
        self.registry: TypeRegistry = registry if registry is not None else default_registry

    def __repr__(self) -> str:
        return f"<Options: {self.document_name}>"
