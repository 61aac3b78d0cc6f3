"""
Predicate hints — per-class ``field → hint`` table for an external query engine.

Each bound attribute records the predicate hint of its type (``"int"``,
``"float"``, ``"bool"``, ``"str"``, ``"array"``). A query engine reads the
table to decide how to cast a JSON slot before comparing it, e.g. turning
``height <= 20`` into a comparison of the slot cast to ``int``.

Hosts that need to push hints into their query engine override
``Document.register_predicate_hint`` and call ``super()``.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import Document

__all__ = ["PredicateHintTable", "predicate_hints"]


class PredicateHintTable:
    """Ordered ``field → predicate hint`` mapping; last registration wins."""

    def __init__(self, hints: Optional[Dict[str, str]] = None):
        self._hints: Dict[str, str] = dict(hints or {})

    def register(self, field_name: str, hint: str) -> None:
        self._hints[field_name] = hint

    def get(self, field_name: str, default: Optional[str] = None) -> Optional[str]:
        return self._hints.get(field_name, default)

    def update(self, other: PredicateHintTable) -> None:
        self._hints.update(other._hints)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._hints)

    def __getitem__(self, field_name: str) -> str:
        return self._hints[field_name]

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._hints

    def __iter__(self) -> Iterator[str]:
        return iter(self._hints)

    def __len__(self) -> int:
        return len(self._hints)

    def __repr__(self) -> str:
        return f"<PredicateHintTable: {self._hints}>"


def predicate_hints(document_cls: Type[Document]) -> Dict[str, str]:
    """Return a copy of ``document_cls``'s ``field → hint`` table."""
    return document_cls._predicate_hints.as_dict()
