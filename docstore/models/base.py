"""
DocStore Document Base — typed views over a JSON container.

Usage:
    from docstore import Attribute, Document, EmbeddableDocument, EmbedsMany, EmbedsOne

    class Room(EmbeddableDocument):
        name = Attribute("string")
        area = Attribute("float")

    class House(Document):
        storeys = Attribute("integer", default=1)
        rooms = EmbedsMany()

        class Meta:
            json_column = "details"

    house = House(storeys=2, rooms=[{"name": "hall", "area": "12.5"}])
    house.details   # → {"storeys": 2, "rooms": [{"name": "hall", "area": 12.5}]}

Hosts that persist the container elsewhere (an ORM column, a document store)
override ``container``, or ``get_slot``/``set_slot`` directly.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, Optional

from ..config import get_config
from ..types.base import UNSET
from ..types.primitives import is_truthy
from .attributes import Attribute
from .embedding import Embedding
from .metaclass import DocumentMeta
from .options import Options
from .predicates import PredicateHintTable

__all__ = ["Document", "EmbeddableDocument"]


class Document(metaclass=DocumentMeta):
    """
    Base class for anything that owns a JSON container.

    Args:
        data: Container to adopt (not copied); a new dict when omitted
        **attributes: Mass-assigned after the container is in place
    """

    # Class-level attributes set by metaclass
    _meta: ClassVar[Options] = Options("Document")
    _attributes: ClassVar[Dict[str, Attribute]] = {}
    _embeddings: ClassVar[Dict[str, Embedding]] = {}
    _predicate_hints: ClassVar[PredicateHintTable] = PredicateHintTable()

    def __init__(self, data: Optional[dict] = None, **attributes: Any):
        self.__dict__[self.json_column()] = {} if data is None else data
        if attributes:
            self.assign_attributes(attributes)

    @classmethod
    def json_column(cls) -> str:
        """Name of the attribute holding the container."""
        return cls._meta.json_column or get_config().json_column

    # ── Container protocol ───────────────────────────────────────────

    @property
    def container(self) -> dict:
        return self.__dict__[self.json_column()]

    def get_slot(self, name: str) -> Any:
        """Raw stored value, or UNSET when the key is missing."""
        return self.container.get(name, UNSET)

    def set_slot(self, name: str, value: Any) -> None:
        """Store a raw value; UNSET removes the key."""
        if value is UNSET:
            self.container.pop(name, None)
        else:
            self.container[name] = value

    # ── Predicate hints ──────────────────────────────────────────────

    @classmethod
    def register_predicate_hint(cls, field_name: str, hint: str) -> None:
        cls._predicate_hints.register(field_name, hint)

    # ── Mass assignment ──────────────────────────────────────────────

    def assign_attributes(self, payload: Mapping) -> None:
        """
        Apply an untyped payload field by field.

        Attribute names go through their setters, embedding names (or
        ``<name>_attributes``) through the embedding's mass-assign. The
        destruction marker and unrecognized keys are ignored. A conversion
        fault stops the loop; fields applied before it stay applied.
        """
        marker = get_config().destroy_marker
        for key, value in payload.items():
            if key == marker:
                continue
            if key in self._attributes:
                self._attributes[key].set(self, value)
            elif key in self._embeddings:
                self._embeddings[key].assign(self, value)
            elif isinstance(key, str) and key.endswith("_attributes"):
                embedding = self._embeddings.get(key[: -len("_attributes")])
                if embedding is not None:
                    embedding.assign(self, value)

    def build(self, relation: str, **attributes: Any) -> "EmbeddableDocument":
        """Build a sub-document for ``relation`` (see EmbedsOne/EmbedsMany.build)."""
        return self._embeddings[relation].build(self, attributes)

    def ensure(self, relation: str) -> "EmbeddableDocument":
        return self._embeddings[relation].ensure(self)

    # ── Serialization ────────────────────────────────────────────────

    def as_json(self) -> dict:
        """Deep copy of the container."""
        return copy.deepcopy(self.container)

    def to_dict(self) -> Dict[str, Any]:
        """Typed values of every attribute and embedding (applies defaults)."""
        result: Dict[str, Any] = {}
        for name, attribute in self._attributes.items():
            result[name] = attribute.get(self)
        for name, embedding in self._embeddings.items():
            value = embedding.get(self)
            if embedding.cardinality == "many":
                result[name] = [document.to_dict() for document in value]
            else:
                result[name] = value.to_dict() if value is not None else None
        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.container!r}>"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Document) or type(self) is not type(other):
            return NotImplemented
        return self.container == other.container

    __hash__ = None  # type: ignore[assignment]


class EmbeddableDocument(Document):
    """
    A document nested inside another document's container.

    The container is the very dict stored in the parent, so a wrapper can be
    rebuilt from the parent at any time. Writes are re-announced through the
    parent's ``set_slot`` so the host sees nested changes.
    """

    class Meta:
        abstract = True

    def __init__(
        self,
        data: Optional[dict] = None,
        *,
        parent: Optional[Document] = None,
        relation: Optional[str] = None,
        **attributes: Any,
    ):
        self._container = {} if data is None else data
        self._parent = parent
        self._relation = relation
        self.marked_for_destruction = False
        if attributes:
            self.assign_attributes(attributes)

    @classmethod
    def _embed(cls, container: dict, parent: Document, relation: str) -> EmbeddableDocument:
        return cls(container, parent=parent, relation=relation)

    def _attach(self, parent: Document, relation: str) -> None:
        self._parent = parent
        self._relation = relation

    @property
    def parent(self) -> Optional[Document]:
        return self._parent

    @property
    def container(self) -> dict:
        return self._container

    def set_slot(self, name: str, value: Any) -> None:
        super().set_slot(name, value)
        if self._parent is not None and self._relation:
            self._parent.set_slot(self._relation, self._parent.get_slot(self._relation))

    def assign_attributes(self, payload: Mapping) -> None:
        self.marked_for_destruction = is_truthy(payload.get(get_config().destroy_marker))
        super().assign_attributes(payload)
