"""
DocStore Embeddings — typed sub-documents nested in the parent's JSON container.

    class Door(EmbeddableDocument):
        colour = Attribute("string")

    class Room(EmbeddableDocument):
        name = Attribute("string")

    class House(Document):
        door = EmbedsOne()          # target derived from the name → Door
        rooms = EmbedsMany()        # → Room

    house.build_door(colour="red")    # data["door"] = {"colour": "red"}
    house.rooms_attributes = [{"name": "hall"}, {"name": "den", "_destroy": "1"}]
    [r.name for r in house.rooms]     # → ["hall"]

Wrappers are rebuilt from the container on every read and never cached, so
writes made through any path are always visible. Every mutation of a
sub-container is re-announced through the parent's ``set_slot``.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, MutableSequence
from typing import Any, Dict, Iterator, List, Optional, Type, Union, TYPE_CHECKING

from ..config import get_config
from ..types.base import UNSET
from ..types.primitives import is_truthy
from .registry import DocumentRegistry

if TYPE_CHECKING:
    from .base import Document, EmbeddableDocument

logger = logging.getLogger("docstore.models.embedding")

__all__ = [
    "Embedding",
    "EmbedsOne",
    "EmbedsMany",
    "EmbeddedList",
    "camelize",
    "singularize",
]


def singularize(word: str) -> str:
    """``rooms`` → ``room``, ``galleries`` → ``gallery``, ``addresses`` → ``address``."""
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith(("sses", "shes", "ches", "xes", "zes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def camelize(word: str) -> str:
    """``front_door`` → ``FrontDoor``."""
    return "".join(part[:1].upper() + part[1:] for part in word.split("_") if part)


class Embedding:
    """
    Base embedding relation.

    Args:
        document: Target document class, or its class name. Defaults to the
            class named after the relation (singular for embeds-many).
    """

    cardinality = ""

    def __init__(self, document: Union[str, Type[EmbeddableDocument], None] = None):
        self._document_cls: Optional[Type[EmbeddableDocument]] = None
        self._class_name: Optional[str] = None
        if isinstance(document, str):
            self._class_name = document
        else:
            self._document_cls = document

        # Set by bind()
        self.name: str = ""
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name} → {self.class_name}>"

    def bind(self, owner: Type[Document], name: str) -> Embedding:
        self.name = name
        self.owner = owner
        return self

    @property
    def singular_name(self) -> str:
        return self.name

    @property
    def class_name(self) -> str:
        if self._document_cls is not None:
            return self._document_cls.__name__
        return self._class_name or camelize(self.singular_name)

    @property
    def document_class(self) -> Type[EmbeddableDocument]:
        """
        Target class, resolved through the DocumentRegistry on first use.

        Raises:
            UnknownDocumentError: If the target was never defined
        """
        if self._document_cls is None:
            module = self.owner.__module__ if self.owner is not None else None
            self._document_cls = DocumentRegistry.resolve(self.class_name, module, self.name)
            logger.debug(f"Resolved embedding '{self.name}' → {self._document_cls!r}")
        return self._document_cls

    # ── Helpers ──────────────────────────────────────────────────────

    def _wrap(self, instance: Document, container: dict) -> EmbeddableDocument:
        return self.document_class._embed(container, instance, self.name)

    def _adopt(self, instance: Document, value: Any) -> dict:
        """
        Container for ``value`` (a document or a payload mapping), attached to ``instance``.

        A detached document hands over its own container. A document that
        already belongs to a parent is copied, so each container keeps a
        single owner.
        """
        if isinstance(value, Mapping):
            document = self._wrap(instance, {})
            document.assign_attributes(value)
            return document.container
        if not isinstance(value, self.document_class):
            raise TypeError(
                f"'{self.name}' expects {self.document_class.__name__}, "
                f"got {type(value).__name__}"
            )
        if value.parent is not None:
            return copy.deepcopy(value.container)
        value._attach(instance, self.name)
        return value.container

    @staticmethod
    def _destroyed(payload: Mapping) -> bool:
        return is_truthy(payload.get(get_config().destroy_marker))

    def describe(self) -> Dict[str, Any]:
        return {
            "embeds": self.cardinality,
            "document": self.class_name,
        }

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return self.get(instance)

    def __set__(self, instance, value):
        self.assign(instance, value)


class EmbedsOne(Embedding):
    """One sub-document stored as a JSON object under the relation name."""

    cardinality = "one"

    def get(self, instance: Document) -> Optional[EmbeddableDocument]:
        raw = instance.get_slot(self.name)
        if raw is UNSET or raw is None:
            return None
        return self._wrap(instance, raw)

    def build(self, instance: Document, attributes: Optional[Mapping] = None) -> EmbeddableDocument:
        """Replace the slot with a fresh sub-document."""
        container: dict = {}
        instance.set_slot(self.name, container)
        document = self._wrap(instance, container)
        if attributes:
            document.assign_attributes(attributes)
        return document

    def ensure(self, instance: Document) -> EmbeddableDocument:
        """Existing sub-document, or a freshly built one."""
        document = self.get(instance)
        if document is None:
            document = self.build(instance)
        return document

    def assign(self, instance: Document, value: Any) -> Optional[EmbeddableDocument]:
        """
        Mass-assign a payload mapping, adopt a document, or clear with None.

        Fields are applied in payload order; a conversion fault stops the
        assignment and leaves earlier fields applied.
        """
        if value is None:
            instance.set_slot(self.name, UNSET)
            return None
        if not isinstance(value, Mapping):
            container = self._adopt(instance, value)
            instance.set_slot(self.name, container)
            return self._wrap(instance, container)
        if self._destroyed(value):
            instance.set_slot(self.name, UNSET)
            return None
        document = self.ensure(instance)
        document.assign_attributes(value)
        return document


class EmbedsMany(Embedding):
    """An ordered list of sub-documents stored as a JSON array."""

    cardinality = "many"

    @property
    def singular_name(self) -> str:
        return singularize(self.name)

    def _array(self, instance: Document, create: bool = False) -> Optional[list]:
        raw = instance.get_slot(self.name)
        if raw is UNSET or raw is None:
            if not create:
                return None
            raw = []
            instance.set_slot(self.name, raw)
        return raw

    def _touch(self, instance: Document, array: list) -> None:
        instance.set_slot(self.name, array)

    def get(self, instance: Document) -> EmbeddedList:
        return EmbeddedList(instance, self)

    def build(self, instance: Document, attributes: Optional[Mapping] = None) -> EmbeddableDocument:
        """Append a fresh sub-document and return it."""
        array = self._array(instance, create=True)
        container: dict = {}
        array.append(container)
        self._touch(instance, array)
        document = self._wrap(instance, container)
        if attributes:
            document.assign_attributes(attributes)
        return document

    def ensure(self, instance: Document) -> EmbeddableDocument:
        """Build one sub-document if the list is empty; otherwise return the first."""
        array = self._array(instance)
        if not array:
            return self.build(instance)
        return self._wrap(instance, array[0])

    def assign(self, instance: Document, value: Any) -> List[EmbeddableDocument]:
        """
        Replace the whole list from a payload.

        ``value`` is a sequence of mappings and/or documents, or a mapping of
        form index keys (``{"0": {...}, "1": {...}}``) to mappings. Elements
        with a truthy destruction marker are skipped; unlisted elements are
        dropped. A conversion fault stops the assignment and leaves the
        elements and fields applied before it in place.
        """
        if value is None:
            instance.set_slot(self.name, UNSET)
            return []
        if isinstance(value, Mapping):
            if value and all(str(key).isdigit() for key in value):
                items = [value[key] for key in sorted(value, key=lambda k: int(k))]
            else:
                items = [value]
        else:
            items = list(value)

        array: list = []
        instance.set_slot(self.name, array)
        documents: List[EmbeddableDocument] = []
        for item in items:
            if not isinstance(item, Mapping):
                container = self._adopt(instance, item)
                array.append(container)
                self._touch(instance, array)
                documents.append(self._wrap(instance, container))
                continue
            if self._destroyed(item):
                continue
            container: dict = {}
            array.append(container)
            self._touch(instance, array)
            document = self._wrap(instance, container)
            document.assign_attributes(item)
            documents.append(document)
        return documents


class EmbeddedList(MutableSequence):
    """
    Live list view over an embeds-many slot.

    Items are fresh wrappers over the stored containers. Inserting a document
    stores its own container, so later writes through that document land in
    the parent. The slot is created on first insert.
    """

    def __init__(self, instance: Document, relation: EmbedsMany):
        self._instance = instance
        self._relation = relation

    def _array(self, create: bool = False) -> Optional[list]:
        return self._relation._array(self._instance, create=create)

    def __len__(self) -> int:
        array = self._array()
        return len(array) if array else 0

    def __getitem__(self, index):
        array = self._array() or []
        if isinstance(index, slice):
            return [self._relation._wrap(self._instance, c) for c in array[index]]
        return self._relation._wrap(self._instance, array[index])

    def __setitem__(self, index, value) -> None:
        array = self._array(create=True)
        if isinstance(index, slice):
            array[index] = [self._relation._adopt(self._instance, v) for v in value]
        else:
            array[index] = self._relation._adopt(self._instance, value)
        self._relation._touch(self._instance, array)

    def __delitem__(self, index) -> None:
        array = self._array()
        if array is None:
            raise IndexError("list assignment index out of range")
        del array[index]
        self._relation._touch(self._instance, array)

    def insert(self, index: int, value) -> None:
        array = self._array(create=True)
        array.insert(index, self._relation._adopt(self._instance, value))
        self._relation._touch(self._instance, array)

    def __iter__(self) -> Iterator[EmbeddableDocument]:
        for container in list(self._array() or []):
            yield self._relation._wrap(self._instance, container)

    def build(self, **attributes: Any) -> EmbeddableDocument:
        return self._relation.build(self._instance, attributes)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (EmbeddedList, list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<EmbeddedList {self._relation.name}: {list(self)!r}>"
