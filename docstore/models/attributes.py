"""
DocStore Attributes — typed accessors over named slots of a JSON container.

    class House(Document):
        storeys = Attribute("integer", default=1)
        name = Attribute("string")
        construction = Attribute("enumeration", values=["wood", "brick"], strict=True)

    house = House()
    house.storeys          # → 1, and data["storeys"] is now 1
    house.storeys = "3"    # stored as 3
    house.name = ""        # clears the slot (stored as null)

An attribute holds no per-instance state; ``get``/``set`` read and write the
owner's container through its ``get_slot``/``set_slot`` protocol.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple, Type, Union, TYPE_CHECKING

from ..types.base import AttributeType, UNSET

if TYPE_CHECKING:
    from ..types.registry import TypeRegistry
    from .base import Document

logger = logging.getLogger("docstore.models.attributes")

__all__ = ["Attribute", "bind_attribute"]


class Attribute:
    """
    Attribute definition — binds a field name to one attribute type.

    Args:
        type_spec: Registered type name, AttributeType subclass or instance
        default: Instance default (value or zero-argument callable); falls
            back to the type's own default
        **options: Passed to the type factory (e.g. ``values``, ``multiple``)
    """

    _creation_counter = 0

    def __init__(
        self,
        type_spec: Union[str, AttributeType, Type[AttributeType]] = "string",
        *,
        default: Any = UNSET,
        **options: Any,
    ):
        self.type_spec = type_spec
        self.default = default
        self.options = options

        # Set by bind()
        self.name: str = ""
        self.owner: Optional[type] = None
        self.attribute_type: Optional[AttributeType] = None

        self._order = Attribute._creation_counter
        Attribute._creation_counter += 1

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.name} ({self.type_name})>"

    # ── Binding ──────────────────────────────────────────────────────

    def bind(self, owner: Type[Document], name: str, registry: TypeRegistry) -> Attribute:
        """
        Resolve the attribute type and record the predicate hint on ``owner``.

        Raises:
            UnknownTypeError: If ``type_spec`` names an unregistered type
        """
        self.attribute_type = registry.create(self.type_spec, **self.options)
        self.name = name
        self.owner = owner
        owner.register_predicate_hint(name, self.attribute_type.predicate_hint)
        logger.debug(f"Bound {owner.__name__}.{name} as {self.attribute_type!r}")
        return self

    @property
    def type_name(self) -> str:
        if self.attribute_type is not None:
            return self.attribute_type.type_name
        return str(self.type_spec)

    @property
    def predicate_hint(self) -> str:
        return self.attribute_type.predicate_hint

    # ── Defaults ─────────────────────────────────────────────────────

    def has_default(self) -> bool:
        return self.default is not UNSET or self.attribute_type.has_default()

    def get_default(self) -> Any:
        """Get default value, calling it if callable."""
        if self.default is UNSET:
            return self.attribute_type.get_default()
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    # ── Accessor pair ────────────────────────────────────────────────

    def get(self, instance: Document) -> Any:
        raw = instance.get_slot(self.name)
        if raw is UNSET:
            if not self.has_default():
                return None
            # Persist the default that was handed out
            dumped = self.attribute_type.dump(self.get_default())
            instance.set_slot(self.name, dumped)
            return self.attribute_type.load(dumped)
        if raw is None:
            return None
        return self.attribute_type.load(raw)

    def set(self, instance: Document, value: Any) -> None:
        if value is None or (isinstance(value, str) and value == ""):
            instance.set_slot(self.name, None)
            return
        instance.set_slot(self.name, self.attribute_type.dump(value))

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return self.get(instance)

    def __set__(self, instance, value):
        self.set(instance, value)

    # ── Introspection ────────────────────────────────────────────────

    def choices(self) -> Optional[List[Tuple[str, Any]]]:
        """``[(label, value), ...]`` for enumeration attributes, else None."""
        return self.attribute_type.choices()

    def describe(self) -> Dict[str, Any]:
        data = self.attribute_type.describe()
        if self.default is not UNSET and not callable(self.default):
            data["default"] = self.default
        return data


def bind_attribute(
    owner: Type[Document],
    name: str,
    type_spec: Union[str, AttributeType, Type[AttributeType]] = "string",
    **options: Any,
) -> Attribute:
    """
    Define an attribute on an existing document class.

    Rebinding a name replaces the previous definition and its predicate hint,
    on ``owner`` and on every subclass that inherits the name.
    """
    attribute = Attribute(type_spec, **options)
    attribute.bind(owner, name, owner._meta.registry)
    setattr(owner, name, attribute)
    owner._attributes = {**owner._attributes, name: attribute}
    _propagate(owner, name, attribute)
    return attribute


def _propagate(owner: type, name: str, attribute: Attribute) -> None:
    for subclass in owner.__subclasses__():
        # A subclass defining the name itself shadows the rebinding
        if name in subclass.__dict__:
            continue
        subclass._attributes = {**subclass._attributes, name: attribute}
        subclass.register_predicate_hint(name, attribute.predicate_hint)
        _propagate(subclass, name, attribute)
