"""
DocStore Type Registry — maps type names to attribute type factories.

Document classes resolve their attribute types through a registry when they
are defined, so an unknown name fails at class-definition time. Registries
are plain instances: the shared ``default_registry`` carries the built-ins,
and a document class may name its own registry in ``Meta``:

    legacy_types = default_registry.copy()
    legacy_types.register("string", TrimmedStringType)

    class Note(Document):
        class Meta:
            registry = legacy_types
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from ..faults import UnknownTypeError
from .base import AttributeType
from .enumeration import EnumerationType
from .primitives import (
    ArrayType,
    BooleanType,
    FloatType,
    IntegerType,
    StringType,
    UUIDType,
)

logger = logging.getLogger("docstore.types.registry")

__all__ = ["TypeRegistry", "TypeFactory", "default_registry", "BUILTIN_TYPES"]

TypeFactory = Callable[..., AttributeType]

BUILTIN_TYPES: Dict[str, TypeFactory] = {
    "string": StringType,
    "integer": IntegerType,
    "float": FloatType,
    "boolean": BooleanType,
    "array": ArrayType,
    "enumeration": EnumerationType,
    "uuid": UUIDType,
}


class TypeRegistry:
    """
    Name → attribute type factory mapping.

    Registration overwrites silently (last writer wins) so host code can
    replace built-ins.
    """

    def __init__(self, types: Optional[Dict[str, TypeFactory]] = None):
        self._types: Dict[str, TypeFactory] = dict(types or {})

    @classmethod
    def with_builtins(cls) -> "TypeRegistry":
        return cls(BUILTIN_TYPES)

    def register(self, name: str, factory: TypeFactory) -> None:
        """Register (or replace) the factory used for ``name``."""
        if name in self._types:
            logger.debug(f"Replacing attribute type '{name}': {self._types[name]!r} → {factory!r}")
        else:
            logger.debug(f"Registered attribute type '{name}': {factory!r}")
        self._types[name] = factory

    def unregister(self, name: str) -> None:
        self._types.pop(name, None)

    def resolve(self, name: str) -> TypeFactory:
        """
        Resolve a type name to its factory.

        Raises:
            UnknownTypeError: If ``name`` is not registered
        """
        factory = self._types.get(name)
        if factory is None:
            raise UnknownTypeError(name, list(self._types))
        return factory

    def create(self, type_spec: Union[str, AttributeType, type], **options: Any) -> AttributeType:
        """
        Build an attribute type from a name, an ``AttributeType`` subclass or
        a ready instance (returned unchanged; ``options`` must be empty).
        """
        if isinstance(type_spec, AttributeType):
            if options:
                raise TypeError(
                    f"Options {sorted(options)} cannot be applied to an "
                    f"already-built {type_spec!r}"
                )
            return type_spec
        if isinstance(type_spec, type) and issubclass(type_spec, AttributeType):
            return type_spec(**options)
        return self.resolve(type_spec)(**options)

    def names(self) -> List[str]:
        return list(self._types)

    def copy(self) -> "TypeRegistry":
        return TypeRegistry(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"<TypeRegistry: {sorted(self._types)}>"


default_registry = TypeRegistry.with_builtins()
