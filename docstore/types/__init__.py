"""
DocStore Attribute Types Package.

    base        — AttributeType contract and the UNSET sentinel
    primitives  — string, integer, float, boolean, array, uuid
    enumeration — EnumerationType with choice lists
    registry    — TypeRegistry and the shared default_registry
"""

from .base import AttributeType, UNSET, _Unset
from .enumeration import EnumerationType, humanize
from .primitives import (
    ArrayType,
    BooleanType,
    FloatType,
    IntegerType,
    StringType,
    UUIDType,
    is_truthy,
)
from .registry import BUILTIN_TYPES, TypeFactory, TypeRegistry, default_registry

__all__ = [
    "AttributeType",
    "UNSET",
    "_Unset",
    "StringType",
    "IntegerType",
    "FloatType",
    "BooleanType",
    "ArrayType",
    "UUIDType",
    "EnumerationType",
    "humanize",
    "is_truthy",
    "TypeRegistry",
    "TypeFactory",
    "default_registry",
    "BUILTIN_TYPES",
]
