"""
Built-in scalar and list attribute types: string, integer, float, boolean,
array and uuid.
"""

from __future__ import annotations

import uuid
from typing import Any

from ..faults import ConversionError
from .base import AttributeType

__all__ = [
    "StringType",
    "IntegerType",
    "FloatType",
    "BooleanType",
    "ArrayType",
    "UUIDType",
    "TRUE_TOKENS",
    "FALSE_TOKENS",
    "is_truthy",
]


TRUE_TOKENS = frozenset({"1", "true", "t", "yes", "y", "on"})
FALSE_TOKENS = frozenset({"0", "false", "f", "no", "n", "off"})


def is_truthy(value: Any) -> bool:
    """Interpret a form-style flag (``True``, ``1``, ``"true"``, ``"on"`` ...)."""
    if isinstance(value, str):
        return value.strip().lower() in TRUE_TOKENS
    if isinstance(value, (bool, int, float)):
        return bool(value)
    return False


class StringType(AttributeType):
    """Free text; stored as-is."""

    type_name = "string"
    predicate = "str"
    python_type = str


class IntegerType(AttributeType):
    type_name = "integer"
    predicate = "int"
    python_type = int

    def coerce(self, value: Any) -> Any:
        if isinstance(value, bool):
            raise ConversionError(self.type_name, value, "booleans are not integers")
        if isinstance(value, float) and not value.is_integer():
            raise ConversionError(self.type_name, value, "fractional part would be lost")
        if isinstance(value, str):
            value = value.strip()
        return super().coerce(value)


class FloatType(AttributeType):
    type_name = "float"
    predicate = "float"
    python_type = float

    def coerce(self, value: Any) -> Any:
        if isinstance(value, bool):
            raise ConversionError(self.type_name, value, "booleans are not numbers")
        return super().coerce(value)


class BooleanType(AttributeType):
    """
    True/false flag. Accepts the tokens HTML forms submit
    (``"1"``/``"0"``, ``"true"``/``"false"``, ``"on"``/``"off"`` ...).
    """

    type_name = "boolean"
    predicate = "bool"

    def coerce(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            token = value.strip().lower()
            if token in TRUE_TOKENS:
                return True
            if token in FALSE_TOKENS:
                return False
        raise ConversionError(self.type_name, value, "expected a true/false value")


class ArrayType(AttributeType):
    """Untyped JSON list; tuples are stored as lists."""

    type_name = "array"
    predicate = "array"

    def coerce(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return list(value)
        raise ConversionError(
            self.type_name, value, f"expected a list, got {type(value).__name__}"
        )


class UUIDType(AttributeType):
    """``uuid.UUID`` values, stored in canonical string form."""

    type_name = "uuid"
    predicate = "str"

    def dump(self, value: Any) -> Any:
        return str(self.load(value))

    def load(self, value: Any) -> Any:
        if isinstance(value, uuid.UUID):
            return value
        try:
            return uuid.UUID(str(value))
        except ValueError as exc:
            raise ConversionError(self.type_name, value, str(exc)) from exc
