"""
DocStore Attribute Types — dump/load contracts for values kept in a JSON container.

An attribute type knows how to turn a Python value into something JSON can
hold (``dump``), how to turn the stored value back (``load``), which default
to fall back to, and which predicate hint a query engine should use when it
casts the stored value for comparison.

Custom types subclass ``AttributeType`` and are registered by name:

    class MoneyType(AttributeType):
        type_name = "money"
        predicate = "float"

        def dump(self, value):
            return round(float(value), 2)

    default_registry.register("money", MoneyType)
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Optional, Tuple, Type

from ..faults import ConversionError

__all__ = ["AttributeType", "UNSET", "_Unset"]


# ── Sentinel ─────────────────────────────────────────────────────────────────

class _Unset:
    """Sentinel for distinguishing 'not set' from None."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<UNSET>"

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

UNSET = _Unset()


# ── Base Type ────────────────────────────────────────────────────────────────


class AttributeType:
    """
    Base attribute type — every built-in and custom type inherits from this.

    Class attributes:
        type_name  – Registry key
        predicate  – Hint telling the query engine how to cast the stored value
        python_type – Coercion callable used by the default dump/load

    Options:
        default    – Type-level default (value or zero-argument callable)
    """

    type_name: str = "base"
    predicate: str = "str"
    python_type: Callable[[Any], Any] = str

    def __init__(self, *, default: Any = UNSET, **options: Any):
        self.default = default
        self.options: Dict[str, Any] = options

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.type_name}>"

    @property
    def predicate_hint(self) -> str:
        return self.predicate

    def has_default(self) -> bool:
        return self.default is not UNSET

    def get_default(self) -> Any:
        """Get default value, calling it if callable."""
        if self.default is UNSET:
            return None
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    def coerce(self, value: Any) -> Any:
        try:
            return self.python_type(value)
        except (TypeError, ValueError) as exc:
            raise ConversionError(self.type_name, value, str(exc)) from exc

    def dump(self, value: Any) -> Any:
        """Convert a Python value to its JSON-safe form."""
        return self.coerce(value)

    def load(self, value: Any) -> Any:
        """Convert a stored JSON value back to its Python form."""
        return self.coerce(value)

    def choices(self) -> Optional[list[Tuple[str, Any]]]:
        """Choice list for selection controls; only enumerations have one."""
        return None

    def describe(self) -> Dict[str, Any]:
        """Serialize the type definition for inspection."""
        data: Dict[str, Any] = {"type": self.type_name, "predicate": self.predicate_hint}
        if self.has_default() and not callable(self.default):
            data["default"] = self.default
        return data
