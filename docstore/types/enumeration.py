"""
Enumeration attribute type — a token (or an ordered list of tokens) drawn
from a configured set of values.

Usage:
    class House(Document):
        construction = Attribute(
            "enumeration",
            values=["wood", "plaster", "mud", "brick"],
            multiple=True,
            strict=True,
        )

``values`` may be a list of tokens, a list of ``(value, label)`` pairs, or an
``Enum`` class (members contribute their value, and their ``label`` when they
have one).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from ..faults import ConversionError, InvalidEnumerationValueError
from .base import AttributeType

__all__ = ["EnumerationType", "humanize"]


def humanize(token: Any) -> str:
    """``"red_brick"`` → ``"Red Brick"``."""
    return str(token).replace("_", " ").replace("-", " ").strip().title()


def _normalize_values(values: Any) -> List[Tuple[Any, str]]:
    """Return ``[(value, label), ...]`` in configured order."""
    if values is None:
        return []
    if isinstance(values, type) and issubclass(values, Enum):
        return [
            (member.value, getattr(member, "label", None) or humanize(member.value))
            for member in values
        ]
    pairs: List[Tuple[Any, str]] = []
    for item in values:
        if isinstance(item, (list, tuple)) and len(item) == 2:
            pairs.append((item[0], str(item[1])))
        else:
            pairs.append((item, humanize(item)))
    return pairs


class EnumerationType(AttributeType):
    """
    Tokens from a fixed vocabulary.

    Args:
        values: Allowed tokens, in display order
        multiple: Store an ordered list of tokens instead of one token
        strict: Reject tokens outside ``values`` on write; when omitted the
            configured ``strict_enumerations`` default applies
    """

    type_name = "enumeration"

    def __init__(
        self,
        *,
        values: Any = None,
        multiple: bool = False,
        strict: Optional[bool] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self._pairs = _normalize_values(values)
        self.multiple = multiple
        if strict is None:
            from ..config import get_config
            strict = get_config().strict_enumerations
        self.strict = strict

    @property
    def values(self) -> List[Any]:
        return [value for value, _ in self._pairs]

    @property
    def predicate(self) -> str:  # type: ignore[override]
        return "array" if self.multiple else "str"

    def choices(self) -> List[Tuple[str, Any]]:
        """``[(label, value), ...]`` for rendering selection controls."""
        return [(label, value) for value, label in self._pairs]

    def _token(self, token: Any) -> Any:
        if isinstance(token, Enum):
            token = token.value
        if self.strict and token not in self.values:
            raise InvalidEnumerationValueError(token, self.values)
        return token

    def dump(self, value: Any) -> Any:
        if not self.multiple:
            return self._token(value)
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ConversionError(
                self.type_name, value, f"expected a list of tokens, got {type(value).__name__}"
            )
        # Blank tokens come from the hidden input of multi-select form controls
        return [self._token(token) for token in value if token != ""]

    def load(self, value: Any) -> Any:
        if self.multiple:
            return list(value) if isinstance(value, (list, tuple)) else [value]
        return value

    def describe(self):
        data = super().describe()
        data["values"] = self.values
        data["multiple"] = self.multiple
        data["strict"] = self.strict
        return data
