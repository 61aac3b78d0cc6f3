"""
DocStore Faults - Schema fault types.

Provides the concrete faults raised while defining document classes and
while converting attribute values:
- UnknownTypeError
- ConversionError
- InvalidEnumerationValueError
- UnknownDocumentError

and the configuration fault ConfigError.
"""

from typing import Any, Optional, Sequence

from .core import Fault, FaultDomain, Severity


# ============================================================================
# SCHEMA Faults
# ============================================================================

class SchemaFault(Fault):
    """Base class for schema faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.SCHEMA,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class UnknownTypeError(SchemaFault, LookupError):
    """No attribute type is registered under the requested name."""

    def __init__(self, type_name: str, known: Sequence[str] = (), **kwargs):
        super().__init__(
            code="UNKNOWN_ATTRIBUTE_TYPE",
            message=(
                f"No attribute type registered as '{type_name}'. "
                f"Available: {sorted(known)}"
            ),
            severity=Severity.FATAL,
            metadata={"type_name": type_name, **kwargs.get("metadata", {})},
        )


class ConversionError(SchemaFault, ValueError):
    """A value falls outside an attribute type's domain."""

    def __init__(self, type_name: str, value: Any, reason: str = "", **kwargs):
        detail = f": {reason}" if reason else ""
        super().__init__(
            code=kwargs.pop("code", "ATTRIBUTE_CONVERSION_FAILED"),
            message=f"Cannot convert {value!r} to {type_name}{detail}",
            metadata={"type_name": type_name, "value": value, **kwargs.get("metadata", {})},
        )
        self.type_name = type_name
        self.value = value


class InvalidEnumerationValueError(ConversionError):
    """A strict enumeration received a token outside its values."""

    def __init__(self, token: Any, allowed: Sequence[Any], **kwargs):
        super().__init__(
            "enumeration",
            token,
            f"must be one of {list(allowed)}",
            code="INVALID_ENUMERATION_VALUE",
            metadata={"allowed": list(allowed)},
        )
        self.allowed = list(allowed)


class UnknownDocumentError(SchemaFault, LookupError):
    """An embedding names a document class that was never defined."""

    def __init__(self, class_name: str, relation: str = "", **kwargs):
        where = f" (embedding '{relation}')" if relation else ""
        super().__init__(
            code="UNKNOWN_DOCUMENT_TYPE",
            message=f"Document class '{class_name}' is not registered{where}",
            metadata={"class_name": class_name, "relation": relation},
        )


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigError(Fault, ValueError):
    """A configuration source holds a missing or ill-typed value."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(
            code="CONFIG_INVALID",
            message=message,
            domain=FaultDomain.CONFIG,
            retryable=False,
            metadata={"key": key} if key else None,
        )
