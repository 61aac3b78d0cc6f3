"""
DocStore Faults - structured error taxonomy.

Errors raised by the attribute type system and the embedding model are typed
fault objects carrying a stable code, a domain and metadata about the input
that triggered them. They are raised synchronously and never swallowed.

Core exports:
- Fault: Base fault class
- FaultDomain: Domain taxonomy
- Severity: Severity levels
- Schema faults: UnknownTypeError, ConversionError,
  InvalidEnumerationValueError, UnknownDocumentError
- Config fault: ConfigError
"""

from .core import (
    DOMAIN_DEFAULTS,
    Fault,
    FaultDomain,
    Severity,
)
from .domains import (
    ConfigError,
    ConversionError,
    InvalidEnumerationValueError,
    SchemaFault,
    UnknownDocumentError,
    UnknownTypeError,
)

__all__ = [
    "DOMAIN_DEFAULTS",
    "Fault",
    "FaultDomain",
    "Severity",
    "SchemaFault",
    "UnknownTypeError",
    "ConversionError",
    "InvalidEnumerationValueError",
    "UnknownDocumentError",
    "ConfigError",
]
