"""
DocStore — typed attributes and embedded documents inside one JSON container.

    from docstore import Attribute, Document, EmbeddableDocument, EmbedsMany, EmbedsOne

    class Door(EmbeddableDocument):
        colour = Attribute("string")
        glazed = Attribute("boolean", default=False)

    class Room(EmbeddableDocument):
        name = Attribute("string")

    class House(Document):
        storeys = Attribute("integer", default=1)
        construction = Attribute(
            "enumeration", values=["wood", "plaster", "mud", "brick"], strict=True
        )
        door = EmbedsOne()
        rooms = EmbedsMany()

The container (``house.data`` by default) is the single source of truth;
persisting it is left to the host.
"""

from .config import ConfigError, ConfigLoader, DocStoreConfig, configure, get_config
from .faults import (
    ConversionError,
    Fault,
    FaultDomain,
    InvalidEnumerationValueError,
    Severity,
    UnknownDocumentError,
    UnknownTypeError,
)
from .models import (
    Attribute,
    Document,
    DocumentRegistry,
    EmbeddableDocument,
    EmbeddedList,
    EmbedsMany,
    EmbedsOne,
    PredicateHintTable,
    bind_attribute,
    predicate_hints,
)
from .types import (
    UNSET,
    AttributeType,
    EnumerationType,
    TypeRegistry,
    default_registry,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Documents
    "Document",
    "EmbeddableDocument",
    "Attribute",
    "bind_attribute",
    "EmbedsOne",
    "EmbedsMany",
    "EmbeddedList",
    "DocumentRegistry",
    "PredicateHintTable",
    "predicate_hints",
    # Types
    "AttributeType",
    "EnumerationType",
    "TypeRegistry",
    "default_registry",
    "UNSET",
    # Faults
    "Fault",
    "FaultDomain",
    "Severity",
    "UnknownTypeError",
    "ConversionError",
    "InvalidEnumerationValueError",
    "UnknownDocumentError",
    # Config
    "ConfigError",
    "ConfigLoader",
    "DocStoreConfig",
    "configure",
    "get_config",
]
