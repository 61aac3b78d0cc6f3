"""
Tests for the fault taxonomy (docstore/faults/).
"""

import pytest

from docstore.faults import (
    ConfigError,
    ConversionError,
    Fault,
    FaultDomain,
    InvalidEnumerationValueError,
    SchemaFault,
    Severity,
    UnknownDocumentError,
    UnknownTypeError,
)
from docstore.faults.core import DOMAIN_DEFAULTS


# ============================================================================
# Severity & Domain
# ============================================================================

class TestSeverity:

    def test_values(self):
        assert Severity.INFO == "info"
        assert Severity.WARN == "warn"
        assert Severity.ERROR == "error"
        assert Severity.FATAL == "fatal"


class TestFaultDomain:

    def test_standard_domains(self):
        assert FaultDomain.SCHEMA.name == "schema"
        assert FaultDomain.CONFIG.name == "config"

    def test_equality_and_hash(self):
        assert FaultDomain("schema") == FaultDomain.SCHEMA
        assert FaultDomain.SCHEMA == "schema"
        assert hash(FaultDomain("schema")) == hash(FaultDomain.SCHEMA)

    def test_defaults(self):
        assert DOMAIN_DEFAULTS[FaultDomain.SCHEMA]["severity"] == Severity.ERROR
        assert DOMAIN_DEFAULTS[FaultDomain.CONFIG]["retryable"] is False


# ============================================================================
# Fault base
# ============================================================================

class TestFault:

    def test_requires_code_message_domain(self):
        with pytest.raises(TypeError):
            Fault(code="X")

    def test_str(self):
        fault = Fault(code="X", message="boom", domain=FaultDomain.SCHEMA)
        assert str(fault) == "[X] boom"

    def test_domain_defaults_applied(self):
        fault = Fault(code="X", message="boom", domain=FaultDomain.CONFIG)
        assert fault.severity == Severity.FATAL
        assert fault.retryable is False

    def test_to_dict(self):
        fault = Fault(
            code="X", message="boom", domain=FaultDomain.SCHEMA, metadata={"field": "storeys"}
        )
        assert fault.to_dict() == {
            "code": "X",
            "message": "boom",
            "domain": "schema",
            "severity": "error",
            "retryable": False,
            "public": False,
            "metadata": {"field": "storeys"},
        }

    def test_repr(self):
        fault = Fault(code="X", message="boom", domain=FaultDomain.SCHEMA)
        assert repr(fault) == "Fault(code='X', domain=schema, severity=error)"


# ============================================================================
# Schema faults
# ============================================================================

class TestSchemaFaults:

    def test_unknown_type(self):
        fault = UnknownTypeError("money", known=["string", "integer"])
        assert isinstance(fault, SchemaFault)
        assert isinstance(fault, LookupError)
        assert fault.code == "UNKNOWN_ATTRIBUTE_TYPE"
        assert fault.severity == Severity.FATAL
        assert fault.domain == FaultDomain.SCHEMA
        assert "'money'" in fault.message
        assert "['integer', 'string']" in fault.message

    def test_conversion_error(self):
        fault = ConversionError("integer", "three", "not a number")
        assert isinstance(fault, ValueError)
        assert fault.code == "ATTRIBUTE_CONVERSION_FAILED"
        assert fault.type_name == "integer"
        assert fault.value == "three"
        assert fault.message == "Cannot convert 'three' to integer: not a number"
        assert fault.metadata == {"type_name": "integer", "value": "three"}

    def test_invalid_enumeration_value(self):
        fault = InvalidEnumerationValueError("glass", ["wood", "brick"])
        assert isinstance(fault, ConversionError)
        assert fault.code == "INVALID_ENUMERATION_VALUE"
        assert fault.allowed == ["wood", "brick"]
        assert fault.value == "glass"
        assert fault.metadata["allowed"] == ["wood", "brick"]

    def test_unknown_document(self):
        fault = UnknownDocumentError("Hayloft", relation="hayloft")
        assert isinstance(fault, LookupError)
        assert fault.code == "UNKNOWN_DOCUMENT_TYPE"
        assert "embedding 'hayloft'" in fault.message
        assert fault.metadata == {"class_name": "Hayloft", "relation": "hayloft"}

    def test_config_error(self):
        fault = ConfigError("bad value", key="json_column")
        assert isinstance(fault, ValueError)
        assert fault.code == "CONFIG_INVALID"
        assert fault.domain == FaultDomain.CONFIG
        assert fault.severity == Severity.FATAL
        assert fault.metadata == {"key": "json_column"}
        assert ConfigError("no key").metadata == {}

    def test_not_retryable(self):
        for fault in (
            UnknownTypeError("x"),
            ConversionError("integer", "x"),
            UnknownDocumentError("X"),
        ):
            assert fault.retryable is False
            assert fault.public is False
