"""
Tests for the attribute type system (docstore/types/).

Covers:
- Built-in types: dump/load round trips and conversion failures
- Type-level defaults
- TypeRegistry: register, resolve, overwrite, scoped copies
"""

import uuid

import pytest

from docstore.faults import ConversionError, UnknownTypeError
from docstore.types import (
    UNSET,
    ArrayType,
    AttributeType,
    BooleanType,
    EnumerationType,
    FloatType,
    IntegerType,
    StringType,
    TypeRegistry,
    UUIDType,
    default_registry,
    is_truthy,
)


# ============================================================================
# Round trips
# ============================================================================

class TestRoundTrip:

    @pytest.mark.parametrize(
        "attribute_type, value",
        [
            (StringType(), "plaster"),
            (IntegerType(), 3),
            (IntegerType(), -40),
            (FloatType(), 12.5),
            (BooleanType(), True),
            (BooleanType(), False),
            (ArrayType(), ["a", 1, {"b": None}]),
            (EnumerationType(values=["wood", "brick"]), "brick"),
            (EnumerationType(values=["wood", "brick"], multiple=True), ["brick", "wood"]),
            (UUIDType(), uuid.UUID("12345678-1234-5678-1234-567812345678")),
        ],
    )
    def test_load_dump_is_identity(self, attribute_type, value):
        assert attribute_type.load(attribute_type.dump(value)) == value


# ============================================================================
# Scalars
# ============================================================================

class TestString:

    def test_dump_stringifies(self):
        assert StringType().dump(42) == "42"

    def test_predicate(self):
        assert StringType().predicate_hint == "str"


class TestInteger:

    def test_numeric_string(self):
        assert IntegerType().dump("12") == 12
        assert IntegerType().dump(" 7 ") == 7

    def test_non_numeric_string_fails(self):
        with pytest.raises(ConversionError) as exc_info:
            IntegerType().dump("three")
        assert exc_info.value.code == "ATTRIBUTE_CONVERSION_FAILED"
        assert exc_info.value.value == "three"

    def test_none_fails(self):
        with pytest.raises(ConversionError):
            IntegerType().dump(None)

    def test_boolean_rejected(self):
        with pytest.raises(ConversionError):
            IntegerType().dump(True)

    def test_fractional_float_fails(self):
        with pytest.raises(ConversionError):
            IntegerType().dump(12.7)

    def test_whole_float_accepted(self):
        value = IntegerType().dump(12.0)
        assert value == 12
        assert isinstance(value, int)

    def test_conversion_error_is_value_error(self):
        with pytest.raises(ValueError):
            IntegerType().dump("x")

    def test_predicate(self):
        assert IntegerType().predicate_hint == "int"


class TestFloat:

    def test_numeric_string(self):
        assert FloatType().dump("2.75") == 2.75

    def test_int_becomes_float(self):
        value = FloatType().dump(3)
        assert value == 3.0
        assert isinstance(value, float)

    def test_non_numeric_fails(self):
        with pytest.raises(ConversionError):
            FloatType().dump("tall")

    def test_predicate(self):
        assert FloatType().predicate_hint == "float"


class TestBoolean:

    @pytest.mark.parametrize("token", [True, 1, "1", "true", "TRUE", "yes", "on", "t"])
    def test_true_tokens(self, token):
        assert BooleanType().dump(token) is True

    @pytest.mark.parametrize("token", [False, 0, "0", "false", "no", "off", "f"])
    def test_false_tokens(self, token):
        assert BooleanType().dump(token) is False

    def test_unknown_token_fails(self):
        with pytest.raises(ConversionError):
            BooleanType().dump("maybe")

    def test_predicate(self):
        assert BooleanType().predicate_hint == "bool"


class TestArray:

    def test_tuple_becomes_list(self):
        assert ArrayType().dump(("a", "b")) == ["a", "b"]

    def test_scalar_fails(self):
        with pytest.raises(ConversionError):
            ArrayType().dump("a,b")

    def test_predicate(self):
        assert ArrayType().predicate_hint == "array"


class TestUUID:

    def test_dump_is_canonical_string(self):
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert UUIDType().dump(value) == "12345678-1234-5678-1234-567812345678"

    def test_accepts_string(self):
        assert UUIDType().dump("12345678123456781234567812345678") == (
            "12345678-1234-5678-1234-567812345678"
        )

    def test_invalid_fails(self):
        with pytest.raises(ConversionError):
            UUIDType().dump("not-a-uuid")


class TestTruthy:

    @pytest.mark.parametrize("value", [True, 1, "1", "true", "Yes", "on"])
    def test_truthy(self, value):
        assert is_truthy(value) is True

    @pytest.mark.parametrize("value", [None, False, 0, "", "0", "false", "nope", {}])
    def test_falsy(self, value):
        assert is_truthy(value) is False


# ============================================================================
# Defaults
# ============================================================================

class TestTypeDefaults:

    def test_no_default(self):
        assert StringType().has_default() is False
        assert StringType().get_default() is None

    def test_value_default_is_copied(self):
        attribute_type = ArrayType(default=["x"])
        first = attribute_type.get_default()
        first.append("y")
        assert attribute_type.get_default() == ["x"]

    def test_callable_default(self):
        assert IntegerType(default=lambda: 5).get_default() == 5

    def test_unset_is_falsy_singleton(self):
        assert not UNSET
        assert type(UNSET)() is UNSET


# ============================================================================
# Registry
# ============================================================================

class MoneyType(AttributeType):
    type_name = "money"
    predicate = "float"

    def dump(self, value):
        return round(float(value), 2)

    def load(self, value):
        return float(value)


class TestTypeRegistry:

    def test_builtins_registered(self):
        for name in ("string", "integer", "float", "boolean", "array", "enumeration", "uuid"):
            assert name in default_registry

    def test_resolve_returns_factory(self):
        assert default_registry.resolve("integer") is IntegerType

    def test_resolve_unknown_fails(self):
        registry = TypeRegistry.with_builtins()
        with pytest.raises(UnknownTypeError) as exc_info:
            registry.resolve("money")
        assert exc_info.value.code == "UNKNOWN_ATTRIBUTE_TYPE"
        assert exc_info.value.metadata["type_name"] == "money"

    def test_unknown_type_is_lookup_error(self):
        with pytest.raises(LookupError):
            TypeRegistry().resolve("string")

    def test_register_custom_type(self):
        registry = TypeRegistry.with_builtins()
        registry.register("money", MoneyType)
        assert registry.create("money").dump("3.14159") == 3.14

    def test_overwrite_last_writer_wins(self):
        registry = TypeRegistry.with_builtins()
        registry.register("string", MoneyType)
        registry.register("string", IntegerType)
        assert registry.resolve("string") is IntegerType

    def test_copy_is_independent(self):
        registry = TypeRegistry.with_builtins()
        scoped = registry.copy()
        scoped.register("money", MoneyType)
        assert "money" in scoped
        assert "money" not in registry

    def test_create_passes_options(self):
        enumeration = default_registry.create("enumeration", values=["a"], multiple=True)
        assert enumeration.multiple is True
        assert enumeration.values == ["a"]

    def test_create_accepts_class_and_instance(self):
        instance = FloatType()
        assert default_registry.create(instance) is instance
        assert isinstance(default_registry.create(MoneyType), MoneyType)

    def test_create_rejects_options_for_instance(self):
        with pytest.raises(TypeError):
            default_registry.create(FloatType(), default=1.0)

    def test_unregister(self):
        registry = TypeRegistry.with_builtins()
        registry.unregister("uuid")
        assert "uuid" not in registry
        assert len(registry) == 6
