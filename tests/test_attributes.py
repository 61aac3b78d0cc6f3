"""
Tests for attribute binding (docstore/models/attributes.py).

Covers:
- Read: present, cleared, default write-on-read, absent
- Write: conversion, clearing with "" / None, fault propagation
- Predicate hint registration and rebinding
- Meta options: json_column, scoped registry
- Inheritance and mass assignment
"""

import pytest

from docstore import (
    Attribute,
    AttributeType,
    Document,
    PredicateHintTable,
    TypeRegistry,
    bind_attribute,
    configure,
    predicate_hints,
)
from docstore.faults import ConversionError, UnknownTypeError
from docstore.models import DocumentRegistry


class House(Document):
    storeys = Attribute("integer")
    height = Attribute("float", default=7.5)
    name = Attribute("string", default="Unnamed")
    occupied = Attribute("boolean", default=False)
    tags = Attribute("array", default=list)
    construction = Attribute("enumeration", values=["wood", "brick"], default="brick")


# ============================================================================
# Reading
# ============================================================================

class TestRead:

    def test_present_value_is_loaded(self):
        house = House({"storeys": 2})
        assert house.storeys == 2

    def test_absent_without_default_is_none(self):
        house = House()
        assert house.storeys is None
        assert "storeys" not in house.data

    def test_default_is_written_on_first_read(self):
        house = House()
        assert "height" not in house.data
        assert house.height == 7.5
        assert house.data["height"] == 7.5

    def test_stored_value_wins_over_default(self):
        house = House()
        assert house.name == "Unnamed"
        house.data["name"] = "Rose Cottage"
        assert house.name == "Rose Cottage"

    def test_false_default_is_written(self):
        house = House()
        assert house.occupied is False
        assert house.data["occupied"] is False

    def test_stored_false_is_not_replaced_by_default(self):
        house = House({"occupied": False})
        assert house.occupied is False

    def test_callable_default(self):
        first, second = House(), House()
        assert first.tags == []
        assert second.tags == []
        assert first.data["tags"] is not second.data["tags"]

    def test_enumeration_default(self):
        assert House().construction == "brick"

    def test_descriptor_on_class(self):
        assert isinstance(House.storeys, Attribute)
        assert House.storeys.name == "storeys"
        assert House.storeys.type_name == "integer"


# ============================================================================
# Writing
# ============================================================================

class TestWrite:

    def test_value_is_dumped(self):
        house = House()
        house.storeys = "3"
        assert house.data["storeys"] == 3
        assert house.storeys == 3

    @pytest.mark.parametrize("blank", ["", None])
    @pytest.mark.parametrize(
        "field, value",
        [
            ("storeys", 2),
            ("height", 3.0),
            ("name", "Hill House"),
            ("occupied", True),
            ("tags", ["a"]),
            ("construction", "wood"),
        ],
    )
    def test_clearing_reads_back_absent(self, field, value, blank):
        house = House()
        setattr(house, field, value)
        setattr(house, field, blank)
        assert getattr(house, field) is None
        assert house.data[field] is None

    def test_clearing_wins_over_default(self):
        house = House()
        house.height = ""
        assert house.height is None

    def test_conversion_error_propagates(self):
        house = House()
        with pytest.raises(ConversionError):
            house.storeys = "three"
        assert "storeys" not in house.data

    def test_container_is_single_source_of_truth(self):
        house = House()
        house.storeys = 4
        house.data["storeys"] = 5
        assert house.storeys == 5


# ============================================================================
# Predicate hints
# ============================================================================

class TestPredicateHints:

    def test_storeys_hint(self):
        assert predicate_hints(House)["storeys"] == "int"

    def test_full_table(self):
        assert predicate_hints(House) == {
            "storeys": "int",
            "height": "float",
            "name": "str",
            "occupied": "bool",
            "tags": "array",
            "construction": "str",
        }

    def test_table_is_a_copy(self):
        predicate_hints(House)["storeys"] = "str"
        assert predicate_hints(House)["storeys"] == "int"

    def test_hint_table_operations(self):
        table = PredicateHintTable({"storeys": "int"})
        table.register("height", "float")
        table.update(PredicateHintTable({"storeys": "str"}))
        assert table.as_dict() == {"storeys": "str", "height": "float"}
        assert table["height"] == "float"
        assert table.get("colour") is None
        assert "storeys" in table
        assert list(table) == ["storeys", "height"]
        assert len(table) == 2

    def test_rebinding_replaces_hint(self):
        class Barn(Document):
            bays = Attribute("integer")

        bind_attribute(Barn, "bays", "string")
        assert predicate_hints(Barn)["bays"] == "str"
        barn = Barn()
        barn.bays = 4
        assert barn.bays == "4"

    def test_rebinding_reaches_existing_subclasses(self):
        class Barn(Document):
            bays = Attribute("integer")

        class BigBarn(Barn):
            pass

        class HugeBarn(BigBarn):
            pass

        bind_attribute(Barn, "bays", "string")
        for cls in (BigBarn, HugeBarn):
            barn = cls()
            barn.assign_attributes({"bays": 4})
            assert barn.data["bays"] == "4"
            assert predicate_hints(cls)["bays"] == "str"

    def test_rebinding_skips_subclass_with_own_definition(self):
        class Barn(Document):
            bays = Attribute("integer")

        class FloatBarn(Barn):
            bays = Attribute("float")

        bind_attribute(Barn, "bays", "string")
        assert predicate_hints(FloatBarn)["bays"] == "float"
        barn = FloatBarn()
        barn.assign_attributes({"bays": "2"})
        assert barn.data["bays"] == 2.0

    def test_bind_attribute_adds_field(self):
        class Garage(Document):
            pass

        bind_attribute(Garage, "doors", "integer", default=1)
        assert Garage().doors == 1
        assert predicate_hints(Garage) == {"doors": "int"}
        assert "doors" in Garage._attributes

    def test_host_hook_receives_hints(self):
        received = []

        class Indexed(Document):
            @classmethod
            def register_predicate_hint(cls, field_name, hint):
                received.append((field_name, hint))
                super().register_predicate_hint(field_name, hint)

        bind_attribute(Indexed, "storeys", "integer")
        assert received == [("storeys", "int")]
        assert predicate_hints(Indexed) == {"storeys": "int"}


# ============================================================================
# Class definition
# ============================================================================

class TestDefinition:

    def test_unknown_type_fails_at_definition(self):
        with pytest.raises(UnknownTypeError):
            class Broken(Document):
                price = Attribute("money")

    def test_empty_scoped_registry_kept_for_late_registration(self):
        scoped = TypeRegistry()

        class Note(Document):
            class Meta:
                registry = scoped

        assert Note._meta.registry is scoped

        class CentsType(AttributeType):
            type_name = "cents"
            predicate = "int"

        scoped.register("money", CentsType)
        bind_attribute(Note, "price", "money")
        assert predicate_hints(Note) == {"price": "int"}

    def test_subclass_inherits_scoped_registry(self):
        scoped = TypeRegistry()

        class Note(Document):
            class Meta:
                registry = scoped

        class Memo(Note):
            pass

        assert Memo._meta.registry is scoped
        with pytest.raises(UnknownTypeError):
            bind_attribute(Memo, "title", "string")

    def test_scoped_registry(self):
        class CentsType(AttributeType):
            type_name = "cents"
            predicate = "int"

            def dump(self, value):
                return int(round(float(value) * 100))

            def load(self, value):
                return value / 100

        scoped = TypeRegistry.with_builtins()
        scoped.register("money", CentsType)

        class Listing(Document):
            price = Attribute("money")

            class Meta:
                registry = scoped

        listing = Listing()
        listing.price = "199.99"
        assert listing.data["price"] == 19999
        assert listing.price == 199.99
        assert predicate_hints(Listing) == {"price": "int"}

    def test_attributes_inherited(self):
        class TownHouse(House):
            terrace = Attribute("boolean")

        assert list(TownHouse._attributes)[:2] == ["storeys", "height"]
        assert "terrace" in TownHouse._attributes
        assert predicate_hints(TownHouse)["storeys"] == "int"
        assert "terrace" not in predicate_hints(House)

    def test_json_column_option(self):
        class Flat(Document):
            floor = Attribute("integer")

            class Meta:
                json_column = "details"

        flat = Flat(floor=3)
        assert flat.details == {"floor": 3}
        assert Flat.json_column() == "details"

    def test_json_column_from_config(self):
        configure(json_column="payload")

        class Loft(Document):
            floor = Attribute("integer")

        loft = Loft(floor=1)
        assert loft.payload == {"floor": 1}

    def test_concrete_documents_registered(self):
        assert DocumentRegistry.get("House", __name__) is House


# ============================================================================
# Mass assignment
# ============================================================================

class TestAssignAttributes:

    def test_constructor_assigns(self):
        house = House(storeys="2", name="Hill House")
        assert house.data == {"storeys": 2, "name": "Hill House"}

    def test_unknown_keys_ignored(self):
        house = House()
        house.assign_attributes({"storeys": 1, "colour": "red", "_destroy": "1"})
        assert house.data == {"storeys": 1}

    def test_non_string_keys_ignored(self):
        house = House()
        house.assign_attributes({1: "one", ("a",): "b", "storeys": 2})
        assert house.data == {"storeys": 2}

    def test_fractional_storeys_rejected(self):
        house = House()
        with pytest.raises(ConversionError):
            house.storeys = 12.7
        assert "storeys" not in house.data

    def test_adopts_given_container(self):
        data = {"storeys": 1}
        house = House(data)
        house.storeys = 2
        assert data == {"storeys": 2}

    def test_partial_application_on_failure(self):
        house = House()
        with pytest.raises(ConversionError):
            house.assign_attributes({"name": "Hill House", "storeys": "many", "height": 9})
        assert house.data == {"name": "Hill House"}

    def test_to_dict_and_as_json(self):
        house = House(storeys=2)
        snapshot = house.as_json()
        assert house.to_dict()["storeys"] == 2
        snapshot["storeys"] = 99
        assert house.storeys == 2

    def test_equality_by_container(self):
        assert House(storeys=1) == House(storeys=1)
        assert House(storeys=1) != House(storeys=2)
