from __future__ import annotations

import logging

import pytest

from immutable_record.config import get_settings
from immutable_record.domain.schema import SchemaBuilder
from immutable_record.errors import (
    InvalidDefaultError,
    InvalidFieldError,
    MissingFieldError,
    SchemaError,
    TypeContractViolationError,
    UnknownFieldError,
)
from immutable_record.generator import RESERVED_NAMES, build, declare, define, select_strategy
from immutable_record.record import RecordType
from immutable_record.strategies import DefaultingStrategy, PlainStrategy, TypedStrategy


class TestStrategySelection:
    """The plain / defaulting / typed branch."""

    def test_flat_schema_uses_plain_strategy(self):
        record_type = define("a", "b")
        assert isinstance(record_type.strategy, PlainStrategy)
        assert record_type.shape is None

    def test_defaults_use_defaulting_strategy(self):
        record_type = declare(lambda f: f.field("a", default=1), type_checking=True)
        assert isinstance(record_type.strategy, DefaultingStrategy)
        assert record_type.shape is None

    def test_types_use_typed_strategy(self, pet_type: RecordType):
        assert isinstance(pet_type.strategy, TypedStrategy)
        assert pet_type.shape is not None
        assert pet_type.shape.fields == ("meowmix",)

    def test_types_without_checking_fall_back(self):
        typed_with_default = SchemaBuilder().field("a", int, 1).finalize()
        typed_only = SchemaBuilder().field("a", int).finalize()

        assert isinstance(build(typed_with_default, type_checking=False).strategy, DefaultingStrategy)
        assert isinstance(build(typed_only, type_checking=False).strategy, PlainStrategy)

    def test_select_strategy_without_shape_ignores_types(self):
        schema = SchemaBuilder().field("a", int).finalize()
        assert isinstance(select_strategy(schema, None), PlainStrategy)


class TestMetadata:
    def test_fields_defaults_types_are_exposed(self, pet_type: RecordType):
        assert pet_type.FIELDS == ("woof", "meowmix")
        assert dict(pet_type.DEFAULTS) == {"woof": "wood"}
        assert dict(pet_type.TYPES) == {"meowmix": int}
        assert pet_type.schema.fields == pet_type.FIELDS

    def test_accessor_table_has_one_entry_per_field(self, pet_type: RecordType):
        assert list(pet_type.accessors) == ["woof", "meowmix"]
        with pytest.raises(TypeError):
            pet_type.accessors["extra"] = lambda data: None  # type: ignore[index]

    def test_record_type_is_immutable(self, pet_type: RecordType):
        with pytest.raises(AttributeError):
            pet_type.shape = None
        with pytest.raises(AttributeError):
            del pet_type.name

    def test_unknown_accessor_lookup(self, pet_type: RecordType):
        with pytest.raises(UnknownFieldError):
            pet_type.accessor("nope")

    def test_repr(self, pet_type: RecordType):
        assert repr(pet_type) == "<RecordType Pet fields=('woof', 'meowmix') strategy=typed>"


class TestDeclarationForms:
    def test_decorator_uses_function_name(self, pet_type: RecordType):
        assert pet_type.name == "Pet"

    def test_lambda_and_explicit_names(self):
        assert declare(lambda f: f.field("a")).name == "Record"
        assert declare(lambda f: f.field("a"), name="Thing").name == "Thing"
        assert define("a", name="Flat").name == "Flat"

    def test_decorator_with_options(self):
        @declare(name="Address", type_checking=True)
        def address(f):
            f.field("lines", list[str])
            f.field("country", str, "Canada")
            f.field("current", default=True)
            f.field("city", str)

        home = address.new(lines=["1 Main St"], city="Ottawa")

        assert address.name == "Address"
        assert home.country == "Canada"
        assert home.current is True
        with pytest.raises(TypeContractViolationError):
            address.new(lines="1 Main St", city="Ottawa")

    def test_flat_and_declarative_forms_are_equivalent(self):
        flat = define("x", "y")
        declared = declare(lambda f: f.field("x").field("y"))

        assert list(flat.accessors) == list(declared.accessors)
        assert flat.schema == declared.schema
        assert flat.new(x=1, y=2).to_dict() == declared.new(x=1, y=2).to_dict()

        for record_type in (flat, declared):
            with pytest.raises(UnknownFieldError):
                record_type.new(z=1)
            partial = record_type.new(x=1)
            with pytest.raises(MissingFieldError):
                partial.y

    def test_default_failing_its_own_type_is_rejected(self):
        with pytest.raises(InvalidDefaultError) as excinfo:
            declare(lambda f: f.field("a", int, "not-int"), type_checking=True)

        assert excinfo.value.field == "a"
        assert excinfo.value.code == "INVALID_DEFAULT"
        assert isinstance(excinfo.value, SchemaError)
        assert "expected int, got str" in str(excinfo.value)

    def test_default_is_not_checked_when_type_checking_is_off(self):
        record_type = declare(lambda f: f.field("a", int, "not-int"), type_checking=False)
        assert record_type.new().a == "not-int"

    @pytest.mark.parametrize("name", sorted(RESERVED_NAMES))
    def test_reserved_names_are_rejected(self, name):
        with pytest.raises(InvalidFieldError):
            define(name)


class TestTypeCheckingSwitch:
    def test_explicit_false_skips_validation(self):
        schema = SchemaBuilder().field("meowmix", int).finalize()
        unchecked = build(schema, type_checking=False)

        record = unchecked.new(meowmix="not an int")

        assert record.meowmix == "not an int"
        assert unchecked.type_checking is False

    def test_settings_switch_is_used_when_not_explicit(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DISABLE_TYPES", "1")
        get_settings.cache_clear()
        schema = SchemaBuilder().field("meowmix", int).finalize()

        unchecked = build(schema)
        checked = build(schema, type_checking=True)

        assert unchecked.shape is None
        assert unchecked.new(meowmix="x").meowmix == "x"
        with pytest.raises(TypeContractViolationError):
            checked.new(meowmix="x")

    def test_switch_is_read_once_at_generation(self, monkeypatch: pytest.MonkeyPatch):
        schema = SchemaBuilder().field("meowmix", int).finalize()
        checked = build(schema)

        monkeypatch.setenv("DISABLE_TYPES", "1")
        get_settings.cache_clear()

        with pytest.raises(TypeContractViolationError):
            checked.new(meowmix="x")

    def test_disabled_checking_logs_a_warning(self, caplog: pytest.LogCaptureFixture):
        schema = SchemaBuilder().field("meowmix", int).finalize()

        with caplog.at_level(logging.WARNING, logger="immutable_record.generator"):
            build(schema, name="Unsafe", type_checking=False)

        assert any("Type checking disabled for Unsafe" in r.getMessage() for r in caplog.records)
