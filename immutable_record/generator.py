"""
Record type generator for immutable-record.

Turns a frozen `Schema` into a `RecordType` in discrete steps:

1. Select the construction strategy (typed / defaulting / plain).
2. Build the read accessor table, one extractor per declared field.
3. Compile the shape predicate for typed schemas and attach it as the contract
   guarding construction and every update. Typed defaults must satisfy it.
4. Expose FIELDS / DEFAULTS / TYPES as immutable metadata.

Two declaration forms produce equivalent record types:

    Person = define("name", "age")

    @declare
    def Address(f):
        f.field("lines", list[str])
        f.field("country", str, "Canada")
        f.field("current", default=True)
        f.field("city", str)

The type-checking switch is read once per `build` call: an explicit
``type_checking`` argument wins, otherwise `Settings.type_checking` is used.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

from immutable_record.config import get_settings
from immutable_record.contracts import ShapePredicate, compile_shape
from immutable_record.domain.schema import Schema, SchemaBuilder
from immutable_record.errors import InvalidDefaultError, InvalidFieldError
from immutable_record.record import Record, RecordType
from immutable_record.strategies import (
    ConstructionStrategy,
    DefaultingStrategy,
    PlainStrategy,
    TypedStrategy,
)
from immutable_record.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_NAME = "Record"

# Public Record attributes; a field with one of these names could never be read
# as an attribute.
RESERVED_NAMES = frozenset(name for name in dir(Record) if not name.startswith("_"))

SchemaBlock = Callable[[SchemaBuilder], Any]


def _check_reserved(schema: Schema) -> None:
    for field in schema.fields:
        if field in RESERVED_NAMES:
            raise InvalidFieldError(field, "shadows a Record method")


def _check_defaults(schema: Schema, shape: ShapePredicate) -> None:
    for field, default in schema.defaults.items():
        predicate = shape.predicates.get(field)
        if predicate is not None and not predicate(default):
            raise InvalidDefaultError(field, predicate.description, type(default).__name__)


def select_strategy(
    schema: Schema,
    shape: Optional[ShapePredicate],
    label: str = DEFAULT_NAME,
) -> ConstructionStrategy:
    """
    Pick the cheapest construction strategy that honours the schema.

    ``shape`` is None when the schema is untyped or type checking is disabled.
    """
    if shape is not None:
        return TypedStrategy(schema.defaults, shape, label)
    if schema.defaults:
        return DefaultingStrategy(schema.defaults)
    return PlainStrategy()


def build(
    schema: Schema,
    *,
    name: Optional[str] = None,
    type_checking: Optional[bool] = None,
) -> RecordType:
    """
    Compile a frozen schema into a new, independent record type.

    Parameters
    ----------
    schema : Schema
        Finalized schema; handed to exactly one record type.
    name : str, optional
        Record type name used in reprs and error messages.
    type_checking : bool, optional
        Explicit switch; None falls back to `get_settings().type_checking`.
        Disabling it is UNSAFE: typed fields are no longer validated.
    """
    label = name or DEFAULT_NAME
    if type_checking is None:
        type_checking = get_settings().type_checking
    _check_reserved(schema)

    shape: Optional[ShapePredicate] = None
    if schema.types:
        if type_checking:
            shape = compile_shape(schema.types, schema.fields)
            _check_defaults(schema, shape)
        else:
            log.warning(
                f"Type checking disabled for {label}; typed fields are not validated",
                extra={"record_type": label, "typed_fields": list(schema.types)},
            )

    strategy = select_strategy(schema, shape, label)
    record_type = RecordType(
        schema,
        strategy=strategy,
        shape=shape,
        name=label,
        type_checking=type_checking,
    )
    log.debug(
        f"Built record type {label}",
        extra={
            "record_type": label,
            "strategy": strategy.name,
            "fields": len(schema.fields),
        },
    )
    return record_type


def define(
    *fields: str,
    name: Optional[str] = None,
    type_checking: Optional[bool] = None,
) -> RecordType:
    """
    Flat form: a record type from bare field names (no types, no defaults).
    """
    schema = SchemaBuilder(fields).finalize()
    return build(schema, name=name, type_checking=type_checking)


def declare(
    block: Optional[SchemaBlock] = None,
    *,
    name: Optional[str] = None,
    type_checking: Optional[bool] = None,
) -> Union[RecordType, Callable[[SchemaBlock], RecordType]]:
    """
    Declarative form: ``block`` receives a `SchemaBuilder` and declares fields.

    Usable directly (``declare(fn)``), as a bare decorator (``@declare``) or
    with options (``@declare(type_checking=False)``). The function name becomes
    the record type name unless ``name`` is given.
    """

    def decorate(fn: SchemaBlock) -> RecordType:
        builder = SchemaBuilder()
        fn(builder)
        label = name or getattr(fn, "__name__", None)
        if not label or label == "<lambda>":
            label = DEFAULT_NAME
        return build(builder.finalize(), name=label, type_checking=type_checking)

    if block is None:
        return decorate
    return decorate(block)


__all__ = [
    "DEFAULT_NAME",
    "RESERVED_NAMES",
    "build",
    "declare",
    "define",
    "select_strategy",
]
