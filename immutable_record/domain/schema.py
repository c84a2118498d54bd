"""
Schema declarations for immutable-record.

A `SchemaBuilder` accumulates field declarations (name, optional type, optional
default) and is frozen exactly once into a `Schema`. Two entry points produce
structurally equal schemas for the same fields:

    SchemaBuilder(["name", "age"]).finalize()

    builder = SchemaBuilder()
    builder.field("name").field("age")
    builder.finalize()

`None` as a type or default means "not declared": such fields do not appear in
`Schema.types` / `Schema.defaults`.
"""
from __future__ import annotations

import keyword
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from immutable_record.errors import DuplicateFieldError, InvalidFieldError, SchemaFrozenError


@dataclass(frozen=True, eq=True)
class Schema:
    """
    Immutable declaration of a record's fields.

    Attributes
    ----------
    fields : tuple[str, ...]
        Field names in declaration order.
    defaults : Mapping[str, Any]
        Field name -> default value, only for fields declared with a default.
    types : Mapping[str, Any]
        Field name -> type specification, only for fields declared with a type.
    """

    fields: tuple[str, ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    types: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    # Mapping proxies are not hashable; schemas compare structurally only.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not isinstance(self.defaults, MappingProxyType):
            object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))
        if not isinstance(self.types, MappingProxyType):
            object.__setattr__(self, "types", MappingProxyType(dict(self.types)))
        object.__setattr__(self, "fields", tuple(self.fields))

        declared: set[str] = set()
        for name in self.fields:
            if name in declared:
                raise DuplicateFieldError(name)
            declared.add(_check_name(name))
        for name in (*self.defaults, *self.types):
            if name not in declared:
                raise InvalidFieldError(name, "not listed in fields")

    @property
    def typed(self) -> bool:
        return bool(self.types)

    @property
    def required(self) -> tuple[str, ...]:
        """Typed fields without a default: every construction must supply them."""
        return tuple(
            name for name in self.fields if name in self.types and name not in self.defaults
        )


def _check_name(name: object) -> str:
    if not isinstance(name, str):
        raise InvalidFieldError(name, "field names must be strings")
    if not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidFieldError(name, "field names must be valid Python identifiers")
    if name.startswith("_"):
        raise InvalidFieldError(name, "field names must not start with an underscore")
    return name


class SchemaBuilder:
    """
    Single-use builder session for one record type declaration.

    Supports the positional shorthand ``field("country", str, "Canada")`` and the
    keyword form ``field("current", default=True)``.
    """

    def __init__(self, fields: Iterable[str] = ()) -> None:
        self._fields: list[str] = []
        self._defaults: dict[str, Any] = {}
        self._types: dict[str, Any] = {}
        self._schema: Optional[Schema] = None
        for name in fields:
            self.field(name)

    @property
    def frozen(self) -> bool:
        return self._schema is not None

    def field(self, name: str, type: Any = None, default: Any = None) -> SchemaBuilder:
        """
        Declare one field.

        Parameters
        ----------
        name : str
            Field name; becomes the accessor name on record instances.
        type : Any
            Optional type specification: a class, a predicate callable, or a
            typing annotation such as ``list[str]``.
        default : Any
            Optional default used when construction does not supply the field.

        Raises
        ------
        SchemaFrozenError
            If the builder has already been finalized.
        DuplicateFieldError
            If ``name`` is already declared.
        """
        if self._schema is not None:
            raise SchemaFrozenError(str(name))
        name = _check_name(name)
        if name in self._fields:
            raise DuplicateFieldError(name)

        if default is not None:
            self._defaults[name] = default
        if type is not None:
            self._types[name] = type
        self._fields.append(name)
        return self

    def finalize(self) -> Schema:
        """Freeze the declarations; repeated calls return the same Schema."""
        if self._schema is None:
            self._schema = Schema(
                fields=tuple(self._fields),
                defaults=MappingProxyType(dict(self._defaults)),
                types=MappingProxyType(dict(self._types)),
            )
        return self._schema


__all__ = ["Schema", "SchemaBuilder"]
