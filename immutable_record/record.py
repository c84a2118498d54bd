"""
Record types and record instances.

A `RecordType` is a compiled, reusable constructor bound to exactly one frozen
`Schema`. It is produced once per declaration by `immutable_record.generator.build`
and never changes afterwards. Calling it produces `Record` instances: immutable
values backed by a persistent map, sharing structure with each other on update.

Usage:
    Person = define("name", "age")
    alice = Person(name="Alice", age=30)
    older = alice.update(age=31)        # alice is untouched
    older.age, alice.age                # (31, 30)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple

from immutable_record.contracts import ShapePredicate
from immutable_record.domain.schema import Schema
from immutable_record.errors import MissingFieldError, UnknownFieldError
from immutable_record.infrastructure import persistent_map
from immutable_record.infrastructure.persistent_map import PMap
from immutable_record.strategies.abstract import ConstructionStrategy

_ABSENT = object()

Accessor = Callable[[PMap], Any]


def _collect(pairs: Optional[Mapping[str, Any]], kwargs: Dict[str, Any]) -> Mapping[str, Any]:
    if not kwargs:
        return pairs if pairs is not None else {}
    collected = dict(pairs) if pairs else {}
    collected.update(kwargs)
    return collected


class RecordType:
    """
    Constructor, accessor table and metadata for one schema.

    Attributes
    ----------
    name : str
        Name used in reprs and error messages.
    schema : Schema
        The frozen schema this type was built from.
    strategy : ConstructionStrategy
        Plain, defaulting or typed construction hooks.
    shape : ShapePredicate | None
        Compiled type contract; None when the schema is untyped or type
        checking was disabled at generation time.
    FIELDS, DEFAULTS, TYPES
        The schema's declarations, exposed for serializers and test harnesses.
    accessors : Mapping[str, Accessor]
        Field name -> extraction function over the backing persistent map.
    """

    def __init__(
        self,
        schema: Schema,
        strategy: ConstructionStrategy,
        shape: Optional[ShapePredicate] = None,
        name: str = "Record",
        type_checking: bool = True,
    ) -> None:
        self.name = name
        self.schema = schema
        self.strategy = strategy
        self.shape = shape
        self.type_checking = type_checking
        self.FIELDS = schema.fields
        self.DEFAULTS = schema.defaults
        self.TYPES = schema.types
        self.accessors: Mapping[str, Accessor] = MappingProxyType(
            {field: self._accessor(field) for field in schema.fields}
        )
        self._field_set = frozenset(schema.fields)
        self._sealed = True

    def __setattr__(self, key: str, value: Any) -> None:
        if getattr(self, "_sealed", False):
            raise AttributeError(f"{self.name} record type is immutable")
        object.__setattr__(self, key, value)

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{self.name} record type is immutable")

    def _accessor(self, field: str) -> Accessor:
        name = self.name

        def extract(data: PMap) -> Any:
            value = data.get(field, _ABSENT)
            if value is _ABSENT:
                raise MissingFieldError(name, field)
            return value

        extract.__name__ = field
        return extract

    def accessor(self, field: str) -> Accessor:
        try:
            return self.accessors[field]
        except KeyError:
            raise UnknownFieldError(self.name, field) from None

    def _reject_unknown(self, pairs: Mapping[str, Any]) -> None:
        for key in pairs:
            if key not in self._field_set:
                raise UnknownFieldError(self.name, key)

    def new(self, pairs: Optional[Mapping[str, Any]] = None, /, **kwargs: Any) -> Record:
        """
        Build a validated instance.

        Supplied pairs are merged over the schema defaults; for typed record
        types the merged mapping is checked against the shape predicate.

        Raises
        ------
        UnknownFieldError
            If a supplied key was never declared.
        TypeContractViolationError
            If the merged pairs violate the type contract (including a typed
            field with no default that was not supplied).
        """
        supplied = _collect(pairs, kwargs)
        self._reject_unknown(supplied)
        merged = self.strategy.merge(supplied)
        self.strategy.validate(merged)
        return Record(self, persistent_map.from_pairs(merged))

    __call__ = new

    def alloc(self, pairs: Mapping[str, Any]) -> Record:
        """
        Internal construction path used when rebuilding an instance from a
        persistent map produced by a structural update.

        Skips default merging and key checks. Type checking is NOT skipped:
        typed record types still validate the whole shape here.
        """
        data = persistent_map.alloc(pairs)
        self.strategy.validate(data)
        return Record(self, data)

    def valid(self, pairs: Mapping[str, Any]) -> bool:
        """
        Static check of a complete candidate mapping, without constructing.

        Always True for untyped record types (and when type checking is
        disabled) as long as every key is declared.
        """
        if any(key not in self._field_set for key in pairs):
            return False
        return self.shape is None or self.shape.valid(pairs)

    def __repr__(self) -> str:
        return (
            f"<RecordType {self.name} fields={self.FIELDS!r} strategy={self.strategy.name}>"
        )


class Record:
    """
    One immutable value produced by a `RecordType`.

    Field values are read as attributes (``r.name``), by subscription
    (``r["name"]``) or with `get`. Instances compare equal when they come from
    the same record type and hold the same pairs.
    """

    __slots__ = ("_type", "_data")

    _type: RecordType
    _data: PMap

    def __init__(self, record_type: RecordType, data: PMap) -> None:
        object.__setattr__(self, "_type", record_type)
        object.__setattr__(self, "_data", data)

    @property
    def record_type(self) -> RecordType:
        return self._type

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._type.accessor(name)(self._data)

    def __getitem__(self, name: str) -> Any:
        return self._type.accessor(name)(self._data)

    def get(self, name: str, default: Any = None) -> Any:
        """Value of a declared field, or ``default`` when it is absent."""
        self._type.accessor(name)
        return self._data.get(name, default)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self._type.name} is immutable; use update()")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{self._type.name} is immutable; use update()")

    def __copy__(self) -> Record:
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> Record:
        return self

    def update(self, pairs: Optional[Mapping[str, Any]] = None, /, **kwargs: Any) -> Record:
        """
        Return a new instance with the given fields replaced.

        All other pairs are structurally shared with this instance. Typed record
        types re-validate the full resulting mapping; on failure nothing is
        returned and this instance is unchanged.
        """
        changes = _collect(pairs, kwargs)
        if not changes:
            return self
        self._type._reject_unknown(changes)
        return self._type.alloc(persistent_map.put_all(self._data, changes))

    def set(self, name: str, value: Any) -> Record:
        """Single-field `update`."""
        return self.update({name: value})

    def valid(self, pairs: Optional[Mapping[str, Any]] = None, /, **kwargs: Any) -> bool:
        """Would `update` with these pairs succeed?"""
        changes = _collect(pairs, kwargs)
        return self._type.valid(persistent_map.put_all(self._data, changes))

    def keys(self) -> Tuple[str, ...]:
        data = self._data
        return tuple(field for field in self._type.FIELDS if field in data)

    def values(self) -> Tuple[Any, ...]:
        data = self._data
        return tuple(data[field] for field in self._type.FIELDS if field in data)

    def items(self) -> Tuple[Tuple[str, Any], ...]:
        data = self._data
        return tuple((field, data[field]) for field in self._type.FIELDS if field in data)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.items())

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self.items())

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._type is other._type and self._data == other._data

    def __hash__(self) -> int:
        return hash((id(self._type), self._data))

    def __repr__(self) -> str:
        inner = ", ".join(f"{field}={value!r}" for field, value in self.items())
        return f"{self._type.name}({inner})"


__all__ = ["Accessor", "Record", "RecordType"]
