"""
Type contract engine for immutable-record.

Compiles a schema's per-field type specifications into a single `ShapePredicate`
that validates a complete field -> value mapping in one pass. Validation is
whole-record: record types call it on the merged construction pairs and on the
full post-update mapping, never on the changed fields alone.

Accepted type specifications:
- a class: ``isinstance`` check (``bool`` is rejected where ``int``/``float`` is expected)
- a callable predicate: truthy result means satisfied; a predicate that raises
  (``lambda v: v >= 0`` given a string) counts as not satisfied
- a typing annotation (``list[str]``, ``Optional[int]``, ``Literal["a", "b"]``, ...):
  checked with a strict pydantic ``TypeAdapter``; values are never coerced
- ``typing.Any``: always satisfied

The two paths differ on numbers: a bare ``float`` is an ``isinstance`` check and
rejects ``1``, while an annotation such as ``Optional[float]`` follows pydantic
strict mode, which accepts an ``int`` where a ``float`` is expected. Use
``int | float`` for a bare field that should take both.

Usage:
    from immutable_record.contracts import compile_shape

    shape = compile_shape({"age": int, "tags": list[str]})
    shape.valid({"age": 3, "tags": ["a"]})      # True
    shape.violations({"age": "3", "tags": []})  # [FieldViolation(field="age", ...)]
"""

from __future__ import annotations

import types
import typing
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUndefinedAnnotation, PydanticUserError

from immutable_record.domain.models import MISSING_VALUE, FieldViolation
from immutable_record.errors import SchemaError, TypeContractViolationError

_ABSENT = object()


class FieldPredicate:
    """
    A compiled single-field check plus the description used in error reports.
    """

    __slots__ = ("_check", "description")

    def __init__(self, check: Callable[[Any], Any], description: str) -> None:
        self._check = check
        self.description = description

    def __call__(self, value: Any) -> bool:
        return self.evaluate(value)[0]

    def evaluate(self, value: Any) -> tuple[bool, Optional[Exception]]:
        """
        Run the check; an exception raised by it means "not satisfied" and is
        returned alongside.
        """
        try:
            return bool(self._check(value)), None
        except Exception as exc:  # noqa: BLE001 - any predicate failure is a mismatch
            return False, exc

    def __repr__(self) -> str:
        return f"FieldPredicate({self.description})"


def _describe(spec: Any) -> str:
    if isinstance(spec, type) and typing.get_origin(spec) is None:
        return spec.__qualname__
    name = getattr(spec, "__name__", None)
    if name and not typing.get_origin(spec) and callable(spec):
        return name
    return repr(spec).replace("typing.", "")


def _instance_of(cls: type) -> Callable[[Any], bool]:
    if cls in (int, float):
        return lambda value: isinstance(value, cls) and not isinstance(value, bool)
    return lambda value: isinstance(value, cls)


def _annotation(spec: Any) -> Callable[[Any], bool]:
    try:
        adapter = TypeAdapter(spec)
    except (PydanticUserError, PydanticUndefinedAnnotation, TypeError) as exc:
        raise SchemaError(
            f"Unsupported type specification {spec!r}: {exc}", code="UNSUPPORTED_TYPE"
        ) from exc

    def check(value: Any) -> bool:
        try:
            adapter.validate_python(value, strict=True)
        except ValidationError:
            return False
        return True

    return check


def _is_annotation(spec: Any) -> bool:
    return typing.get_origin(spec) is not None or isinstance(spec, types.UnionType)


def compile_predicate(spec: Any) -> FieldPredicate:
    """
    Compile one field's type specification into a `FieldPredicate`.

    Raises
    ------
    SchemaError
        If ``spec`` is neither a class, a callable, nor a supported annotation.
    """
    if isinstance(spec, FieldPredicate):
        return spec
    description = _describe(spec)
    if spec is Any:
        return FieldPredicate(lambda value: True, "Any")
    if _is_annotation(spec):
        return FieldPredicate(_annotation(spec), description)
    if isinstance(spec, type):
        return FieldPredicate(_instance_of(spec), description)
    if callable(spec):
        return FieldPredicate(spec, description)
    return FieldPredicate(_annotation(spec), description)


class ShapePredicate:
    """
    Whole-record check compiled from a field name -> type specification mapping.

    Fields absent from the mapping are unconstrained. A constrained field that is
    missing from the candidate pairs is always a violation.
    """

    def __init__(self, predicates: Mapping[str, FieldPredicate]) -> None:
        self.predicates: Mapping[str, FieldPredicate] = MappingProxyType(dict(predicates))
        self._items = tuple(self.predicates.items())

    def valid(self, pairs: Mapping[str, Any]) -> bool:
        """Return True iff every constrained field is present and satisfied."""
        for name, predicate in self._items:
            value = pairs.get(name, _ABSENT)
            if value is _ABSENT or not predicate(value):
                return False
        return True

    __call__ = valid

    def _scan(self, pairs: Mapping[str, Any]) -> tuple[List[FieldViolation], Optional[Exception]]:
        found: List[FieldViolation] = []
        cause: Optional[Exception] = None
        for name, predicate in self._items:
            value = pairs.get(name, _ABSENT)
            if value is _ABSENT:
                actual = MISSING_VALUE
            else:
                satisfied, error = predicate.evaluate(value)
                if satisfied:
                    continue
                actual = type(value).__name__
                cause = cause or error
            found.append(
                FieldViolation(field=name, expected=predicate.description, actual=actual)
            )
        return found, cause

    def violations(self, pairs: Mapping[str, Any]) -> List[FieldViolation]:
        """Report every failing field, in declaration order."""
        return self._scan(pairs)[0]

    def check(self, pairs: Mapping[str, Any], record_type: str = "record") -> None:
        """
        Raise `TypeContractViolationError` unless ``pairs`` satisfies the shape.

        When a predicate raised, the first such exception is the error's cause.
        """
        if self.valid(pairs):
            return
        found, cause = self._scan(pairs)
        raise TypeContractViolationError(record_type, found) from cause

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._items)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}: {p.description}" for name, p in self._items)
        return f"Shape[{{{inner}}}]"


def compile_shape(
    types_: Mapping[str, Any], fields: Optional[Iterable[str]] = None
) -> ShapePredicate:
    """
    Compile per-field type specifications into one `ShapePredicate`.

    Parameters
    ----------
    types_ : Mapping[str, Any]
        Field name -> type specification.
    fields : Iterable[str], optional
        Declaration order used for violation reports; defaults to mapping order.
    """
    order = list(fields) if fields is not None else list(types_)
    return ShapePredicate(
        {name: compile_predicate(types_[name]) for name in order if name in types_}
    )


__all__ = ["FieldPredicate", "ShapePredicate", "compile_predicate", "compile_shape"]
