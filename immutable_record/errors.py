"""
Error hierarchy for immutable-record.

Error layers:
- RecordError: Base class for every error raised by this package
- SchemaError: Schema authoring mistakes, raised at declaration/generation time
- TypeContractViolationError: Constructed or updated pairs fail the shape predicate
- MissingFieldError / UnknownFieldError: Accessor lookups that cannot be answered

Nothing here is retried or recovered automatically; every error reaches the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from immutable_record.domain.models import FieldViolation


class RecordError(Exception):
    """Base class for all immutable-record errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Schema Errors (programmer errors, surfaced at declaration time)
# =============================================================================


class SchemaError(RecordError):
    """Base class for schema authoring errors."""


class SchemaFrozenError(SchemaError):
    """A field was declared after the schema was finalized."""

    def __init__(self, field: str) -> None:
        super().__init__(
            f"Cannot declare field '{field}': schema is already finalized",
            code="SCHEMA_FROZEN",
        )
        self.field = field


class DuplicateFieldError(SchemaError):
    """A field name was declared twice in the same schema."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Field '{field}' is already declared", code="DUPLICATE_FIELD")
        self.field = field


class InvalidFieldError(SchemaError):
    """A field name can never be exposed as an accessor."""

    def __init__(self, field: object, reason: str) -> None:
        super().__init__(f"Invalid field name {field!r}: {reason}", code="INVALID_FIELD")
        self.field = field


class InvalidDefaultError(SchemaError):
    """A typed field's default does not satisfy the field's own type."""

    def __init__(self, field: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Default for field '{field}' does not satisfy its type: expected {expected}, got {actual}",
            code="INVALID_DEFAULT",
        )
        self.field = field


# =============================================================================
# Data Errors (shape mismatches, surfaced at construction/update time)
# =============================================================================


class TypeContractViolationError(RecordError, TypeError):
    """Candidate pairs do not satisfy the record type's shape predicate."""

    def __init__(self, record_type: str, violations: Sequence[FieldViolation]) -> None:
        details = "; ".join(
            f"{v.field}: expected {v.expected}, got {v.actual}" for v in violations
        )
        super().__init__(
            f"Contract violation for {record_type}: {details}",
            code="TYPE_CONTRACT_VIOLATION",
        )
        self.record_type = record_type
        self.violations = tuple(violations)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(v.field for v in self.violations)


class MissingFieldError(RecordError, AttributeError):
    """A declared field has neither a supplied value nor a default."""

    def __init__(self, record_type: str, field: str) -> None:
        super().__init__(
            f"{record_type} has no value for field '{field}'", code="MISSING_FIELD"
        )
        self.record_type = record_type
        self.field = field


class UnknownFieldError(RecordError, AttributeError, KeyError):
    """A field name was never declared in the record type's schema."""

    def __init__(self, record_type: str, field: object) -> None:
        super().__init__(
            f"{record_type} has no field {field!r}", code="UNKNOWN_FIELD"
        )
        self.record_type = record_type
        self.field = field


__all__ = [
    "RecordError",
    "SchemaError",
    "SchemaFrozenError",
    "DuplicateFieldError",
    "InvalidFieldError",
    "InvalidDefaultError",
    "TypeContractViolationError",
    "MissingFieldError",
    "UnknownFieldError",
]
