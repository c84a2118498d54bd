"""
immutable-record - typed, immutable records backed by a persistent map.

Declare a schema once and get a reusable record type whose instances are
immutable key-value values, validated against the schema at construction and
on every update:

- Flat declarations (`define("name", "age")`)
- Declarative schemas with per-field types and defaults (`@declare`)
- Whole-record type contracts compiled once per record type
- Copy-on-write updates with structural sharing (pyrsistent)

Type checking can be disabled with DISABLE_TYPES=1 (or `type_checking=False`)
as an UNSAFE performance escape hatch.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from immutable_record.config import Settings, get_settings
from immutable_record.contracts import FieldPredicate, ShapePredicate, compile_predicate, compile_shape
from immutable_record.domain import FieldViolation, Schema, SchemaBuilder
from immutable_record.errors import (
    DuplicateFieldError,
    InvalidDefaultError,
    InvalidFieldError,
    MissingFieldError,
    RecordError,
    SchemaError,
    SchemaFrozenError,
    TypeContractViolationError,
    UnknownFieldError,
)
from immutable_record.generator import build, declare, define
from immutable_record.record import Record, RecordType
from immutable_record.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Declarations
    "Schema",
    "SchemaBuilder",
    "build",
    "declare",
    "define",
    # Records
    "Record",
    "RecordType",
    # Type contracts
    "FieldPredicate",
    "FieldViolation",
    "ShapePredicate",
    "compile_predicate",
    "compile_shape",
    # Errors
    "RecordError",
    "SchemaError",
    "SchemaFrozenError",
    "DuplicateFieldError",
    "InvalidDefaultError",
    "InvalidFieldError",
    "TypeContractViolationError",
    "MissingFieldError",
    "UnknownFieldError",
    # Logging
    "configure_logging",
    "get_logger",
]
