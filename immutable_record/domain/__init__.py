"""
Domain package for immutable-record.

Exports schema declarations and the violation report model.
Keep this package focused on data definitions and validation concerns.
"""

from immutable_record.domain.models import MISSING_VALUE, FieldViolation
from immutable_record.domain.schema import Schema, SchemaBuilder

__all__ = [
    "FieldViolation",
    "MISSING_VALUE",
    "Schema",
    "SchemaBuilder",
]
