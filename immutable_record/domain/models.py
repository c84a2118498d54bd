"""
Domain models for immutable-record.

Defines the violation report produced by the type contract engine. Carried by
`TypeContractViolationError` and returned by `ShapePredicate.violations` so that
callers (and external validators) can inspect every failing field at once.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

MISSING_VALUE = "<missing>"


class FieldViolation(BaseModel):
    """
    One field of a candidate mapping that failed its type predicate.
    """

    field: str = Field(..., description="Declared field name.")
    expected: str = Field(..., description="Description of the field's type predicate.")
    actual: str = Field(..., description="Type name of the offending value, or <missing>.")

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": False,
    }


__all__ = ["FieldViolation", "MISSING_VALUE"]
