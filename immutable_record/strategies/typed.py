"""
Typed strategy: merge over defaults, then validate the whole shape.

Validation runs on the complete candidate mapping, both at construction and on
every update, so a typed record can never be driven into an invalid state.
"""

from __future__ import annotations

from typing import Any, Mapping

from immutable_record.contracts import ShapePredicate
from immutable_record.strategies.defaulting import DefaultingStrategy


class TypedStrategy(DefaultingStrategy):
    """
    Default merge plus the compiled shape predicate as the type contract.
    """

    name: str = "typed"
    description: str = "Supplied pairs merged over defaults, whole-shape type contract."

    def __init__(self, defaults: Mapping[str, Any], shape: ShapePredicate, label: str) -> None:
        super().__init__(defaults)
        self.shape = shape
        self.label = label

    def validate(self, pairs: Mapping[str, Any]) -> None:
        self.shape.check(pairs, record_type=self.label)


__all__ = ["TypedStrategy"]
