"""
Plain strategy: no defaults, no type contract.

The cheapest path; supplied pairs are stored as given.
"""

from __future__ import annotations

from typing import Any, Mapping

from immutable_record.strategies.abstract import AbstractConstructionStrategy


class PlainStrategy(AbstractConstructionStrategy):
    """
    Used when the schema declares no defaults and no types (or type checking
    is disabled and no defaults exist).
    """

    name: str = "plain"
    description: str = "Pairs stored as supplied (no default merge, no validation)."

    def merge(self, pairs: Mapping[str, Any]) -> Mapping[str, Any]:
        return pairs

    def validate(self, pairs: Mapping[str, Any]) -> None:
        return None


__all__ = ["PlainStrategy"]
