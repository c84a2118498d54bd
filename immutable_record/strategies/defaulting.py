"""
Defaulting strategy: merge supplied pairs over the schema defaults.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from immutable_record.strategies.abstract import AbstractConstructionStrategy, merge_defaults


class DefaultingStrategy(AbstractConstructionStrategy):
    """
    Fills in declared defaults for fields the caller did not supply.
    """

    name: str = "defaulting"
    description: str = "Supplied pairs merged over defaults, no validation."

    def __init__(self, defaults: Mapping[str, Any]) -> None:
        self.defaults = MappingProxyType(dict(defaults))

    def merge(self, pairs: Mapping[str, Any]) -> Mapping[str, Any]:
        return merge_defaults(self.defaults, pairs)

    def validate(self, pairs: Mapping[str, Any]) -> None:
        return None


__all__ = ["DefaultingStrategy"]
