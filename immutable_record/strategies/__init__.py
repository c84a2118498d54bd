"""
Strategies package for immutable-record.

This module re-exports the construction strategy interface and the concrete
strategies so downstream code can import from `immutable_record.strategies` directly.
"""

from immutable_record.strategies.abstract import (
    AbstractConstructionStrategy,
    ConstructionStrategy,
    merge_defaults,
)
from immutable_record.strategies.defaulting import DefaultingStrategy
from immutable_record.strategies.plain import PlainStrategy
from immutable_record.strategies.typed import TypedStrategy

__all__ = [
    # Abstracts
    "AbstractConstructionStrategy",
    "ConstructionStrategy",
    "merge_defaults",
    # Concrete strategies
    "DefaultingStrategy",
    "PlainStrategy",
    "TypedStrategy",
]
