"""
Construction strategy interfaces for immutable-record.

Every record type owns exactly one construction strategy, picked once at
generation time. The generic constructor in `immutable_record.record` calls the
two hooks in order:

    merged = strategy.merge(pairs)      # default substitution
    strategy.validate(merged)           # whole-shape type contract

Concrete strategies (plain, defaulting, typed) only differ in which hooks do
work, so all three are observably equivalent for equal defaults/types.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Mapping, Protocol, runtime_checkable


@runtime_checkable
class ConstructionStrategy(Protocol):
    """
    Common interface all construction strategies must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the approach.
    """

    name: str
    description: str

    def merge(self, pairs: Mapping[str, Any]) -> Mapping[str, Any]:
        """
        Merge supplied pairs over the schema defaults.

        Parameters
        ----------
        pairs : Mapping[str, Any]
            Field values supplied by the caller.

        Returns
        -------
        Mapping[str, Any]
            The pairs the new record instance will hold.
        """
        ...

    def validate(self, pairs: Mapping[str, Any]) -> None:
        """
        Check a complete candidate mapping; raise on contract violation.
        """
        ...


class AbstractConstructionStrategy(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `name` and `description` and implement both hooks.
    """

    name: str
    description: str

    @abc.abstractmethod
    def merge(self, pairs: Mapping[str, Any]) -> Mapping[str, Any]:  # pragma: no cover - interface only
        """Return the pairs a new instance will hold."""
        raise NotImplementedError

    @abc.abstractmethod
    def validate(self, pairs: Mapping[str, Any]) -> None:  # pragma: no cover - interface only
        """Raise if the pairs violate the record type's contract."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def merge_defaults(defaults: Mapping[str, Any], pairs: Mapping[str, Any]) -> Dict[str, Any]:
    """Supplied values win over defaults; fields with neither stay absent."""
    merged: Dict[str, Any] = {}
    merged.update(defaults)
    merged.update(pairs)
    return merged


__all__ = [
    "ConstructionStrategy",
    "AbstractConstructionStrategy",
    "merge_defaults",
]
