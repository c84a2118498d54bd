"""
Persistent map adapter for immutable-record.

Record instances store their field -> value pairs in a `pyrsistent.PMap`, a hash
array mapped trie that never changes in place: `put`/`put_all` return a new map
sharing structure with the old one. This module is the only place that talks to
pyrsistent, so the backing container can be swapped without touching the core.

Concurrent reads and copy-on-write updates need no locking because no PMap is
ever mutated after construction.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pyrsistent import PMap, pmap

EMPTY: PMap = pmap()


def from_pairs(pairs: Optional[Mapping[str, Any]] = None) -> PMap:
    """Build a map from an arbitrary mapping (copies the pairs)."""
    if not pairs:
        return EMPTY
    return pmap(pairs)


def alloc(pairs: Mapping[str, Any]) -> PMap:
    """
    Fast construction path: reuse `pairs` when it is already a PMap.

    Used when a new record instance is rebuilt from a map produced by a
    structural operation, so the trie is not copied again.
    """
    if isinstance(pairs, PMap):
        return pairs
    return pmap(pairs)


def get(pmap_: PMap, key: str, default: Any = None) -> Any:
    return pmap_.get(key, default)


def put(pmap_: PMap, key: str, value: Any) -> PMap:
    """Return a new map with `key` set to `value`; `pmap_` is untouched."""
    return pmap_.set(key, value)


def put_all(pmap_: PMap, pairs: Mapping[str, Any]) -> PMap:
    """Return a new map with every pair of `pairs` applied; `pmap_` is untouched."""
    if not pairs:
        return pmap_
    return pmap_.update(pairs)


__all__ = ["EMPTY", "PMap", "alloc", "from_pairs", "get", "put", "put_all"]
