"""
Infrastructure package for immutable-record.

Centralizes the external persistent map collaborator. Keep this layer focused on
storage concerns, decoupled from schema/contract/generator logic.
"""

from immutable_record.infrastructure.persistent_map import (
    EMPTY,
    PMap,
    alloc,
    from_pairs,
    get,
    put,
    put_all,
)

__all__ = [
    "EMPTY",
    "PMap",
    "alloc",
    "from_pairs",
    "get",
    "put",
    "put_all",
]
