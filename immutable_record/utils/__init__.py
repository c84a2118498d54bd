"""
Utilities package for immutable-record.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of record-specific logic.
"""

from immutable_record.utils.logging import configure_logging, get_logger
from immutable_record.utils.profiler import ProfileStats, profile_block, profile_function

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
    "profile_function",
]
