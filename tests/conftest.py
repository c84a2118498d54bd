"""
Pytest configuration for immutable-record.

Provides fixtures for:
- Settings isolation (no DISABLE_TYPES leaking between tests)
- Sample record types used across unit and integration tests
"""

from __future__ import annotations

from typing import Generator

import pytest

from immutable_record.config import get_settings
from immutable_record.generator import declare, define
from immutable_record.record import RecordType


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Clear the cached Settings around every test so env overrides take effect.
    """
    monkeypatch.delenv("DISABLE_TYPES", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def pet_type() -> RecordType:
    """
    woof defaults to "wood"; meowmix is a required int.
    """

    @declare(type_checking=True)
    def Pet(f):
        f.field("woof", default="wood")
        f.field("meowmix", int)

    return Pet


@pytest.fixture
def pair_type() -> RecordType:
    """
    Two required int fields.
    """

    @declare(type_checking=True)
    def Pair(f):
        f.field("a", int)
        f.field("b", int)

    return Pair


@pytest.fixture
def point_type() -> RecordType:
    """
    Flat, untyped record type.
    """
    return define("x", "y", name="Point")
