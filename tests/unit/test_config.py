from __future__ import annotations

import pytest

from immutable_record import config

DEFAULT_BENCH_COUNT = 100_000


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.disable_types is False
    assert settings.type_checking is True
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.bench_count == DEFAULT_BENCH_COUNT
    assert settings.bench_runs == 1


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()


def test_disable_types_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DISABLE_TYPES", "1")
    monkeypatch.setenv("BENCH_COUNT", "500")
    config.get_settings.cache_clear()

    settings = config.get_settings()

    assert settings.disable_types is True
    assert settings.type_checking is False
    assert settings.bench_count == 500


def test_settings_accept_field_names():
    settings = config.Settings(disable_types=True, log_level="DEBUG")
    assert settings.type_checking is False
    assert settings.log_level == "DEBUG"
