"""
Configuration settings for immutable-record.

Uses Pydantic Settings to load environment variables for the type-checking
switch, logging, and benchmark defaults. Record type generation reads the
switch once through `get_settings()` unless an explicit `type_checking`
value is passed to the generator.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Type contracts
    # UNSAFE: skips compiling and running shape predicates for every record
    # type generated afterwards. Only meant as a performance escape hatch.
    disable_types: bool = Field(False, alias="DISABLE_TYPES")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Benchmark defaults
    bench_count: int = Field(100_000, alias="BENCH_COUNT", gt=0)
    bench_runs: int = Field(1, alias="BENCH_RUNS", gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def type_checking(self) -> bool:
        return not self.disable_types


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
