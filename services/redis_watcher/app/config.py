from __future__ import annotations

import os
from datetime import timedelta
from typing import Any, Optional, Sequence

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .configuration import Predicate, RedisWatcherConfiguration
from .watcher import DEFAULT_NAME, RedisWatcher


class RedisWatcherSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=os.getenv("REDIS_WATCHER_ENV_FILE"),
        case_sensitive=False,
    )

    redis_url: str = Field(...)
    redis_database: int = Field(default=0)
    redis_timeout_seconds: float = Field(default=5.0)
    redis_query: Optional[str] = Field(default=None)
    redis_expected_value: Optional[str] = Field(default=None)
    watcher_name: str = Field(default=DEFAULT_NAME)
    watcher_group: Optional[str] = Field(default=None)
    check_interval_seconds: float = Field(default=5.0)
    log_level: str = Field(default="INFO")

    @field_validator("redis_database")
    @classmethod
    def validate_database(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"REDIS_DATABASE can not be less than 0, got {value}")
        return value

    @field_validator("redis_timeout_seconds", "check_interval_seconds")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError(f"value must be greater than zero, got {value}")
        return value

    @property
    def timeout(self) -> timedelta:
        return timedelta(seconds=self.redis_timeout_seconds)

    @property
    def interval(self) -> timedelta:
        return timedelta(seconds=self.check_interval_seconds)

    def build_configuration(self) -> RedisWatcherConfiguration:
        builder = RedisWatcherConfiguration.create(self.redis_url, self.redis_database, self.timeout)
        if self.redis_query:
            builder.with_query(self.redis_query)
        if self.redis_expected_value is not None:
            builder.ensure_that(contains_value(self.redis_expected_value))
        return builder.build()

    def build_watcher(self) -> RedisWatcher:
        return RedisWatcher(self.watcher_name, self.build_configuration(), self.watcher_group)


def contains_value(expected: str) -> Predicate:
    """Predicate that looks for ``expected`` in the results, one level into nested lists."""

    def _predicate(results: Sequence[Any]) -> bool:
        for item in results:
            if isinstance(item, (list, tuple)):
                if expected in item:
                    return True
            elif item == expected:
                return True
        return False

    return _predicate


def load_settings() -> RedisWatcherSettings:
    return RedisWatcherSettings()
