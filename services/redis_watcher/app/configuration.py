from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Any, Awaitable, Callable, Sequence

from .connection import RedisConnection, RedisConnectionProtocol
from .database import RedisQueryable
from .errors import InvalidArgumentError

DEFAULT_TIMEOUT = timedelta(seconds=5)

Predicate = Callable[[Sequence[Any]], bool]
AsyncPredicate = Callable[[Sequence[Any]], Awaitable[bool]]
ConnectionProvider = Callable[[str], RedisConnectionProtocol]
RedisProvider = Callable[[], RedisQueryable | None]


@dataclass(frozen=True, slots=True)
class RedisWatcherConfiguration:
    connection_string: str
    database: int
    timeout: timedelta = DEFAULT_TIMEOUT
    query: str | None = None
    ensure_that: Predicate | None = None
    ensure_that_async: AsyncPredicate | None = None
    connection_provider: ConnectionProvider | None = None
    redis_provider: RedisProvider | None = None

    def __post_init__(self) -> None:
        if not self.connection_string:
            raise InvalidArgumentError("Redis connection string can not be empty.")
        if self.database < 0:
            raise InvalidArgumentError("Database id can not be less than 0.")
        if self.timeout is None:
            raise InvalidArgumentError("Timeout can not be null.")
        if not isinstance(self.timeout, timedelta):
            raise InvalidArgumentError(f"Timeout must be a timedelta, got {type(self.timeout).__name__}.")
        if self.timeout <= timedelta(0):
            raise InvalidArgumentError("Timeout must be greater than zero.")

    @classmethod
    def create(
        cls,
        connection_string: str,
        database: int,
        timeout: timedelta | None = None,
    ) -> "RedisWatcherConfigurationBuilder":
        return RedisWatcherConfigurationBuilder(connection_string, database, timeout)

    def create_connection(self) -> RedisConnectionProtocol:
        if self.connection_provider is not None:
            return self.connection_provider(self.connection_string)
        return RedisConnection(self.connection_string, self.timeout)


class RedisWatcherConfigurationBuilder:
    """Validates and sets one field per call, returning itself for chaining."""

    def __init__(self, connection_string: str, database: int, timeout: timedelta | None = None) -> None:
        self._configuration = RedisWatcherConfiguration(
            connection_string=connection_string,
            database=database,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
        )

    def with_query(self, query: str) -> "RedisWatcherConfigurationBuilder":
        if not query:
            raise InvalidArgumentError("Redis query can not be empty.")
        return self._set(query=query)

    def ensure_that(self, predicate: Predicate) -> "RedisWatcherConfigurationBuilder":
        if predicate is None:
            raise InvalidArgumentError("Ensure that predicate can not be null.")
        return self._set(ensure_that=predicate)

    def ensure_that_async(self, predicate: AsyncPredicate) -> "RedisWatcherConfigurationBuilder":
        if predicate is None:
            raise InvalidArgumentError("Ensure that async predicate can not be null.")
        return self._set(ensure_that_async=predicate)

    def with_connection_provider(self, provider: ConnectionProvider) -> "RedisWatcherConfigurationBuilder":
        if provider is None:
            raise InvalidArgumentError("Redis connection provider can not be null.")
        return self._set(connection_provider=provider)

    def with_redis_provider(self, provider: RedisProvider) -> "RedisWatcherConfigurationBuilder":
        if provider is None:
            raise InvalidArgumentError("Redis provider can not be null.")
        return self._set(redis_provider=provider)

    def build(self) -> RedisWatcherConfiguration:
        return self._configuration

    def _set(self, **changes: Any) -> "RedisWatcherConfigurationBuilder":
        self._configuration = replace(self._configuration, **changes)
        return self
