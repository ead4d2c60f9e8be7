from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Callable

from redis.exceptions import RedisError

from libs.core.watcher import WatcherError

from .configuration import RedisWatcherConfiguration, RedisWatcherConfigurationBuilder
from .connection import RedisConnectionProtocol
from .database import RedisQueryable
from .errors import InvalidArgumentError, MissingConfigurationError, RedisConnectionError
from .result import RedisWatcherCheckResult

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Redis Watcher"

Configurator = Callable[[RedisWatcherConfigurationBuilder], Any]


class RedisWatcher:
    """Checks that a Redis database is reachable and, optionally, that a query returns what is expected.

    Every ``execute`` call opens its own connection and closes it on the way
    out, whatever happened in between. Failures of the store itself are
    reported as invalid results; anything else is raised as ``WatcherError``.
    Only the connect timeout is enforced here: the query and the predicates
    have no deadline of their own, so callers that need one should wrap
    ``execute`` in ``asyncio.wait_for``.
    """

    def __init__(
        self,
        name: str,
        configuration: RedisWatcherConfiguration | None,
        group: str | None = None,
    ) -> None:
        if not name:
            raise InvalidArgumentError("Watcher name can not be empty.")
        if configuration is None:
            raise MissingConfigurationError("Redis Watcher configuration has not been provided.")

        self.name = name
        self.group = group
        self._configuration = configuration

    @property
    def configuration(self) -> RedisWatcherConfiguration:
        return self._configuration

    async def execute(self) -> RedisWatcherCheckResult:
        configuration = self._configuration
        connection: RedisConnectionProtocol | None = None
        try:
            connection = configuration.create_connection()
            redis = await self._open(connection)
            if redis is None:
                return self._result(False, f"Database: '{configuration.database}' has not been found.")

            if not (configuration.query or "").strip():
                return self._result(True, f"Database: {configuration.database} has been successfully checked.")

            return await self._execute_for_query(redis)
        except (RedisConnectionError, RedisError) as exc:
            logger.warning(
                "Redis check failed",
                extra={"watcher": self.name, "database": configuration.database, "error": str(exc)},
            )
            return self._result(False, str(exc))
        except Exception as exc:
            logger.exception("Redis watcher failed", extra={"watcher": self.name, "database": configuration.database})
            raise WatcherError("There was an error while trying to access the Redis.") from exc
        finally:
            if connection is not None:
                await connection.close()

    async def _open(self, connection: RedisConnectionProtocol) -> RedisQueryable | None:
        if self._configuration.redis_provider is not None:
            redis = self._configuration.redis_provider()
            if redis is not None:
                return redis
        return await connection.open_database(self._configuration.database)

    async def _execute_for_query(self, redis: RedisQueryable) -> RedisWatcherCheckResult:
        configuration = self._configuration
        query_result = await redis.query(configuration.query)

        # both predicates always run; async first, no short-circuit between them
        is_valid = True
        if configuration.ensure_that_async is not None:
            is_valid = bool(await configuration.ensure_that_async(query_result)) and is_valid
        if configuration.ensure_that is not None:
            is_valid = bool(configuration.ensure_that(query_result)) and is_valid

        description = (
            f"Redis check has returned {'valid' if is_valid else 'invalid'} result for "
            f"database: '{configuration.database}' and given query."
        )
        return self._result(is_valid, description, query=configuration.query, query_result=query_result)

    def _result(self, is_valid: bool, description: str, **query_fields: Any) -> RedisWatcherCheckResult:
        return RedisWatcherCheckResult.create(
            self,
            is_valid,
            self._configuration.database,
            self._configuration.connection_string,
            description,
            **query_fields,
        )

    @classmethod
    def create(
        cls,
        connection_string: str,
        database: int,
        timeout: timedelta | None = None,
        configurator: Configurator | None = None,
        group: str | None = None,
        name: str = DEFAULT_NAME,
    ) -> "RedisWatcher":
        builder = RedisWatcherConfiguration.create(connection_string, database, timeout)
        if configurator is not None:
            configurator(builder)
        return cls.from_configuration(builder.build(), name=name, group=group)

    @classmethod
    def from_configuration(
        cls,
        configuration: RedisWatcherConfiguration | None,
        name: str = DEFAULT_NAME,
        group: str | None = None,
    ) -> "RedisWatcher":
        return cls(name, configuration, group)
