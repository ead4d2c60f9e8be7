from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from libs.core.redis import build_redis, ping

from .database import RedisDatabase, RedisQueryable
from .errors import RedisConnectionError

logger = logging.getLogger(__name__)


class RedisConnectionProtocol(Protocol):
    connection_string: str
    timeout: timedelta

    async def open_database(self, database: int) -> RedisQueryable | None: ...

    async def close(self) -> None: ...


class RedisConnection:
    """Opens a fresh client for every ``open_database`` call; nothing is pooled across checks."""

    def __init__(self, connection_string: str, timeout: timedelta) -> None:
        self.connection_string = connection_string
        self.timeout = timeout
        self._client: Redis | None = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._connected

    async def open_database(self, database: int) -> RedisDatabase:
        await self.close()
        client = build_redis(self.connection_string, db=database, connect_timeout=self.timeout)
        self._client = client
        try:
            # redis-py connects lazily; PING forces the connect and the SELECT,
            # bounded so a server that accepts and then stalls still times out
            await asyncio.wait_for(ping(client), timeout=self.timeout.total_seconds())
        except (RedisError, OSError, asyncio.TimeoutError) as exc:
            logger.debug(
                "Redis connection failed",
                extra={"connection_string": self.connection_string, "database": database},
            )
            await self._release(client)
            raise RedisConnectionError(str(exc) or exc.__class__.__name__) from exc

        self._connected = True
        logger.debug(
            "Redis connection opened",
            extra={"connection_string": self.connection_string, "database": database},
        )
        return RedisDatabase(client, database)

    async def close(self) -> None:
        if not self.is_connected:
            return
        client = self._client
        await self._release(client)
        logger.debug("Redis connection closed", extra={"connection_string": self.connection_string})

    async def _release(self, client: Redis | None) -> None:
        self._client = None
        self._connected = False
        if client is not None:
            await client.aclose()
