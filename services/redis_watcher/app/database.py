from __future__ import annotations

from typing import Any, Protocol

from .query import RedisCommands, execute_query


class RedisQueryable(Protocol):
    async def query(self, query: str | None) -> list[Any]: ...


class RedisDatabase:
    """Handle to one selected Redis database."""

    def __init__(self, client: RedisCommands, database: int) -> None:
        self._client = client
        self.database = database

    async def query(self, query: str | None) -> list[Any]:
        return await execute_query(self._client, query)
