from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from libs.core.watcher import WatcherCheckResult


@dataclass(frozen=True, slots=True)
class RedisWatcherCheckResult(WatcherCheckResult):
    database: int
    connection_string: str
    query: str = ""
    query_result: tuple[Any, ...] = ()

    @classmethod
    def create(
        cls,
        watcher: Any,
        is_valid: bool,
        database: int,
        connection_string: str,
        description: str = "",
        *,
        query: str | None = None,
        query_result: Any = (),
    ) -> "RedisWatcherCheckResult":
        return cls(
            watcher_name=watcher.name,
            watcher_group=watcher.group,
            is_valid=is_valid,
            description=description,
            database=database,
            connection_string=connection_string,
            query=query or "",
            query_result=tuple(query_result),
        )
