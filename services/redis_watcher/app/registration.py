from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable

from libs.core.watcher import WatcherRegistry

from .watcher import DEFAULT_NAME, Configurator, RedisWatcher


def add_redis_watcher(
    registry: WatcherRegistry,
    connection_string: str,
    database: int,
    timeout: timedelta | None = None,
    configurator: Configurator | None = None,
    hooks: Callable[..., Any] | None = None,
    interval: timedelta | None = None,
    group: str | None = None,
    name: str = DEFAULT_NAME,
) -> WatcherRegistry:
    watcher = RedisWatcher.create(
        connection_string,
        database,
        timeout,
        configurator=configurator,
        group=group,
        name=name,
    )
    return registry.add_watcher(watcher, hooks=hooks, interval=interval)
