from .logging import configure_logging, json_log
from .redis import build_redis, normalize_redis_url, ping
from .watcher import (
    Watcher,
    WatcherCheckResult,
    WatcherError,
    WatcherRegistration,
    WatcherRegistry,
)

__all__ = [
    "configure_logging",
    "json_log",
    "build_redis",
    "normalize_redis_url",
    "ping",
    "Watcher",
    "WatcherCheckResult",
    "WatcherError",
    "WatcherRegistration",
    "WatcherRegistry",
]
