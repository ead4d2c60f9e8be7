from __future__ import annotations

import asyncio
import logging
import time
from datetime import timedelta

from libs.core.logging import json_log
from libs.core.watcher import Watcher, WatcherCheckResult

logger = logging.getLogger(__name__)
SERVICE = "redis-watcher"


async def run_check(watcher: Watcher) -> WatcherCheckResult:
    start = time.perf_counter()
    result = await watcher.execute()
    latency_ms = (time.perf_counter() - start) * 1000
    json_log(
        logger,
        "info" if result.is_valid else "warning",
        "check_finished",
        service=SERVICE,
        watcher=watcher.name,
        group=watcher.group,
        is_valid=result.is_valid,
        description=result.description,
        database=getattr(result, "database", None),
        latency_ms=round(latency_ms, 2),
    )
    return result


async def run_forever(
    watcher: Watcher,
    interval: timedelta,
    stop_event: asyncio.Event | None = None,
) -> None:
    """Run checks back to back, ``interval`` apart, until ``stop_event`` is set.

    ``WatcherError`` is not handled here and ends the loop.
    """
    stop_event = stop_event or asyncio.Event()
    json_log(logger, "info", "watcher_started", service=SERVICE, watcher=watcher.name, interval_s=interval.total_seconds())
    while not stop_event.is_set():
        await run_check(watcher)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval.total_seconds())
        except asyncio.TimeoutError:
            continue
    json_log(logger, "info", "watcher_stopped", service=SERVICE, watcher=watcher.name)
