"""Boundary types shared with the host monitoring framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Protocol, runtime_checkable

DEFAULT_INTERVAL = timedelta(seconds=5)


class WatcherError(Exception):
    """Fatal watcher failure: a configuration or programming defect, not a health signal."""


@dataclass(frozen=True, slots=True)
class WatcherCheckResult:
    watcher_name: str
    watcher_group: str | None
    is_valid: bool
    description: str


@runtime_checkable
class Watcher(Protocol):
    name: str
    group: str | None

    async def execute(self) -> WatcherCheckResult: ...


@dataclass(slots=True)
class WatcherRegistration:
    watcher: Watcher
    interval: timedelta = DEFAULT_INTERVAL
    hooks: Callable[..., Any] | None = None


@dataclass(slots=True)
class WatcherRegistry:
    """Collects watchers for a host scheduler; each call returns the registry for chaining."""

    registrations: list[WatcherRegistration] = field(default_factory=list)

    def add_watcher(
        self,
        watcher: Watcher,
        *,
        hooks: Callable[..., Any] | None = None,
        interval: timedelta | None = None,
    ) -> "WatcherRegistry":
        if watcher is None:
            raise ValueError("Watcher can not be null.")
        if interval is not None and interval <= timedelta(0):
            raise ValueError("Watcher interval must be greater than zero.")
        self.registrations.append(
            WatcherRegistration(
                watcher=watcher,
                interval=interval or DEFAULT_INTERVAL,
                hooks=hooks,
            )
        )
        return self

    def __len__(self) -> int:
        return len(self.registrations)
