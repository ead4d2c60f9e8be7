"""Minimal query language for Redis checks: ``get``, ``set`` and ``lrange``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Protocol

from .errors import MalformedCommandError, UnsupportedCommandError

logger = logging.getLogger(__name__)


class RedisCommands(Protocol):
    async def get(self, name: str) -> Any: ...

    async def set(self, name: str, value: str) -> Any: ...

    async def lrange(self, name: str, start: int, end: int) -> Any: ...


@dataclass(frozen=True, slots=True)
class Command:
    name: str = ""
    arguments: tuple[str, ...] = field(default_factory=tuple)


def parse_query(query: str | None) -> Command:
    """Split a query into a command name and its arguments.

    The whole query is lower-cased and split on single spaces, so keys and
    values are case-normalized as well.
    """
    normalized = (query or "").strip().lower()
    if not normalized:
        return Command()
    tokens = normalized.split(" ")
    return Command(name=tokens[0], arguments=tuple(tokens[1:]))


async def execute_query(client: RedisCommands, query: str | None) -> list[Any]:
    command = parse_query(query)
    if not command.name:
        return []

    handler = _HANDLERS.get(command.name)
    if handler is None:
        raise UnsupportedCommandError(command.name)

    logger.debug("Executing Redis command", extra={"command": command.name, "arguments": list(command.arguments)})
    return await handler(client, command)


def _expect_arguments(command: Command, *names: str) -> None:
    if len(command.arguments) != len(names):
        expected = " ".join(f"<{name}>" for name in names)
        raise MalformedCommandError(
            command.name,
            f"expected '{command.name} {expected}', got {len(command.arguments)} argument(s)",
        )


def _parse_index(command: Command, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise MalformedCommandError(command.name, f"'{raw}' is not an integer") from None


async def _execute_get(client: RedisCommands, command: Command) -> list[Any]:
    _expect_arguments(command, "key")
    (key,) = command.arguments
    return [await client.get(key)]


async def _execute_set(client: RedisCommands, command: Command) -> list[Any]:
    _expect_arguments(command, "key", "value")
    key, value = command.arguments
    return [bool(await client.set(key, value))]


async def _execute_lrange(client: RedisCommands, command: Command) -> list[Any]:
    _expect_arguments(command, "key", "start", "stop")
    key, raw_start, raw_stop = command.arguments
    start = _parse_index(command, raw_start)
    stop = _parse_index(command, raw_stop)
    return [list(await client.lrange(key, start, stop))]


_HANDLERS: dict[str, Callable[[RedisCommands, Command], Awaitable[list[Any]]]] = {
    "get": _execute_get,
    "set": _execute_set,
    "lrange": _execute_lrange,
}
