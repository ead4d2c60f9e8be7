from __future__ import annotations

from datetime import timedelta
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from redis.asyncio import Redis

_URL_SCHEMES = ("redis://", "rediss://", "unix://")


def normalize_redis_url(connection_string: str) -> str:
    """Turn a redis URL or a bare ``host:port`` endpoint into a URL without a database selector.

    The database is always selected explicitly, so a ``/<db>`` path and a
    ``db`` query option are both dropped.
    """
    value = connection_string.strip()
    if not value.startswith(_URL_SCHEMES):
        value = f"redis://{value}"
    parts = urlsplit(value)
    options = parse_qsl(parts.query, keep_blank_values=True)
    query = urlencode([(key, option) for key, option in options if key.lower() != "db"])
    if parts.scheme in ("redis", "rediss"):
        return urlunsplit(parts._replace(path="", query=query))
    # unix:///path has no netloc; urlunsplit would collapse the slashes
    base = value.split("?", 1)[0]
    return f"{base}?{query}" if query else base


def build_redis(
    connection_string: str,
    *,
    db: int = 0,
    connect_timeout: timedelta | None = None,
    decode_responses: bool = True,
) -> Redis:
    """Create a Redis client bound to a single logical database.

    Values that are not valid UTF-8 are decoded with backslash escapes
    instead of failing the read.
    """
    timeout = connect_timeout.total_seconds() if connect_timeout is not None else None
    return Redis.from_url(
        normalize_redis_url(connection_string),
        db=db,
        socket_connect_timeout=timeout,
        decode_responses=decode_responses,
        encoding_errors="backslashreplace",
    )


async def ping(client: Redis) -> bool:
    """Round-trip a PING; transport errors propagate to the caller."""
    return bool(await client.ping())
