from __future__ import annotations

import os
import uuid

import pytest
import pytest_asyncio
from redis.exceptions import RedisError

from libs.core.redis import build_redis, ping
from services.redis_watcher.app.configuration import RedisWatcherConfiguration
from services.redis_watcher.app.watcher import RedisWatcher

TEST_REDIS_URL = os.getenv("TEST_REDIS_URL", "localhost:6379")
TEST_DATABASE = 15


@pytest_asyncio.fixture
async def redis_client():
    client = build_redis(TEST_REDIS_URL, db=TEST_DATABASE)
    try:
        await ping(client)
    except (RedisError, OSError) as exc:
        await client.aclose()
        pytest.skip(f"redis unavailable at {TEST_REDIS_URL}: {exc}")
    yield client
    await client.aclose()


@pytest.mark.asyncio
async def test_reachability_check_against_live_redis(redis_client) -> None:
    watcher = RedisWatcher.create(TEST_REDIS_URL, TEST_DATABASE)
    result = await watcher.execute()
    assert result.is_valid
    assert str(TEST_DATABASE) in result.description


@pytest.mark.asyncio
async def test_lrange_query_against_live_redis(redis_client) -> None:
    key = f"watcher-smoke-{uuid.uuid4().hex}"
    await redis_client.rpush(key, "a", "b", "c")
    try:
        watcher = RedisWatcher.create(
            TEST_REDIS_URL,
            TEST_DATABASE,
            configurator=lambda builder: builder.with_query(f"LRANGE {key} 0 -1").ensure_that(
                lambda results: results == [["a", "b", "c"]]
            ),
        )
        result = await watcher.execute()
    finally:
        await redis_client.delete(key)

    assert result.is_valid
    assert list(result.query_result) == [["a", "b", "c"]]


@pytest.mark.asyncio
async def test_unreachable_redis_is_reported_invalid() -> None:
    configuration = RedisWatcherConfiguration.create("127.0.0.1:1", 0).build()
    result = await RedisWatcher("unreachable", configuration).execute()
    assert not result.is_valid
    assert result.description


@pytest.mark.asyncio
async def test_binary_value_against_live_redis(redis_client) -> None:
    key = f"watcher-smoke-{uuid.uuid4().hex}"
    raw = build_redis(TEST_REDIS_URL, db=TEST_DATABASE, decode_responses=False)
    await raw.set(key, b"\xff\xfe")
    try:
        watcher = RedisWatcher.create(
            TEST_REDIS_URL,
            TEST_DATABASE,
            configurator=lambda builder: builder.with_query(f"get {key}"),
        )
        result = await watcher.execute()
    finally:
        await raw.delete(key)
        await raw.aclose()

    assert result.is_valid
    assert list(result.query_result) == ["\\xff\\xfe"]
