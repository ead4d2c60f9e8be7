from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from services.redis_watcher.app.config import contains_value, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for key in [
        "REDIS_DATABASE",
        "REDIS_TIMEOUT_SECONDS",
        "REDIS_QUERY",
        "REDIS_EXPECTED_VALUE",
        "WATCHER_NAME",
        "WATCHER_GROUP",
        "CHECK_INTERVAL_SECONDS",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379")


def test_settings_build_watcher(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REDIS_DATABASE", "2")
    monkeypatch.setenv("REDIS_TIMEOUT_SECONDS", "1.5")
    monkeypatch.setenv("REDIS_QUERY", "get status")
    monkeypatch.setenv("REDIS_EXPECTED_VALUE", "ok")
    monkeypatch.setenv("WATCHER_GROUP", "cache")

    settings = load_settings()
    watcher = settings.build_watcher()

    assert watcher.name == "Redis Watcher"
    assert watcher.group == "cache"
    assert settings.interval == timedelta(seconds=5)
    configuration = watcher.configuration
    assert configuration.database == 2
    assert configuration.timeout == timedelta(seconds=1.5)
    assert configuration.query == "get status"
    assert configuration.ensure_that(["ok"])


def test_settings_without_query():
    configuration = load_settings().build_configuration()
    assert configuration.query is None
    assert configuration.ensure_that is None


def test_negative_database_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REDIS_DATABASE", "-1")
    with pytest.raises(ValidationError):
        load_settings()


def test_zero_interval_is_rejected(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CHECK_INTERVAL_SECONDS", "0")
    with pytest.raises(ValidationError):
        load_settings()


def test_contains_value_looks_into_lists():
    predicate = contains_value("b")
    assert predicate([["a", "b"]])
    assert predicate(["b"])
    assert not predicate([["a"], "c", None])
