"""Tests for the fail-open Redis cache wrapper"""

import json
from unittest.mock import MagicMock

from app.cache import Cache, invalidate_setting_cache, setting_cache_key


def cache_with(client) -> Cache:
    cache = Cache()
    cache.redis_client = client
    return cache


def test_without_redis_every_lookup_misses():
    cache = Cache()
    assert cache.get("theme:active") is None
    assert cache.set("theme:active", {"a": 1}) is False
    assert cache.ping() is False


def test_round_trip_through_client():
    client = MagicMock()
    client.get.return_value = json.dumps({"value": "30"})
    cache = cache_with(client)

    assert cache.set("setting:MAX", {"value": "30"}, ttl=60) is True
    client.setex.assert_called_once_with("setting:MAX", 60, json.dumps({"value": "30"}))
    assert cache.get("setting:MAX") == {"value": "30"}


def test_client_errors_fail_open():
    client = MagicMock()
    client.get.side_effect = ConnectionError("down")
    client.delete.side_effect = ConnectionError("down")
    cache = cache_with(client)

    assert cache.get("x") is None
    assert cache.delete("x") is False


def test_setting_keys_are_normalised(monkeypatch):
    client = MagicMock()
    monkeypatch.setattr("app.cache.cache", cache_with(client))

    assert setting_cache_key("max_appointments_per_day") == "setting:MAX_APPOINTMENTS_PER_DAY"
    assert invalidate_setting_cache("reminder_hours") is True
    client.delete.assert_called_once_with("setting:REMINDER_HOURS")


def test_reconnects_after_cooldown(monkeypatch):
    client = MagicMock()
    client.get.return_value = json.dumps({"value": "24"})
    attempts = []

    def connect():
        attempts.append(1)
        if len(attempts) == 1:
            raise ConnectionError("redis down")
        return client

    monkeypatch.setattr("app.cache.get_redis_client", connect)
    cache = Cache()

    assert cache.get("setting:REMINDER_HOURS") is None
    assert cache.get("setting:REMINDER_HOURS") is None
    assert len(attempts) == 1

    cache._retry_after = 0.0
    assert cache.get("setting:REMINDER_HOURS") == {"value": "24"}
    assert len(attempts) == 2
