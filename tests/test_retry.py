"""Tests for retry with exponential backoff"""

import pytest

from app.shared.retry import CompoundingJitterWait, retry_message_send, retry_with_backoff


class Recorder:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def flaky(failures: int, result="ok"):
    calls = {"count": 0}

    async def fn():
        calls["count"] += 1
        if calls["count"] <= failures:
            raise ConnectionError(f"boom {calls['count']}")
        return result

    return fn, calls


async def test_success_without_retry():
    sleep = Recorder()
    fn, calls = flaky(0)

    assert await retry_with_backoff(fn, sleep=sleep) == "ok"
    assert calls["count"] == 1
    assert sleep.delays == []


async def test_recovers_after_failures():
    sleep = Recorder()
    fn, calls = flaky(2)

    assert await retry_with_backoff(fn, sleep=sleep) == "ok"
    assert calls["count"] == 3
    assert len(sleep.delays) == 2


async def test_delays_grow_and_stay_capped():
    sleep = Recorder()
    fn, _ = flaky(3)

    await retry_with_backoff(fn, max_retries=3, initial_delay=1.0, max_delay=3.0, sleep=sleep)

    assert len(sleep.delays) == 3
    assert sleep.delays[0] == 1.0
    assert 1.8 <= sleep.delays[1] <= 2.2
    assert sleep.delays[2] == 3.0


def test_jitter_compounds_on_previous_delay():
    factors = iter([0.0, 1.0, 0.5, 0.5])
    wait = CompoundingJitterWait(1.0, 100.0, rand=lambda: next(factors))

    delays = [wait(None) for _ in range(4)]
    assert delays[0] == 1.0
    assert delays[1] == pytest.approx(1.8)
    assert delays[2] == pytest.approx(1.8 * 2.2)
    assert delays[3] == pytest.approx(1.8 * 2.2 * 2.0)


def test_initial_delay_above_cap_is_capped():
    wait = CompoundingJitterWait(10.0, 5.0, rand=lambda: 0.5)
    assert wait(None) == 5.0
    assert wait(None) == 5.0


async def test_last_error_propagates():
    sleep = Recorder()
    fn, calls = flaky(10)

    with pytest.raises(ConnectionError, match="boom 3"):
        await retry_with_backoff(fn, max_retries=2, sleep=sleep)
    assert calls["count"] == 3


async def test_on_retry_callback_errors_are_ignored():
    sleep = Recorder()
    seen = []

    def on_retry(attempt, error, delay):
        seen.append(attempt)
        raise RuntimeError("callback failure")

    fn, _ = flaky(1)
    assert await retry_with_backoff(fn, on_retry=on_retry, sleep=sleep) == "ok"
    assert seen == [1]


async def test_message_preset_starts_at_two_seconds():
    sleep = Recorder()
    fn, _ = flaky(1)

    await retry_message_send(fn, sleep=sleep)
    assert sleep.delays[0] == 2.0
