"""
Retry with exponential backoff
Used for outbound gateway calls that can fail transiently
"""

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Optional

from tenacity import AsyncRetrying, stop_after_attempt
from tenacity.wait import wait_base

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_DELAY = 1.0  # seconds
MESSAGE_INITIAL_DELAY = 2.0  # seconds, message sends back off slower
DEFAULT_MAX_DELAY = 30.0  # seconds
JITTER_RATIO = 0.1


class CompoundingJitterWait(wait_base):
    """
    Doubling backoff where the jitter compounds: each delay is the previous
    one times 2 * (1 +/- JITTER_RATIO). One instance per retry loop.
    """

    def __init__(
        self,
        initial: float,
        maximum: float,
        jitter: float = JITTER_RATIO,
        rand: Callable[[], float] = random.random,
    ):
        self.maximum = maximum
        self.jitter = jitter
        self.rand = rand
        self.next_delay = min(initial, maximum)

    def __call__(self, retry_state) -> float:
        delay = self.next_delay
        factor = 2 * (1 - self.jitter + self.rand() * 2 * self.jitter)
        self.next_delay = min(delay * factor, self.maximum)
        return delay


async def retry_with_backoff(
    fn: Callable[[], Awaitable[Any]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    on_retry: Optional[Callable[[int, BaseException, float], None]] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> Any:
    """
    Run an async callable, retrying on any exception.

    The first retry waits initial_delay. Each later delay is the previous one
    doubled and scaled by a random factor in [0.9, 1.1], capped at max_delay.
    The last exception propagates once max_retries retries are exhausted.

    Args:
        fn: Zero-argument coroutine function to run
        max_retries: Retries after the first attempt
        initial_delay: Delay before the first retry, in seconds
        max_delay: Upper bound for any single delay, in seconds
        on_retry: Optional callback(attempt, error, delay) run before each retry
        sleep: Sleep coroutine (injectable for tests)
    """

    def _before_sleep(retry_state) -> None:
        attempt_number = retry_state.attempt_number
        error = retry_state.outcome.exception()
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        logger.warning(
            f"⚠️ Attempt {attempt_number}/{max_retries + 1} failed: {error}. "
            f"Retrying in {delay:.2f}s..."
        )
        if on_retry:
            try:
                on_retry(attempt_number, error, delay)
            except Exception as callback_error:
                logger.error(f"❌ Error in on_retry callback: {callback_error}")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=CompoundingJitterWait(initial_delay, max_delay),
        before_sleep=_before_sleep,
        sleep=sleep,
        reraise=True,
    )

    try:
        async for attempt in retrying:
            with attempt:
                result = await fn()
    except Exception as e:
        logger.error(f"❌ Operation failed after {max_retries} retries: {e}")
        raise

    if attempt.retry_state.attempt_number > 1:
        logger.info(
            f"✅ Operation succeeded after {attempt.retry_state.attempt_number - 1} retry(ies)"
        )
    return result


async def retry_message_send(
    fn: Callable[[], Awaitable[Any]],
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> Any:
    """Retry preset for message deliveries (2s initial delay)"""
    return await retry_with_backoff(fn, initial_delay=MESSAGE_INITIAL_DELAY, sleep=sleep)
