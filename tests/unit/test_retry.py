from __future__ import annotations

import asyncio
import logging

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from redis_scan.retry import (
    RedisRetryContext,
    RedisRetryError,
    RedisRetryPolicy,
    execute_with_retry,
    with_redis_retry,
)


def _test_logger() -> logging.Logger:
    logger = logging.getLogger("redis_scan_retry_test")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    sleeps: list[float] = []

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return sleeps


@pytest.mark.asyncio
async def test_execute_with_retry_succeeds_first_attempt():
    attempts: list[int] = []

    async def op(attempt: int) -> str:
        attempts.append(attempt)
        return "ok"

    result = await execute_with_retry(
        op,
        policy=RedisRetryPolicy(max_attempts=3, jitter_ratio=0.0),
        logger=_test_logger(),
        context="test",
    )

    assert result == "ok"
    assert attempts == [1]


@pytest.mark.asyncio
async def test_execute_with_retry_invokes_retry_callback(no_sleep):
    attempts: list[int] = []
    retries: list[RedisRetryContext] = []

    async def op(attempt: int) -> str:
        attempts.append(attempt)
        if attempt == 1:
            raise RedisConnectionError("boom")
        return "success"

    async def on_retry(ctx: RedisRetryContext) -> None:
        retries.append(ctx)

    policy = RedisRetryPolicy(max_attempts=3, initial_delay=0.05, max_delay=0.05, multiplier=1.0, jitter_ratio=0.0)

    result = await execute_with_retry(op, policy=policy, logger=_test_logger(), context="retry_test", on_retry=on_retry)

    assert result == "success"
    assert attempts == [1, 2]
    assert len(retries) == 1
    assert retries[0].attempt == 1
    assert no_sleep == [0.05]


@pytest.mark.asyncio
async def test_execute_with_retry_exhausts_attempts(no_sleep):
    async def op(attempt: int) -> str:
        raise TimeoutError("slow")

    policy = RedisRetryPolicy(max_attempts=3, initial_delay=0.1, max_delay=0.15, multiplier=2.0, jitter_ratio=0.0)

    with pytest.raises(RedisRetryError, match="scan failed after 3 attempt") as excinfo:
        await execute_with_retry(op, policy=policy, logger=_test_logger(), context="scan")

    assert isinstance(excinfo.value.__cause__, TimeoutError)
    assert no_sleep == [0.1, 0.15]


@pytest.mark.asyncio
async def test_protocol_errors_are_not_retried(no_sleep):
    calls: list[int] = []

    async def op() -> str:
        calls.append(1)
        raise ResponseError("WRONGTYPE")

    with pytest.raises(ResponseError):
        await with_redis_retry(op, context="sscan")

    assert calls == [1]
    assert no_sleep == []


@pytest.mark.asyncio
async def test_with_redis_retry_logs_retries(no_sleep, caplog):
    outcomes = iter([RedisConnectionError("reset"), "done"])

    async def op() -> str:
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    with caplog.at_level(logging.WARNING, logger="redis_scan.retry"):
        result = await with_redis_retry(op, context="hscan h", policy=RedisRetryPolicy(jitter_ratio=0.0))

    assert result == "done"
    assert "hscan h failed on attempt 1/3" in caplog.text
