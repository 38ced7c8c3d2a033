import asyncio

import pytest

from core.breaker import CircuitBreaker
from core.errors import Internal, NotFound


async def failing():
    raise ConnectionError("database is down")


async def missing():
    raise NotFound("Property not found")


async def healthy():
    return "ok"


def test_opens_after_threshold_and_fails_fast():
    breaker = CircuitBreaker(failure_threshold=2, base_recovery_time=60)

    for _ in range(2):
        with pytest.raises(ConnectionError):
            asyncio.run(breaker.call(failing))

    assert breaker.state == "OPEN"
    with pytest.raises(Internal):
        asyncio.run(breaker.call(healthy))


def test_domain_errors_do_not_count_as_failures():
    breaker = CircuitBreaker(failure_threshold=1)

    for _ in range(3):
        with pytest.raises(NotFound):
            asyncio.run(breaker.call(missing))

    assert breaker.state == "CLOSED"
    assert breaker.failure_count == 0


def test_half_open_probe_closes_on_success():
    breaker = CircuitBreaker(failure_threshold=1, base_recovery_time=0)

    with pytest.raises(ConnectionError):
        asyncio.run(breaker.call(failing))
    assert breaker.state == "OPEN"

    assert asyncio.run(breaker.call(healthy)) == "ok"
    assert breaker.state == "CLOSED"
    assert breaker.failure_count == 0


def test_half_open_probe_failure_reopens():
    breaker = CircuitBreaker(failure_threshold=1, base_recovery_time=0)

    with pytest.raises(ConnectionError):
        asyncio.run(breaker.call(failing))
    with pytest.raises(ConnectionError):
        asyncio.run(breaker.call(failing))

    assert breaker.state == "OPEN"
    assert breaker.failure_count == 2


def test_calls_are_never_retried():
    breaker = CircuitBreaker(failure_threshold=5)
    calls = []

    async def flaky():
        calls.append(1)
        raise ConnectionError("boom")

    with pytest.raises(ConnectionError):
        asyncio.run(breaker.call(flaky))

    assert len(calls) == 1
