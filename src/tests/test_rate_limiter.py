import threading
from unittest.mock import patch

import pytest

from core.rate_limiter import InMemoryRateLimitStore, RateLimiter


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(
        InMemoryRateLimitStore(),
        max_requests=3,
        window_seconds=60,
        cleanup_probability=0,
        clock=clock,
    )


def test_allows_up_to_limit_then_denies(limiter):
    results = [limiter.check("1.2.3.4") for _ in range(4)]

    assert [r.allowed for r in results] == [True, True, True, False]
    assert [r.remaining for r in results] == [2, 1, 0, 0]
    assert results[-1].retry_after == 60
    assert results[0].retry_after is None


def test_window_resets_after_expiry(limiter, clock):
    for _ in range(3):
        limiter.check("1.2.3.4")
    assert not limiter.check("1.2.3.4").allowed

    clock.now += 60
    result = limiter.check("1.2.3.4")

    assert result.allowed
    assert result.remaining == 2
    assert result.reset_at == clock.now + 60


def test_retry_after_rounds_up(limiter, clock):
    for _ in range(3):
        limiter.check("1.2.3.4")

    clock.now += 59.5
    assert limiter.check("1.2.3.4").retry_after == 1


def test_clients_are_counted_separately(limiter):
    for _ in range(3):
        limiter.check("1.2.3.4")

    assert not limiter.check("1.2.3.4").allowed
    assert limiter.check("5.6.7.8").allowed


def test_cleanup_removes_expired_entries(clock):
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(store, max_requests=3, window_seconds=60, clock=clock)

    with patch("core.rate_limiter.random.random", return_value=0.5):
        limiter.check("1.2.3.4")
        clock.now += 30
        limiter.check("5.6.7.8")
    assert len(store) == 2

    clock.now += 31
    # 1.2.3.4 expired, 5.6.7.8 still inside its window
    assert store.cleanup(clock.now) == 1
    assert len(store) == 1


def test_cleanup_is_probabilistic(clock):
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(
        store, max_requests=3, window_seconds=60, cleanup_probability=0.01, clock=clock
    )
    limiter.check("1.2.3.4")
    clock.now += 120

    with patch("core.rate_limiter.random.random", return_value=0.5):
        limiter.check("5.6.7.8")
    assert len(store) == 2

    with patch("core.rate_limiter.random.random", return_value=0.001):
        limiter.check("9.9.9.9")
    # 1.2.3.4 was dropped, 5.6.7.8 is still inside its window
    assert len(store) == 2
    assert store.cleanup(clock.now) == 0


def test_concurrent_increments_are_not_lost(clock):
    limiter = RateLimiter(
        InMemoryRateLimitStore(),
        max_requests=100,
        window_seconds=60,
        cleanup_probability=0,
        clock=clock,
    )
    allowed = []
    lock = threading.Lock()

    def worker():
        for _ in range(30):
            result = limiter.check("shared")
            with lock:
                allowed.append(result.allowed)

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert allowed.count(True) == 100
    assert allowed.count(False) == 50
