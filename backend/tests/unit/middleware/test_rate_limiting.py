"""
Unit tests for the fixed-window rate limiter.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from privacywatch.config import OPERATION_RATE_LIMITS
from privacywatch.middleware.rate_limiting import InMemoryCounterStore, RateLimiter


class FakeClock:
    """Manually advanced epoch clock."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock) -> RateLimiter:
    return RateLimiter(clock=clock, enabled=True)


@pytest.mark.unit
class TestFixedWindow:
    """Test counting within and across windows."""

    def test_fourth_call_refused(self, limiter) -> None:
        results = [limiter.check("u1", "upload_document", 3, 60) for _ in range(4)]

        assert [r.allowed for r in results] == [True, True, True, False]
        assert [r.remaining for r in results] == [2, 1, 0, 0]
        assert len({r.reset_at for r in results}) == 1

    def test_window_resets_after_expiry(self, limiter, clock) -> None:
        for _ in range(3):
            limiter.check("u1", "upload_document", 3, 60)
        assert not limiter.check("u1", "upload_document", 3, 60).allowed

        clock.advance(60 * 60 + 1)
        result = limiter.check("u1", "upload_document", 3, 60)

        assert result.allowed
        assert result.remaining == 2

    def test_keys_are_independent(self, limiter) -> None:
        limiter.check("u1", "upload_document", 1, 60)
        assert limiter.check("u2", "upload_document", 1, 60).allowed
        assert limiter.check("u1", "submit_task", 1, 60).allowed
        assert not limiter.check("u1", "upload_document", 1, 60).allowed

    def test_refusal_does_not_extend_window(self, limiter, clock) -> None:
        first = limiter.check("u1", "op", 1, 1)
        clock.advance(30)
        refused = limiter.check("u1", "op", 1, 1)
        assert refused.reset_at == first.reset_at

    def test_zero_limit_refuses(self, limiter) -> None:
        result = limiter.check("u1", "op", 0, 60)
        assert not result.allowed
        assert result.remaining == 0
        assert result.limit == 0

    def test_disabled_always_allows(self, clock) -> None:
        limiter = RateLimiter(clock=clock, enabled=False)
        results = [limiter.check("u1", "op", 2, 60) for _ in range(5)]
        assert all(r.allowed for r in results)
        assert all(r.remaining == 2 for r in results)


@pytest.mark.unit
class TestOperationPresets:
    def test_known_operation_uses_preset(self, limiter) -> None:
        result = limiter.check_operation("u1", "security_report")
        assert result.limit == OPERATION_RATE_LIMITS["security_report"][0]
        assert result.remaining == result.limit - 1

    def test_unknown_operation_uses_defaults(self, limiter) -> None:
        assert limiter.check_operation("u1", "something_else").limit == 50


@pytest.mark.unit
class TestResultHelpers:
    def test_headers(self, limiter, clock) -> None:
        result = limiter.check("u1", "op", 5, 60)
        headers = result.headers()

        assert headers["X-RateLimit-Limit"] == "5"
        assert headers["X-RateLimit-Remaining"] == "4"
        assert headers["X-RateLimit-Reset"] == str(int(clock.now + 3600))

    def test_retry_after(self, limiter, clock) -> None:
        result = limiter.check("u1", "op", 1, 1)
        assert result.retry_after_seconds(now=clock.now) == 61
        assert result.retry_after_seconds(now=clock.now + 120) == 1


@pytest.mark.unit
class TestCleanup:
    def test_expired_windows_removed(self) -> None:
        store = InMemoryCounterStore()
        store.consume("a", 5, 10, now=100.0)
        store.consume("b", 5, 1000, now=100.0)

        assert store.cleanup_expired(now=200.0) == 1
        assert set(store.windows) == {"b"}

    def test_limiter_cleans_up_on_interval(self, clock) -> None:
        store = InMemoryCounterStore()
        limiter = RateLimiter(store=store, clock=clock, cleanup_interval_seconds=300, enabled=True)
        limiter.check("u1", "op", 5, 1)

        clock.advance(301)
        limiter.check("u2", "op", 5, 1)

        assert set(store.windows) == {"u2:op"}

    def test_cleanup_skips_key_in_use(self) -> None:
        store = InMemoryCounterStore()
        store.consume("a", 5, 10, now=100.0)
        held = store._lock_for("a")

        with held:
            assert store.cleanup_expired(now=200.0) == 0
            assert store._lock_for("a") is held

        assert store.cleanup_expired(now=200.0) == 1
        assert store._lock_for("a") is not held


@pytest.mark.unit
class TestConcurrentChecks:
    """Test per-key counting under parallel callers."""

    def test_parallel_checks_admit_exactly_limit(self, limiter) -> None:
        def burst(_):
            return [limiter.check("u1", "upload_document", 30, 60).allowed for _ in range(5)]

        with ThreadPoolExecutor(max_workers=20) as pool:
            outcomes = [allowed for batch in pool.map(burst, range(20)) for allowed in batch]

        assert len(outcomes) == 100
        assert sum(outcomes) == 30

    def test_parallel_checks_with_concurrent_cleanup(self, clock) -> None:
        store = InMemoryCounterStore()
        limiter = RateLimiter(store=store, clock=clock, cleanup_interval_seconds=0, enabled=True)
        for actor in range(10):
            store.consume(f"stale-{actor}:op", 5, 1, now=clock.now - 3600)

        def burst(_):
            results = []
            for _ in range(5):
                results.append(limiter.check("u1", "op", 25, 60).allowed)
                store.cleanup_expired(clock.now)
            return results

        with ThreadPoolExecutor(max_workers=10) as pool:
            outcomes = [allowed for batch in pool.map(burst, range(10)) for allowed in batch]

        assert sum(outcomes) == 25
        assert "stale-0:op" not in store.windows
