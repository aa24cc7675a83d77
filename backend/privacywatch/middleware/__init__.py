from .rate_limiting import (  # noqa: F401
    CounterStore,
    InMemoryCounterStore,
    RateLimiter,
    RateLimitResult,
    RateWindow,
    get_rate_limiter,
)
