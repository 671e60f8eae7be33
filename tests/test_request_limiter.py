import pytest

from rebalancer.runtime.limits import RateLimitExceeded, RequestLimiter
from rebalancer.runtime.monitoring import ServerMetrics


def test_request_limiter_blocks_after_quota() -> None:
    limiter = RequestLimiter(requests_per_minute=2, queue_limit=10)
    limiter.acquire("client", now=1000.0)
    limiter.release()
    limiter.acquire("client", now=1001.0)
    limiter.release()
    with pytest.raises(RateLimitExceeded) as exc:
        limiter.acquire("client", now=1002.0)
    assert exc.value.retry_after_seconds == pytest.approx(58.0)
    limiter.acquire("other", now=1002.0)
    limiter.release()
    limiter.acquire("client", now=1061.0)
    limiter.release()


def test_request_limiter_caps_inflight() -> None:
    limiter = RequestLimiter(requests_per_minute=100, queue_limit=1)
    with limiter.slot("a"):
        assert limiter.inflight == 1
        with pytest.raises(RateLimitExceeded):
            limiter.acquire("b")
    assert limiter.inflight == 0


def test_server_metrics_snapshot() -> None:
    metrics = ServerMetrics(started_at=1.0)
    metrics.record(latency_ms=10.0, success=True)
    metrics.record(latency_ms=30.0, success=False)
    snapshot = metrics.snapshot(catalog_size=5)
    assert snapshot.total_requests == 2
    assert snapshot.error_rate == 0.5
    assert snapshot.avg_latency_ms == 20.0
    assert snapshot.catalog_size == 5
