"""Per-client request rate limiting for the HTTP tool route."""

from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from contextlib import contextmanager
from typing import Iterator

WINDOW_SECONDS = 60.0


class RateLimitExceeded(Exception):
    def __init__(self, retry_after_seconds: float) -> None:
        self.retry_after_seconds = max(0.0, retry_after_seconds)
        super().__init__("Rate limit exceeded")


class RequestLimiter:
    """Sliding one-minute window per client plus a cap on in-flight calls."""

    def __init__(self, requests_per_minute: int = 100, queue_limit: int = 200) -> None:
        self.requests_per_minute = max(1, requests_per_minute)
        self.queue_limit = max(1, queue_limit)
        self._lock = threading.Lock()
        self._calls: dict[str, deque[float]] = defaultdict(deque)
        self._inflight = 0

    @property
    def inflight(self) -> int:
        with self._lock:
            return self._inflight

    def acquire(self, client_id: str, now: float | None = None) -> None:
        now = time.time() if now is None else now
        with self._lock:
            if self._inflight >= self.queue_limit:
                raise RateLimitExceeded(retry_after_seconds=1.0)
            calls = self._calls[client_id]
            while calls and calls[0] <= now - WINDOW_SECONDS:
                calls.popleft()
            if len(calls) >= self.requests_per_minute:
                raise RateLimitExceeded(retry_after_seconds=max(0.1, WINDOW_SECONDS - (now - calls[0])))
            calls.append(now)
            self._inflight += 1

    def release(self) -> None:
        with self._lock:
            self._inflight = max(0, self._inflight - 1)

    @contextmanager
    def slot(self, client_id: str) -> Iterator[None]:
        self.acquire(client_id)
        try:
            yield
        finally:
            self.release()
