# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from threading import Lock

from flask import Request, jsonify, request

from contactbook.shared.logging import logger


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._lock = Lock()
        self._buckets: dict[str, Bucket] = defaultdict(lambda: Bucket(deque(maxlen=self._limit)))
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self._window:
            return
        self._last_sweep = now
        stale = [
            key
            for key, bucket in self._buckets.items()
            if not bucket.timestamps or now - bucket.timestamps[-1] > self._window
        ]
        for key in stale:
            del self._buckets[key]

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            bucket = self._buckets[key]
            # Drop old
            while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
                bucket.timestamps.popleft()
            if len(bucket.timestamps) >= self._limit:
                return False
            bucket.timestamps.append(now)
            return True


def _client_key(req: Request) -> str:
    # Forwarded headers only reach remote_addr through ProxyFix
    return req.remote_addr or "unknown"


def rate_limit(limit: int, window_seconds: float, *, enabled: bool = True):
    limiter = InMemoryRateLimiter(limit, window_seconds)

    def decorator(f: Callable):
        if not enabled:
            return f

        @wraps(f)
        def wrapper(*args, **kwargs):
            key = f"{request.path}:{_client_key(request)}"
            if not limiter.allow(key):
                logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                return jsonify({"error": "rate_limited"}), 429
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
