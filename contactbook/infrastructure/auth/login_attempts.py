# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Failed-login tracking with temporary lockout.

Keys are login handles as typed by the client, not identity ids, so a handle
that matches nobody is tracked and locked exactly like a real one.
"""

from __future__ import annotations

import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock

from contactbook.shared.logging import logger


@dataclass
class LoginAttempt:
    timestamp: float
    success: bool
    ip_address: str | None = None


class LoginAttemptsTracker:
    def __init__(
        self,
        *,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        attempt_window: float = 60 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._max_attempts = max_attempts
        self._lockout_seconds = lockout_seconds
        self._attempt_window = attempt_window
        self._clock = clock
        self._attempts: dict[str, deque[LoginAttempt]] = defaultdict(
            lambda: deque(maxlen=self._max_attempts * 2)
        )
        self._lock = Lock()
        self._lockouts: dict[str, float] = {}  # key -> unlock_time

    def _prune(self, now: float) -> None:
        """Forget handles with no attempt inside the window and no active lockout."""
        cutoff = now - self._attempt_window
        for key in [k for k, unlock_time in self._lockouts.items() if now >= unlock_time]:
            del self._lockouts[key]
        stale = [
            key
            for key, attempts in self._attempts.items()
            if key not in self._lockouts and (not attempts or attempts[-1].timestamp <= cutoff)
        ]
        for key in stale:
            del self._attempts[key]

    def record_attempt(self, key: str, success: bool, ip_address: str | None = None) -> None:
        with self._lock:
            now = self._clock()
            self._prune(now)
            self._attempts[key].append(
                LoginAttempt(timestamp=now, success=success, ip_address=ip_address)
            )

            if success:
                self._attempts.pop(key, None)
                self._lockouts.pop(key, None)
            else:
                self._check_and_lock(key)

    def _locked_until(self, key: str) -> float | None:
        unlock_time = self._lockouts.get(key)
        if unlock_time is None:
            return None
        if self._clock() >= unlock_time:
            del self._lockouts[key]
            self._attempts.pop(key, None)
            logger.info("login_attempts: lockout expired")
            return None
        return unlock_time

    def is_locked(self, key: str) -> bool:
        with self._lock:
            return self._locked_until(key) is not None

    def get_lockout_remaining(self, key: str) -> float:
        with self._lock:
            unlock_time = self._locked_until(key)
            if unlock_time is None:
                return 0.0
            return max(0.0, unlock_time - self._clock())

    def _check_and_lock(self, key: str) -> None:
        now = self._clock()
        cutoff = now - self._attempt_window

        failed = [
            attempt
            for attempt in self._attempts[key]
            if not attempt.success and attempt.timestamp > cutoff
        ]

        if len(failed) >= self._max_attempts:
            self._lockouts[key] = now + self._lockout_seconds
            ips = {attempt.ip_address for attempt in failed if attempt.ip_address}
            logger.warning(
                f"login_attempts: LOCKED failed_attempts={len(failed)} "
                f"lockout_duration={self._lockout_seconds}s "
                f"ip_addresses={sorted(ips) if ips else 'unknown'}"
            )


__all__ = ["LoginAttempt", "LoginAttemptsTracker"]
