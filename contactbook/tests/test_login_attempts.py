from __future__ import annotations

from contactbook.infrastructure.auth.login_attempts import LoginAttemptsTracker


class Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_locks_after_max_failures_and_unlocks_later() -> None:
    clock = Clock()
    tracker = LoginAttemptsTracker(max_attempts=3, lockout_seconds=60, clock=clock)

    for _ in range(2):
        tracker.record_attempt("alice", success=False, ip_address="10.0.0.1")
    assert not tracker.is_locked("alice")

    tracker.record_attempt("alice", success=False, ip_address="10.0.0.1")
    assert tracker.is_locked("alice")
    assert tracker.get_lockout_remaining("alice") == 60

    clock.now += 61
    assert not tracker.is_locked("alice")
    assert "alice" not in tracker._attempts


def test_success_resets_failures() -> None:
    tracker = LoginAttemptsTracker(max_attempts=2, lockout_seconds=60, clock=Clock())

    tracker.record_attempt("alice", success=False)
    tracker.record_attempt("alice", success=True)
    tracker.record_attempt("alice", success=False)
    assert not tracker.is_locked("alice")

    tracker.record_attempt("alice", success=False)
    assert tracker.is_locked("alice")


def test_failures_outside_window_do_not_count() -> None:
    clock = Clock()
    tracker = LoginAttemptsTracker(
        max_attempts=2, lockout_seconds=60, attempt_window=30, clock=clock
    )

    tracker.record_attempt("alice", success=False)
    clock.now += 31
    tracker.record_attempt("alice", success=False)

    assert not tracker.is_locked("alice")


def test_unknown_handles_are_tracked_like_known_ones() -> None:
    clock = Clock()
    tracker = LoginAttemptsTracker(max_attempts=1, lockout_seconds=60, clock=clock)

    tracker.record_attempt("nobody@example.com", success=False)

    assert tracker.is_locked("nobody@example.com")
    clock.now += 60
    assert not tracker.is_locked("nobody@example.com")


def test_stale_handles_are_forgotten_after_window() -> None:
    clock = Clock()
    tracker = LoginAttemptsTracker(
        max_attempts=5, lockout_seconds=60, attempt_window=300, clock=clock
    )

    for i in range(1000):
        tracker.record_attempt(f"nobody{i}", success=False)
    assert len(tracker._attempts) == 1000

    clock.now += 301
    tracker.record_attempt("someone", success=False)

    assert list(tracker._attempts) == ["someone"]


def test_locked_handle_survives_pruning_until_unlock() -> None:
    clock = Clock()
    tracker = LoginAttemptsTracker(
        max_attempts=1, lockout_seconds=600, attempt_window=30, clock=clock
    )

    tracker.record_attempt("mallory", success=False)
    clock.now += 31
    tracker.record_attempt("other", success=False)

    assert tracker.is_locked("mallory")
    assert "mallory" in tracker._attempts

    clock.now += 600
    tracker.record_attempt("other", success=True)

    assert not tracker._lockouts
    assert not tracker._attempts
