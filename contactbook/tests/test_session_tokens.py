from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from support import InMemoryRevokedTokenRepository

from contactbook.application.services.session_tokens import ALGORITHM, SessionTokenService
from contactbook.domain.users.exceptions import (
    InvalidTokenError,
    MalformedTokenError,
    TokenExpiredError,
    TokenRevokedError,
)

SECRET = "unit-test-secret"
START = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture()
def revoked() -> InMemoryRevokedTokenRepository:
    return InMemoryRevokedTokenRepository()


@pytest.fixture()
def service(clock: FakeClock, revoked: InMemoryRevokedTokenRepository) -> SessionTokenService:
    return SessionTokenService(
        secret_key=SECRET,
        default_ttl_seconds=3600,
        revoked_tokens=revoked,
        clock=clock,
    )


def test_issue_then_validate_returns_claims(service: SessionTokenService) -> None:
    issued = service.issue(42)

    claims = service.validate(issued.token)

    assert claims.identity_id == 42
    assert claims.jti == issued.claims.jti
    assert claims.issued_at == START
    assert claims.expires_at == START + timedelta(seconds=3600)
    assert issued.ttl_seconds == 3600


def test_issue_yields_distinct_tokens_for_same_identity(service: SessionTokenService) -> None:
    first = service.issue(1)
    second = service.issue(1)

    assert first.token != second.token
    assert first.claims.jti != second.claims.jti


def test_issue_with_custom_ttl(service: SessionTokenService) -> None:
    issued = service.issue(1, ttl_seconds=60)

    assert issued.expires_at == START + timedelta(seconds=60)


@pytest.mark.parametrize("ttl", [0, -5])
def test_issue_rejects_non_positive_ttl(service: SessionTokenService, ttl: int) -> None:
    with pytest.raises(ValueError):
        service.issue(1, ttl_seconds=ttl)


def test_validate_at_expiry_boundary(service: SessionTokenService, clock: FakeClock) -> None:
    issued = service.issue(1, ttl_seconds=10)

    clock.advance(9)
    assert service.validate(issued.token).identity_id == 1

    clock.advance(1)
    with pytest.raises(TokenExpiredError):
        service.validate(issued.token)


def test_invalidate_revokes_only_that_token(service: SessionTokenService) -> None:
    first = service.issue(1)
    second = service.issue(1)

    service.invalidate(first.token)

    with pytest.raises(TokenRevokedError):
        service.validate(first.token)
    assert service.validate(second.token).identity_id == 1


def test_invalidate_is_idempotent(
    service: SessionTokenService, revoked: InMemoryRevokedTokenRepository
) -> None:
    issued = service.issue(7)

    first = service.invalidate(issued.token)
    second = service.invalidate(issued.token)

    assert first == second == issued.claims
    assert list(revoked.entries) == [issued.claims.jti]


def test_invalidate_ignores_garbage_and_expired_tokens(
    service: SessionTokenService, revoked: InMemoryRevokedTokenRepository, clock: FakeClock
) -> None:
    issued = service.issue(1, ttl_seconds=5)
    clock.advance(5)

    assert service.invalidate("not-a-token") is None
    assert service.invalidate("") is None
    assert service.invalidate(issued.token) == issued.claims

    assert revoked.entries == {}


def test_invalidate_purges_expired_entries(
    service: SessionTokenService, revoked: InMemoryRevokedTokenRepository, clock: FakeClock
) -> None:
    short = service.issue(1, ttl_seconds=5)
    service.invalidate(short.token)
    clock.advance(10)

    fresh = service.issue(1)
    service.invalidate(fresh.token)

    assert list(revoked.entries) == [fresh.claims.jti]


def test_revoked_is_reported_before_expired(
    service: SessionTokenService, clock: FakeClock
) -> None:
    issued = service.issue(1, ttl_seconds=5)
    service.invalidate(issued.token)
    clock.advance(60)

    with pytest.raises(TokenRevokedError):
        service.validate(issued.token)


@pytest.mark.parametrize("token", ["", "abc", "a.b.c"])
def test_validate_rejects_malformed_tokens(service: SessionTokenService, token: str) -> None:
    with pytest.raises(MalformedTokenError):
        service.validate(token)


def test_validate_rejects_tampered_token(service: SessionTokenService) -> None:
    token = service.issue(1).token
    header, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    with pytest.raises(MalformedTokenError):
        service.validate(".".join([header, payload, flipped]))


def test_validate_rejects_token_signed_with_other_secret(
    service: SessionTokenService, clock: FakeClock, revoked: InMemoryRevokedTokenRepository
) -> None:
    other = SessionTokenService(
        secret_key="another-secret",
        default_ttl_seconds=3600,
        revoked_tokens=revoked,
        clock=clock,
    )

    with pytest.raises(InvalidTokenError):
        service.validate(other.issue(1).token)


def test_validate_rejects_token_without_jti(service: SessionTokenService) -> None:
    token = jwt.encode(
        {"sub": "1", "iat": START, "exp": START + timedelta(hours=1)},
        SECRET,
        algorithm=ALGORITHM,
    )

    with pytest.raises(MalformedTokenError):
        service.validate(token)


@pytest.mark.parametrize("secret", ["", "   "])
def test_empty_secret_is_rejected(
    secret: str, revoked: InMemoryRevokedTokenRepository
) -> None:
    with pytest.raises(ValueError):
        SessionTokenService(secret_key=secret, default_ttl_seconds=60, revoked_tokens=revoked)
