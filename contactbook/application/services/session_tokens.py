# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Issue, validate and invalidate signed session tokens.

Tokens are HS256 JWTs carrying ``sub`` (identity id), ``jti``, ``iat`` and
``exp``. PyJWT checks the signature and claim presence; expiry is compared
against the injected clock so the token lifecycle does not depend on wall
time inside the library.

Token states: issued tokens are valid until they expire or are revoked, and
neither terminal state can be left. Revoked jtis stay in the revocation set
until the token would have expired anyway, then get purged.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from contactbook.domain.users.entities import IssuedToken, TokenClaims
from contactbook.domain.users.exceptions import (
    MalformedTokenError,
    TokenExpiredError,
    TokenRevokedError,
)
from contactbook.domain.users.repositories import RevokedTokenRepository
from contactbook.shared.logging import logger

ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ["sub", "jti", "iat", "exp"]
_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "require": _REQUIRED_CLAIMS,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionTokenService:
    def __init__(
        self,
        *,
        secret_key: str,
        default_ttl_seconds: int,
        revoked_tokens: RevokedTokenRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret_key or not secret_key.strip():
            raise ValueError("session token signing secret must not be empty")
        if default_ttl_seconds <= 0:
            raise ValueError("default token ttl must be positive")
        self._secret_key = secret_key
        self._default_ttl_seconds = default_ttl_seconds
        self._revoked_tokens = revoked_tokens
        self._clock = clock

    def issue(self, identity_id: int, ttl_seconds: int | None = None) -> IssuedToken:
        ttl = self._default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValueError("token ttl must be positive")

        # JWT timestamps have second precision
        issued_at = self._clock().replace(microsecond=0)
        claims = TokenClaims(
            identity_id=identity_id,
            jti=uuid.uuid4().hex,
            issued_at=issued_at,
            expires_at=issued_at + timedelta(seconds=ttl),
        )
        payload = {
            "sub": str(identity_id),
            "jti": claims.jti,
            "iat": claims.issued_at,
            "exp": claims.expires_at,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)
        logger.debug(f"sessions.issue: identity_id={identity_id} jti={claims.jti} ttl={ttl}s")
        return IssuedToken(token=token, claims=claims)

    def _decode(self, token: str) -> TokenClaims:
        if not token:
            raise MalformedTokenError()
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError() from exc
        return _claims_from_payload(payload)

    def validate(self, token: str) -> TokenClaims:
        claims = self._decode(token)
        if self._revoked_tokens.contains(claims.jti):
            raise TokenRevokedError()
        if self._clock() >= claims.expires_at:
            raise TokenExpiredError()
        return claims

    def invalidate(self, token: str) -> TokenClaims | None:
        try:
            claims = self._decode(token)
        except MalformedTokenError:
            logger.debug("sessions.invalidate: ignoring malformed token")
            return None

        now = self._clock()
        if claims.expires_at <= now:
            logger.debug(f"sessions.invalidate: jti={claims.jti} already expired")
            return claims

        self._revoked_tokens.add(claims.jti, claims.identity_id, claims.expires_at)
        purged = self._revoked_tokens.purge_expired(now)
        logger.info(
            f"sessions.invalidate: revoked jti={claims.jti} "
            f"identity_id={claims.identity_id} purged={purged}"
        )
        return claims


def _claims_from_payload(payload: Mapping[str, Any]) -> TokenClaims:
    try:
        identity_id = int(payload["sub"])
        jti = str(payload["jti"])
        issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
        expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
    except (KeyError, TypeError, ValueError, OverflowError, OSError) as exc:
        raise MalformedTokenError() from exc
    if not jti or expires_at <= issued_at:
        raise MalformedTokenError()
    return TokenClaims(
        identity_id=identity_id,
        jti=jti,
        issued_at=issued_at,
        expires_at=expires_at,
    )


__all__ = ["ALGORITHM", "SessionTokenService"]
