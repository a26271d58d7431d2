# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token guard for Flask views.

``AuthenticationMiddleware.protect`` wraps a view function: it pulls the
bearer token from the ``Authorization`` header, validates it, loads the
identity it names and stores identity, id and claims on ``flask.g`` before
calling the view. Every failure surfaces as the same 401 ``unauthorized``
response; the concrete reason only reaches the log.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import g, request

from contactbook.application.services.session_tokens import SessionTokenService
from contactbook.domain.users.entities import Identity, TokenClaims
from contactbook.domain.users.exceptions import (
    InactiveIdentityError,
    InvalidTokenError,
    MissingTokenError,
)
from contactbook.domain.users.repositories import IdentityRepository
from contactbook.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


def bearer_token() -> str:
    """Return the bearer token of the current request, or an empty string."""
    auth = request.headers.get("Authorization", "")
    scheme, _, value = auth.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return value.strip()


class AuthenticationMiddleware:
    def __init__(self, *, sessions: SessionTokenService, users: IdentityRepository) -> None:
        self._sessions = sessions
        self._users = users

    def authenticate(self, token: str) -> tuple[Identity, TokenClaims]:
        if not token:
            raise MissingTokenError()
        claims = self._sessions.validate(token)
        identity = self._users.find_by_id(claims.identity_id)
        if identity is None or not identity.is_active:
            raise InactiveIdentityError()
        return identity, claims

    def protect(self, handler: F) -> F:
        @wraps(handler)
        def inner(*args, **kwargs):
            try:
                identity, claims = self.authenticate(bearer_token())
            except InvalidTokenError as exc:
                logger.warning(
                    f"Auth failed ({exc.reason}) on {request.method} {request.path}"
                )
                raise

            g.identity = identity
            g.user_id = identity.id
            g.token_claims = claims
            logger.debug(f"Auth OK: user={identity.id} {request.method} {request.path}")
            return handler(*args, **kwargs)

        return cast(F, inner)


def current_identity() -> Identity:
    """Identity injected by ``AuthenticationMiddleware.protect``."""
    identity = getattr(g, "identity", None)
    if identity is None:
        raise MissingTokenError()
    return identity


__all__ = ["AuthenticationMiddleware", "bearer_token", "current_identity"]
