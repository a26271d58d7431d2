# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from contactbook.shared.errors.base import DomainError


class DuplicateIdentityError(DomainError):
    code = "duplicate_identity"
    status = HTTPStatus.CONFLICT

    def __init__(self, field: str | None = None) -> None:
        super().__init__(context={"field": field} if field else None)
        self.field = field


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    """Any reason a bearer token does not authorize a request.

    Every subclass renders as the same 401 ``unauthorized`` body; ``reason``
    is only for logs.
    """

    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    reason = "invalid"


class MissingTokenError(InvalidTokenError):
    reason = "missing"


class MalformedTokenError(InvalidTokenError):
    reason = "malformed"


class TokenExpiredError(InvalidTokenError):
    reason = "expired"


class TokenRevokedError(InvalidTokenError):
    reason = "revoked"


class InactiveIdentityError(InvalidTokenError):
    reason = "identity_inactive"
