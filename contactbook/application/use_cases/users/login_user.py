# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from contactbook.application.services.credential_store import CredentialStore
from contactbook.application.services.session_tokens import SessionTokenService
from contactbook.domain.users.entities import Identity, IssuedToken
from contactbook.domain.users.exceptions import InvalidCredentialsError
from contactbook.infrastructure.auth.login_attempts import LoginAttemptsTracker
from contactbook.shared.errors.base import AppError


class AccountLockedError(AppError):
    def __init__(self, lockout_remaining: float = 0) -> None:
        super().__init__(
            code="account_locked",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            context={"lockout_remaining_seconds": round(lockout_remaining, 1)},
        )


def _attempt_key(username_or_email: str) -> str:
    return (username_or_email or "").strip().lower()


class LoginUserUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        sessions: SessionTokenService,
        attempts: LoginAttemptsTracker,
    ) -> None:
        self._credentials = credentials
        self._sessions = sessions
        self._attempts = attempts

    def execute(
        self, username_or_email: str, password: str, ip_address: str | None = None
    ) -> tuple[Identity, IssuedToken]:
        key = _attempt_key(username_or_email)
        if self._attempts.is_locked(key):
            raise AccountLockedError(lockout_remaining=self._attempts.get_lockout_remaining(key))

        try:
            identity = self._credentials.verify(username_or_email, password)
        except InvalidCredentialsError:
            self._attempts.record_attempt(key, success=False, ip_address=ip_address)
            raise

        self._attempts.record_attempt(key, success=True, ip_address=ip_address)
        return identity, self._sessions.issue(identity.id)
