"""Use-case for revoking access tokens."""

from __future__ import annotations

from contactbook.application.services.session_tokens import SessionTokenService
from contactbook.domain.users.entities import TokenClaims


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionTokenService) -> None:
        self._sessions = sessions

    def execute(self, token: str) -> TokenClaims | None:
        if not token:
            return None
        return self._sessions.invalidate(token)
