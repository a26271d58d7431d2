# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Soft-delete an identity and revoke the token that asked for it."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from contactbook.application.services.session_tokens import SessionTokenService
from contactbook.domain.users.repositories import IdentityRepository


class DeactivateUserUseCase:
    def __init__(
        self,
        *,
        users: IdentityRepository,
        sessions: SessionTokenService,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._clock = clock

    def execute(self, identity_id: int, token: str) -> None:
        self._users.deactivate(identity_id, self._clock())
        self._sessions.invalidate(token)
