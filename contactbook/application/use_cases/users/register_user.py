# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactbook.application.services.credential_store import CredentialStore
from contactbook.domain.users.entities import Identity


class RegisterUserUseCase:
    def __init__(self, *, credentials: CredentialStore) -> None:
        self._credentials = credentials

    def execute(self, username: str, email: str, password: str) -> Identity:
        return self._credentials.register(username, email, password)
