# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactbook.application.services.credential_store import CredentialStore


class ChangePasswordUseCase:
    def __init__(self, *, credentials: CredentialStore) -> None:
        self._credentials = credentials

    def execute(self, identity_id: int, current_password: str, new_password: str) -> None:
        self._credentials.change_password(identity_id, current_password, new_password)
