# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactbook.domain.users.entities import Identity
from contactbook.domain.users.exceptions import InactiveIdentityError
from contactbook.domain.users.repositories import IdentityRepository


class GetProfileUseCase:
    def __init__(self, *, users: IdentityRepository) -> None:
        self._users = users

    def execute(self, identity_id: int) -> Identity:
        identity = self._users.find_by_id(identity_id)
        if identity is None or not identity.is_active:
            raise InactiveIdentityError()
        return identity
