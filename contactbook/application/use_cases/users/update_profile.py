# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactbook.domain.users.entities import Identity
from contactbook.domain.users.repositories import IdentityRepository
from contactbook.domain.users.rules import check_email, check_username, raise_if_invalid
from contactbook.shared.errors.base import ValidationError
from contactbook.shared.errors.validation_types import ValidationErrorType


class UpdateProfileUseCase:
    def __init__(self, *, users: IdentityRepository) -> None:
        self._users = users

    def execute(
        self,
        identity_id: int,
        *,
        username: str | None = None,
        email: str | None = None,
    ) -> Identity:
        if username is None and email is None:
            raise ValidationError(
                context={
                    "fields": [],
                    "errors": [
                        {
                            "field": "unknown",
                            "type": ValidationErrorType.NOTHING_TO_UPDATE.value,
                            "message": "Provide username and/or email",
                        }
                    ],
                }
            )

        errors: list = []
        if username is not None:
            username = check_username(username, errors)
        if email is not None:
            email = check_email(email, errors)
        raise_if_invalid(errors)

        return self._users.update_profile(identity_id, username=username, email=email)
