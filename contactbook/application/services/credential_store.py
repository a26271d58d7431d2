# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Registration and credential verification.

Uniqueness of username and email is enforced by the backing store's unique
constraints: ``register`` never pre-checks, it inserts and lets the
repository translate a constraint violation into ``DuplicateIdentityError``.

``verify`` always runs one hash verification, against a dummy digest when no
identity matches, so an unknown handle and a wrong password cost the same and
fail with the same error.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from contactbook.domain.users.entities import Identity
from contactbook.domain.users.exceptions import InvalidCredentialsError
from contactbook.domain.users.repositories import IdentityRepository, PasswordHasher
from contactbook.domain.users.rules import (
    check_email,
    check_password,
    check_username,
    raise_if_invalid,
)
from contactbook.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CredentialStore:
    def __init__(
        self,
        *,
        users: IdentityRepository,
        password_hasher: PasswordHasher,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._clock = clock
        self._dummy_hash = password_hasher.hash("contactbook-timing-dummy")

    def register(self, username: str, email: str, password: str) -> Identity:
        errors: list = []
        username = check_username(username, errors)
        email = check_email(email, errors)
        password = check_password(password, errors)
        raise_if_invalid(errors)

        identity = Identity(
            id=0,
            username=username,
            email=email,
            password_hash=self._password_hasher.hash(password),
            created_at=self._clock(),
        )
        persisted = self._users.add(identity)
        logger.info(f"credentials.register: ok identity_id={persisted.id}")
        return persisted

    def _lookup(self, username_or_email: str) -> Identity | None:
        handle = (username_or_email or "").strip()
        if not handle:
            return None
        if "@" in handle:
            return self._users.find_by_email(handle.lower())
        return self._users.find_by_username(handle)

    def verify(self, username_or_email: str, password: str) -> Identity:
        identity = self._lookup(username_or_email)
        if identity is None:
            self._password_hasher.verify(password or "", self._dummy_hash)
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password or "", identity.password_hash):
            raise InvalidCredentialsError()

        if not identity.is_active:
            raise InvalidCredentialsError()

        return identity

    def change_password(self, identity_id: int, current_password: str, new_password: str) -> None:
        identity = self._users.find_by_id(identity_id)
        if identity is None or not identity.is_active:
            self._password_hasher.verify(current_password or "", self._dummy_hash)
            raise InvalidCredentialsError()
        if not self._password_hasher.verify(current_password or "", identity.password_hash):
            raise InvalidCredentialsError()

        errors: list = []
        new_password = check_password(new_password, errors, field="new_password")
        raise_if_invalid(errors)

        self._users.update_password(identity_id, self._password_hasher.hash(new_password))
        logger.info(f"credentials.change_password: ok identity_id={identity_id}")


__all__ = ["CredentialStore"]
