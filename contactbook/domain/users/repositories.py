# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import Identity


class IdentityRepository(Protocol):
    def find_by_username(self, username: str) -> Identity | None: ...
    def find_by_email(self, email: str) -> Identity | None: ...
    def find_by_id(self, identity_id: int) -> Identity | None: ...
    def add(self, identity: Identity) -> Identity: ...
    def update_profile(
        self, identity_id: int, *, username: str | None = None, email: str | None = None
    ) -> Identity: ...
    def update_password(self, identity_id: int, password_hash: str) -> None: ...
    def deactivate(self, identity_id: int, deleted_at: datetime) -> None: ...


class RevokedTokenRepository(Protocol):
    def add(self, jti: str, identity_id: int, expires_at: datetime) -> None: ...
    def contains(self, jti: str) -> bool: ...
    def purge_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
