# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Identity:

    id: int
    username: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime
    updated_at: datetime | None = None
    is_active: bool = True
    deleted_at: datetime | None = None


@dataclass(slots=True, frozen=True)
class TokenClaims:

    identity_id: int
    jti: str
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class IssuedToken:

    token: str = field(repr=False)
    claims: TokenClaims

    @property
    def identity_id(self) -> int:
        return self.claims.identity_id

    @property
    def expires_at(self) -> datetime:
        return self.claims.expires_at

    @property
    def ttl_seconds(self) -> int:
        return int((self.claims.expires_at - self.claims.issued_at).total_seconds())
