from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from flask.testing import FlaskClient

from contactbook.domain.users.entities import Identity
from contactbook.domain.users.exceptions import DuplicateIdentityError
from contactbook.domain.users.repositories import (
    IdentityRepository,
    PasswordHasher,
    RevokedTokenRepository,
)
from contactbook.shared.config import AppConfig, DatabaseConfig, SecurityConfig

TEST_SECRET = "integration-test-secret"


def make_config(tmp_path: Path, **security: object) -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key=TEST_SECRET,
        token_ttl_seconds=3600,
        log_level="WARNING",
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'contactbook.db'}"),
        security=SecurityConfig(enable_rate_limit=False, **security),
    )


class InMemoryIdentityRepository(IdentityRepository):
    def __init__(self) -> None:
        self._by_id: dict[int, Identity] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> Identity | None:
        return next((i for i in self._by_id.values() if i.username == username), None)

    def find_by_email(self, email: str) -> Identity | None:
        return next((i for i in self._by_id.values() if i.email == email.lower()), None)

    def find_by_id(self, identity_id: int) -> Identity | None:
        return self._by_id.get(identity_id)

    def add(self, identity: Identity) -> Identity:
        if self.find_by_username(identity.username):
            raise DuplicateIdentityError("username")
        if self.find_by_email(identity.email):
            raise DuplicateIdentityError("email")
        stored = replace(identity, id=self._seq)
        self._seq += 1
        self._by_id[stored.id] = stored
        return stored

    def update_profile(self, identity_id, *, username=None, email=None) -> Identity:
        current = self._by_id[identity_id]
        updated = replace(
            current,
            username=username if username is not None else current.username,
            email=email if email is not None else current.email,
        )
        self._by_id[identity_id] = updated
        return updated

    def update_password(self, identity_id: int, password_hash: str) -> None:
        self._by_id[identity_id] = replace(self._by_id[identity_id], password_hash=password_hash)

    def deactivate(self, identity_id: int, deleted_at: datetime) -> None:
        self._by_id[identity_id] = replace(
            self._by_id[identity_id], is_active=False, deleted_at=deleted_at
        )


class InMemoryRevokedTokenRepository(RevokedTokenRepository):
    def __init__(self) -> None:
        self.entries: dict[str, datetime] = {}

    def add(self, jti: str, identity_id: int, expires_at: datetime) -> None:
        self.entries.setdefault(jti, expires_at)

    def contains(self, jti: str) -> bool:
        return jti in self.entries

    def purge_expired(self, now: datetime) -> int:
        expired = [jti for jti, expires_at in self.entries.items() if expires_at <= now]
        for jti in expired:
            del self.entries[jti]
        return len(expired)


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(
    client: FlaskClient,
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = "Secr3t!",
) -> str:
    response = client.post(
        "/register", json={"username": username, "email": email, "password": password}
    )
    assert response.status_code == 201, response.get_json()
    response = client.post("/login", json={"username_or_email": username, "password": password})
    assert response.status_code == 200, response.get_json()
    return response.get_json()["access_token"]
