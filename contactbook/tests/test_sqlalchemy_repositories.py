from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from contactbook.application.services.credential_store import CredentialStore
from contactbook.application.services.password_hashing import WerkzeugPasswordHasher
from contactbook.domain.users.entities import Identity
from contactbook.domain.users.exceptions import DuplicateIdentityError
from contactbook.infrastructure.db import create_db_engine, create_session_factory, init_db
from contactbook.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyIdentityRepository,
    SqlAlchemyRevokedTokenRepository,
)
from contactbook.shared.config import DatabaseConfig

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def session_factory(tmp_path: Path):
    engine = create_db_engine(DatabaseConfig(url=f"sqlite:///{tmp_path / 'repo.db'}"))
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


def _identity(username: str, email: str) -> Identity:
    return Identity(
        id=0,
        username=username,
        email=email,
        password_hash="hash",
        created_at=NOW,
    )


def test_identity_round_trip(session_factory: sessionmaker[Session]) -> None:
    users = SqlAlchemyIdentityRepository(session_factory)

    stored = users.add(_identity("alice", "alice@example.com"))

    assert stored.id > 0
    assert users.find_by_username("alice") == stored
    assert users.find_by_email("ALICE@example.com") == stored
    assert users.find_by_id(stored.id) == stored
    assert stored.created_at == NOW
    assert users.find_by_username("bob") is None


@pytest.mark.parametrize(
    ("username", "email", "field"),
    [
        ("alice", "other@example.com", "username"),
        ("bob", "alice@example.com", "email"),
    ],
)
def test_add_reports_duplicate_field(
    session_factory: sessionmaker[Session], username: str, email: str, field: str
) -> None:
    users = SqlAlchemyIdentityRepository(session_factory)
    users.add(_identity("alice", "alice@example.com"))

    with pytest.raises(DuplicateIdentityError) as exc_info:
        users.add(_identity(username, email))

    assert exc_info.value.field == field


def test_deactivate_soft_deletes(session_factory: sessionmaker[Session]) -> None:
    users = SqlAlchemyIdentityRepository(session_factory)
    stored = users.add(_identity("alice", "alice@example.com"))

    users.deactivate(stored.id, NOW + timedelta(days=1))

    identity = users.find_by_id(stored.id)
    assert identity is not None
    assert identity.is_active is False
    assert identity.deleted_at == NOW + timedelta(days=1)


@pytest.mark.parametrize(
    ("make_identity", "field"),
    [
        (lambda i: ("alice", f"alice{i}@example.com"), "username"),
        (lambda i: (f"user{i}", "Same@Example.com" if i % 2 else "same@example.com"), "email"),
    ],
    ids=["shared-username", "shared-email"],
)
def test_concurrent_registration_admits_exactly_one(
    session_factory: sessionmaker[Session], make_identity, field: str
) -> None:
    credentials = CredentialStore(
        users=SqlAlchemyIdentityRepository(session_factory),
        password_hasher=WerkzeugPasswordHasher(),
    )

    def attempt(index: int) -> str:
        username, email = make_identity(index)
        try:
            credentials.register(username, email, "Secr3t!")
        except DuplicateIdentityError as exc:
            return f"duplicate:{exc.field}"
        return "created"

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(8)))

    assert outcomes.count("created") == 1
    assert outcomes.count(f"duplicate:{field}") == 7


def test_revoked_tokens_add_contains_and_purge(session_factory: sessionmaker[Session]) -> None:
    revoked = SqlAlchemyRevokedTokenRepository(session_factory)

    revoked.add("old", 1, NOW)
    revoked.add("fresh", 1, NOW + timedelta(hours=1))
    revoked.add("fresh", 1, NOW + timedelta(hours=1))

    assert revoked.contains("old")
    assert revoked.contains("fresh")
    assert not revoked.contains("unknown")

    assert revoked.purge_expired(NOW) == 1
    assert not revoked.contains("old")
    assert revoked.contains("fresh")
