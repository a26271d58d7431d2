# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contactbook.domain.users.entities import Identity
from contactbook.domain.users.exceptions import DuplicateIdentityError, InactiveIdentityError
from contactbook.domain.users.repositories import IdentityRepository, RevokedTokenRepository
from contactbook.infrastructure.db.models import RevokedToken, User, as_utc, utcnow
from contactbook.infrastructure.unit_of_work import unit_of_work_scope
from contactbook.shared.logging import logger


def _to_domain(row: User) -> Identity:
    return Identity(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at) if row.updated_at else None,
        is_active=bool(row.is_active),
        deleted_at=as_utc(row.deleted_at) if row.deleted_at else None,
    )


def _duplicate_field(exc: IntegrityError) -> str | None:
    # SQLite: "UNIQUE constraint failed: users.email"; others name the constraint
    message = str(exc.orig)
    if "users.email" in message or "uq_users_email" in message:
        return "email"
    if "users.username" in message or "uq_users_username" in message:
        return "username"
    return None


class SqlAlchemyIdentityRepository(IdentityRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _find_one(self, *criteria) -> Identity | None:
        with unit_of_work_scope(self._session_factory, readonly=True) as session:
            row = session.scalars(select(User).where(*criteria)).first()
            return _to_domain(row) if row else None

    def find_by_username(self, username: str) -> Identity | None:
        return self._find_one(User.username == username)

    def find_by_email(self, email: str) -> Identity | None:
        return self._find_one(User.email == email.lower())

    def find_by_id(self, identity_id: int) -> Identity | None:
        return self._find_one(User.id == identity_id)

    def add(self, identity: Identity) -> Identity:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(
                    username=identity.username,
                    email=identity.email,
                    password_hash=identity.password_hash,
                    created_at=identity.created_at,
                    updated_at=identity.created_at,
                    is_active=True,
                )
                session.add(row)
                session.flush()
                persisted = _to_domain(row)
        except IntegrityError as exc:
            field = _duplicate_field(exc)
            logger.info(f"users.add: duplicate identity field={field}")
            raise DuplicateIdentityError(field) from exc
        return persisted

    def update_profile(
        self, identity_id: int, *, username: str | None = None, email: str | None = None
    ) -> Identity:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(User, identity_id)
                if row is None or not row.is_active:
                    raise InactiveIdentityError()
                if username is not None:
                    row.username = username
                if email is not None:
                    row.email = email.lower()
                row.updated_at = utcnow()
                session.flush()
                updated = _to_domain(row)
        except IntegrityError as exc:
            raise DuplicateIdentityError(_duplicate_field(exc)) from exc
        return updated

    def update_password(self, identity_id: int, password_hash: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(User)
                .where(User.id == identity_id)
                .values(password_hash=password_hash, updated_at=utcnow())
            )

    def deactivate(self, identity_id: int, deleted_at: datetime) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(User)
                .where(User.id == identity_id, User.is_active.is_(True))
                .values(is_active=False, deleted_at=deleted_at, updated_at=deleted_at)
            )


class SqlAlchemyRevokedTokenRepository(RevokedTokenRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, jti: str, identity_id: int, expires_at: datetime) -> None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                exists = session.scalars(
                    select(RevokedToken.id).where(RevokedToken.jti == jti)
                ).first()
                if exists is None:
                    session.add(RevokedToken(jti=jti, user_id=identity_id, expires_at=expires_at))
        except IntegrityError:
            # Revoked concurrently by another request
            logger.debug(f"revoked_tokens.add: jti={jti} already present")

    def contains(self, jti: str) -> bool:
        with unit_of_work_scope(self._session_factory, readonly=True) as session:
            found = session.scalars(
                select(RevokedToken.id).where(RevokedToken.jti == jti)
            ).first()
            return found is not None

    def purge_expired(self, now: datetime) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(delete(RevokedToken).where(RevokedToken.expires_at <= now))
            return int(result.rowcount or 0)
