# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contactbook.domain.contacts.entities import Contact
from contactbook.domain.contacts.exceptions import ContactNotFoundError, DuplicateContactError
from contactbook.domain.contacts.repositories import ContactRepository
from contactbook.infrastructure.db.models import Contact as ContactRow
from contactbook.infrastructure.db.models import as_utc, utcnow
from contactbook.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: ContactRow) -> Contact:
    return Contact(
        id=row.id,
        owner_id=row.user_id,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        created_at=as_utc(row.created_at) if row.created_at else None,
        updated_at=as_utc(row.updated_at) if row.updated_at else None,
    )


class SqlAlchemyContactRepository(ContactRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_for_owner(self, owner_id: int) -> Sequence[Contact]:
        with unit_of_work_scope(self._session_factory, readonly=True) as session:
            rows = session.scalars(
                select(ContactRow)
                .where(ContactRow.user_id == owner_id)
                .order_by(ContactRow.id.asc())
            ).all()
            return [_to_domain(row) for row in rows]

    def add(self, contact: Contact) -> Contact:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = ContactRow(
                    user_id=contact.owner_id,
                    first_name=contact.first_name,
                    last_name=contact.last_name,
                    email=contact.email,
                )
                session.add(row)
                session.flush()
                created = _to_domain(row)
        except IntegrityError as exc:
            raise DuplicateContactError(contact.email) from exc
        return created

    def _owned_row(self, session: Session, owner_id: int, contact_id: int) -> ContactRow:
        row = session.get(ContactRow, contact_id)
        if row is None or row.user_id != owner_id:
            raise ContactNotFoundError(contact_id)
        return row

    def update(self, owner_id: int, contact_id: int, changes: Mapping[str, str]) -> Contact:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = self._owned_row(session, owner_id, contact_id)
                for key, value in changes.items():
                    setattr(row, key, value)
                row.updated_at = utcnow()
                session.flush()
                updated = _to_domain(row)
        except IntegrityError as exc:
            raise DuplicateContactError(changes.get("email")) from exc
        return updated

    def delete(self, owner_id: int, contact_id: int) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.delete(self._owned_row(session, owner_id, contact_id))
