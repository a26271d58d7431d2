# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from contactbook.shared.errors.base import DomainError


class ContactNotFoundError(DomainError):
    code = "contact_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, contact_id: int) -> None:
        super().__init__(context={"contact_id": contact_id})


class DuplicateContactError(DomainError):
    code = "duplicate_contact"
    status = HTTPStatus.CONFLICT

    def __init__(self, email: str | None = None) -> None:
        super().__init__(context={"email": email} if email else None)
