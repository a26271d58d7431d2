# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping

from contactbook.domain.contacts.entities import Contact
from contactbook.domain.contacts.repositories import ContactRepository

_EDITABLE = ("first_name", "last_name", "email")


class UpdateContactUseCase:
    def __init__(self, *, contacts: ContactRepository) -> None:
        self._contacts = contacts

    def execute(self, owner_id: int, contact_id: int, changes: Mapping[str, str | None]) -> Contact:
        cleaned = {key: value for key, value in changes.items() if key in _EDITABLE and value is not None}
        if "email" in cleaned:
            cleaned["email"] = cleaned["email"].lower()
        return self._contacts.update(owner_id, contact_id, cleaned)
