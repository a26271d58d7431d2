# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactbook.domain.contacts.entities import Contact
from contactbook.domain.contacts.repositories import ContactRepository


class CreateContactUseCase:
    def __init__(self, *, contacts: ContactRepository) -> None:
        self._contacts = contacts

    def execute(self, owner_id: int, first_name: str, last_name: str, email: str) -> Contact:
        contact = Contact(
            id=0,
            owner_id=owner_id,
            first_name=first_name,
            last_name=last_name,
            email=email.lower(),
        )
        return self._contacts.add(contact)
