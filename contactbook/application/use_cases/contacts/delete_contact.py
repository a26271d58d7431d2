# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contactbook.domain.contacts.repositories import ContactRepository


class DeleteContactUseCase:
    def __init__(self, *, contacts: ContactRepository) -> None:
        self._contacts = contacts

    def execute(self, owner_id: int, contact_id: int) -> None:
        self._contacts.delete(owner_id, contact_id)
