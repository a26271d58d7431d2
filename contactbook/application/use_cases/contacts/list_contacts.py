# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from contactbook.domain.contacts.entities import Contact
from contactbook.domain.contacts.repositories import ContactRepository


class ListContactsUseCase:
    def __init__(self, *, contacts: ContactRepository) -> None:
        self._contacts = contacts

    def execute(self, owner_id: int) -> Sequence[Contact]:
        return self._contacts.list_for_owner(owner_id)
