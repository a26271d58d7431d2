# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from .entities import Contact


class ContactRepository(Protocol):
    def list_for_owner(self, owner_id: int) -> Sequence[Contact]: ...
    def add(self, contact: Contact) -> Contact: ...
    def update(self, owner_id: int, contact_id: int, changes: Mapping[str, str]) -> Contact: ...
    def delete(self, owner_id: int, contact_id: int) -> None: ...
