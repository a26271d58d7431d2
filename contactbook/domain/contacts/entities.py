# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Contact:

    id: int
    owner_id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
