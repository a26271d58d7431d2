# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .contacts.entities import Contact
from .users.entities import Identity, IssuedToken, TokenClaims

__all__ = [
    "Contact",
    "Identity",
    "IssuedToken",
    "TokenClaims",
]
