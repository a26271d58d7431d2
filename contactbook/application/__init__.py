# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.credential_store import CredentialStore
from .services.password_hashing import WerkzeugPasswordHasher, hash_password, verify_password
from .services.session_tokens import SessionTokenService

__all__ = [
    "CredentialStore",
    "SessionTokenService",
    "WerkzeugPasswordHasher",
    "hash_password",
    "verify_password",
]
