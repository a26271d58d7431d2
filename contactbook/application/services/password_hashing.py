"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from contactbook.domain.users.repositories import PasswordHasher


def hash_password(plain: str) -> str:
    return str(generate_password_hash(plain))


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bool(check_password_hash(hashed, plain))
    except ValueError:
        # Unknown or corrupted hash method
        return False


class WerkzeugPasswordHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return hash_password(password)

    def verify(self, password: str, hashed: str) -> bool:
        return verify_password(password, hashed)
