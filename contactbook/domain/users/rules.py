# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Input rules for identity fields.

Each ``check_*`` helper returns the normalized value and appends a problem
entry to ``errors`` when the value is rejected. ``raise_if_invalid`` turns the
collected entries into a single ``ValidationError`` shaped like the one built
from pydantic failures, so HTTP clients see one format.
"""

from __future__ import annotations

import re
from typing import Any

from contactbook.shared.errors.base import ValidationError
from contactbook.shared.errors.validation_types import ValidationErrorType

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 64
EMAIL_MAX_LENGTH = 254
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128

_USERNAME_CHARS = re.compile(r"^[A-Za-z0-9_]+$")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_WEAK_PASSWORDS = {
    "password1",
    "passw0rd",
    "qwerty123",
    "abc123",
    "123456a",
    "letmein1",
}

Problems = list[dict[str, Any]]


def _problem(errors: Problems, field: str, kind: ValidationErrorType, message: str) -> None:
    errors.append({"field": field, "type": kind.value, "message": message})


def check_username(value: str | None, errors: Problems) -> str:
    username = (value or "").strip()
    if not username:
        _problem(errors, "username", ValidationErrorType.MISSING, "Username cannot be empty")
    elif not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        _problem(
            errors,
            "username",
            ValidationErrorType.USERNAME_INVALID_LENGTH,
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters long",
        )
    elif not _USERNAME_CHARS.match(username):
        _problem(
            errors,
            "username",
            ValidationErrorType.USERNAME_INVALID_CHARS,
            "Username must contain only ASCII letters, digits and underscores",
        )
    elif not username[0].isalpha():
        _problem(
            errors,
            "username",
            ValidationErrorType.USERNAME_MUST_START_WITH_LETTER,
            "Username must start with a letter",
        )
    return username


def check_email(value: str | None, errors: Problems) -> str:
    email = (value or "").strip().lower()
    if not email:
        _problem(errors, "email", ValidationErrorType.MISSING, "Email cannot be empty")
    elif len(email) > EMAIL_MAX_LENGTH or not _EMAIL.match(email):
        _problem(errors, "email", ValidationErrorType.EMAIL_INVALID, "Email address is invalid")
    return email


def check_password(value: str | None, errors: Problems, *, field: str = "password") -> str:
    password = value or ""
    if not password:
        _problem(errors, field, ValidationErrorType.MISSING, "Password cannot be empty")
    elif not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        _problem(
            errors,
            field,
            ValidationErrorType.PASSWORD_INVALID_LENGTH,
            f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters long",
        )
    elif not re.search(r"[A-Za-z]", password):
        _problem(
            errors,
            field,
            ValidationErrorType.PASSWORD_NO_LETTER,
            "Password must contain at least one letter",
        )
    elif not re.search(r"\d", password):
        _problem(
            errors,
            field,
            ValidationErrorType.PASSWORD_NO_DIGIT,
            "Password must contain at least one digit",
        )
    elif password.lower() in _WEAK_PASSWORDS:
        _problem(
            errors,
            field,
            ValidationErrorType.PASSWORD_WEAK,
            "Password is too weak, please choose a stronger password",
        )
    return password


def raise_if_invalid(errors: Problems) -> None:
    if not errors:
        return
    raise ValidationError(
        context={
            "fields": sorted({entry["field"] for entry in errors}),
            "errors": errors,
        }
    )


__all__ = [
    "check_email",
    "check_password",
    "check_username",
    "raise_if_invalid",
]
