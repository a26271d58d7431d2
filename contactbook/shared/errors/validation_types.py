# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import Enum


class ValidationErrorType(str, Enum):
    MISSING = "missing"
    USERNAME_INVALID_LENGTH = "username_invalid_length"
    USERNAME_INVALID_CHARS = "username_invalid_chars"
    USERNAME_MUST_START_WITH_LETTER = "username_must_start_with_letter"
    EMAIL_INVALID = "email_invalid"
    PASSWORD_INVALID_LENGTH = "password_invalid_length"
    PASSWORD_NO_LETTER = "password_no_letter"
    PASSWORD_NO_DIGIT = "password_no_digit"
    PASSWORD_WEAK = "password_weak"
    NOTHING_TO_UPDATE = "nothing_to_update"


__all__ = ["ValidationErrorType"]
