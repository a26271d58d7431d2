# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic_core import PydanticCustomError

from contactbook.shared.errors.validation_types import ValidationErrorType

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(value: str | None) -> str | None:
    if value is None:
        return value
    if not _EMAIL.match(value):
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_INVALID.value,
            "Email address is invalid",
            {},
        )
    return value.lower()


class ContactCreateDTO(BaseModel):
    first_name: StrictStr = Field(min_length=1, max_length=80)
    last_name: StrictStr = Field(min_length=1, max_length=80)
    email: StrictStr = Field(min_length=3, max_length=254)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class ContactUpdateDTO(BaseModel):
    first_name: StrictStr | None = Field(None, min_length=1, max_length=80)
    last_name: StrictStr | None = Field(None, min_length=1, max_length=80)
    email: StrictStr | None = Field(None, min_length=3, max_length=254)

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return _validate_email(value)


class ContactDTO(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
