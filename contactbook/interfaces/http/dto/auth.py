# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictStr

from contactbook.domain.users.entities import IssuedToken


class RegisterRequestDTO(BaseModel):
    # Shape only; content rules live with the credential store
    username: StrictStr = Field(max_length=256)
    email: StrictStr = Field(max_length=512)
    password: StrictStr = Field(max_length=256)


class LoginRequestDTO(BaseModel):
    username_or_email: StrictStr = Field(
        min_length=1,
        max_length=256,
        validation_alias=AliasChoices("username_or_email", "username", "email"),
    )
    password: StrictStr = Field(min_length=1, max_length=256)  # No strength check on login


class IdentityDTO(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenDTO(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
    expires_at: datetime

    @classmethod
    def from_issued(cls, issued: IssuedToken) -> TokenDTO:
        return cls(
            access_token=issued.token,
            expires_in=issued.ttl_seconds,
            expires_at=issued.expires_at,
        )
