# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class UpdateProfileRequestDTO(BaseModel):
    username: StrictStr | None = Field(None, max_length=256)
    email: StrictStr | None = Field(None, max_length=512)

    model_config = ConfigDict(extra="forbid")


class ChangePasswordRequestDTO(BaseModel):
    current_password: StrictStr = Field(min_length=1, max_length=256)
    new_password: StrictStr = Field(max_length=256)
