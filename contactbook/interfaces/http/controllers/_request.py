# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from contactbook.shared.errors.validation import raise_validation_error

M = TypeVar("M", bound=BaseModel)


def client_ip() -> str | None:
    return request.remote_addr


def parse_body(model: type[M]) -> M:
    payload: Any = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise_validation_error(exc)
