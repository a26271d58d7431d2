# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contactbook.infrastructure.db.models import AuditLog
from contactbook.shared.logging import logger


class AuditAction(str, Enum):
    # Authentication
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_LOCKED = "login_locked"
    LOGOUT = "logout"

    # Profile
    PROFILE_UPDATED = "profile_updated"
    PASSWORD_CHANGED = "password_changed"
    ACCOUNT_DEACTIVATED = "account_deactivated"

    # Contacts
    CONTACT_CREATED = "contact_created"
    CONTACT_UPDATED = "contact_updated"
    CONTACT_DELETED = "contact_deleted"


_SENSITIVE_KEYS = {"password", "token", "secret", "key", "hash"}


def _sanitize_details(details: dict[str, Any]) -> dict[str, Any]:
    sanitized = {}
    for key, value in details.items():
        key_lower = key.lower()

        if any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS):
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value

    return sanitized


class AuditLogger:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def log(
        self,
        action: AuditAction,
        user_id: int | None = None,
        ip_address: str | None = None,
        details: dict[str, Any] | None = None,
        success: bool = True,
    ) -> None:
        safe_details = _sanitize_details(details) if details else {}

        log_message = (
            f"AUDIT: {action.value} | "
            f"user_id={user_id} | "
            f"ip={ip_address} | "
            f"success={success}"
        )
        if safe_details:
            log_message += f" | details={safe_details}"

        if success:
            logger.info(log_message)
        else:
            logger.warning(log_message)

        self._store(
            timestamp=datetime.now(UTC),
            action=action.value,
            user_id=user_id,
            ip_address=ip_address,
            success=success,
            details=safe_details,
        )

    def _store(
        self,
        *,
        timestamp: datetime,
        action: str,
        user_id: int | None,
        ip_address: str | None,
        success: bool,
        details: dict[str, Any],
    ) -> None:
        db = self._session_factory()
        try:
            db.add(
                AuditLog(
                    timestamp=timestamp,
                    action=action,
                    user_id=user_id,
                    ip_address=ip_address,
                    success=success,
                    details_json=json.dumps(details, default=str) if details else None,
                )
            )
            db.commit()
        except SQLAlchemyError as db_error:
            db.rollback()
            logger.warning(f"Failed to store audit log in database: {db_error}")
        finally:
            db.close()


__all__ = ["AuditAction", "AuditLogger"]
