# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from contactbook.infrastructure.db import check_database
from contactbook.shared.logging import logger


class MiscController:
    def __init__(self, *, engine: Engine) -> None:
        self._engine = engine

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, int]:
        status: dict[str, object] = {"ok": True}
        try:
            check_database(self._engine)
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.error(f"health: database check failed: {exc}")
            status["ok"] = False
            status["database"] = "error"
        return jsonify(status), 200 if status["ok"] else 503
