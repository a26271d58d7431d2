# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from contactbook.application.use_cases.users.login_user import (
    AccountLockedError,
    LoginUserUseCase,
)
from contactbook.application.use_cases.users.logout_user import LogoutUserUseCase
from contactbook.application.use_cases.users.register_user import RegisterUserUseCase
from contactbook.domain.users.exceptions import InvalidCredentialsError
from contactbook.infrastructure.audit import AuditAction, AuditLogger
from contactbook.infrastructure.auth.middleware import bearer_token
from contactbook.interfaces.http.controllers._request import client_ip, parse_body
from contactbook.interfaces.http.dto.auth import (
    IdentityDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    TokenDTO,
)
from contactbook.shared.config import SecurityConfig
from contactbook.shared.logging import logger
from contactbook.shared.middleware.rate_limit import rate_limit


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        audit: AuditLogger,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._audit = audit
        self._security = security

    def register(self) -> tuple[Response, int]:
        dto = parse_body(RegisterRequestDTO)

        identity = self._register_use_case.execute(dto.username, dto.email, dto.password)

        self._audit.log(
            AuditAction.REGISTER,
            user_id=identity.id,
            ip_address=client_ip(),
            details={"username": identity.username},
            success=True,
        )
        logger.info(f"auth.register: ok user_id={identity.id}")
        payload = IdentityDTO.model_validate(identity).model_dump(mode="json")
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        dto = parse_body(LoginRequestDTO)
        ip_address = client_ip()

        try:
            identity, issued = self._login_use_case.execute(
                dto.username_or_email, dto.password, ip_address
            )
        except AccountLockedError:
            self._audit.log(
                AuditAction.LOGIN_LOCKED,
                ip_address=ip_address,
                details={"handle": dto.username_or_email},
                success=False,
            )
            raise
        except InvalidCredentialsError:
            self._audit.log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"handle": dto.username_or_email},
                success=False,
            )
            raise

        self._audit.log(
            AuditAction.LOGIN_SUCCESS,
            user_id=identity.id,
            ip_address=ip_address,
            details={"jti": issued.claims.jti},
            success=True,
        )
        logger.info(f"auth.login: ok user_id={identity.id}")
        return jsonify(TokenDTO.from_issued(issued).model_dump(mode="json")), 200

    def logout(self) -> tuple[str, int]:
        claims = self._logout_use_case.execute(bearer_token())
        user_id = claims.identity_id if claims else None

        self._audit.log(AuditAction.LOGOUT, user_id=user_id, ip_address=client_ip(), success=True)
        logger.info(f"auth.logout: ok user_id={user_id}")
        return "", 204

    def as_blueprint(self) -> Blueprint:
        limited = rate_limit(
            self._security.rate_limit_requests,
            self._security.rate_limit_window,
            enabled=self._security.enable_rate_limit,
        )
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=limited(self.register), methods=["POST"])
        bp.add_url_rule("/login", view_func=limited(self.login), methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
