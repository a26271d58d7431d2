# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from contactbook.application.use_cases.users.change_password import ChangePasswordUseCase
from contactbook.application.use_cases.users.deactivate_user import DeactivateUserUseCase
from contactbook.application.use_cases.users.get_profile import GetProfileUseCase
from contactbook.application.use_cases.users.update_profile import UpdateProfileUseCase
from contactbook.infrastructure.audit import AuditAction, AuditLogger
from contactbook.infrastructure.auth.middleware import (
    AuthenticationMiddleware,
    bearer_token,
    current_identity,
)
from contactbook.interfaces.http.controllers._request import client_ip, parse_body
from contactbook.interfaces.http.dto.auth import IdentityDTO
from contactbook.interfaces.http.dto.profile import (
    ChangePasswordRequestDTO,
    UpdateProfileRequestDTO,
)
from contactbook.shared.logging import logger


class ProfileController:
    def __init__(
        self,
        *,
        auth: AuthenticationMiddleware,
        get_profile: GetProfileUseCase,
        update_profile: UpdateProfileUseCase,
        change_password: ChangePasswordUseCase,
        deactivate_user: DeactivateUserUseCase,
        audit: AuditLogger,
    ) -> None:
        self._auth = auth
        self._get_profile = get_profile
        self._update_profile = update_profile
        self._change_password = change_password
        self._deactivate_user = deactivate_user
        self._audit = audit

    def get(self) -> Response:
        identity = self._get_profile.execute(current_identity().id)
        return jsonify(IdentityDTO.model_validate(identity).model_dump(mode="json"))

    def update(self) -> Response:
        dto = parse_body(UpdateProfileRequestDTO)
        user_id = current_identity().id

        identity = self._update_profile.execute(user_id, username=dto.username, email=dto.email)

        self._audit.log(
            AuditAction.PROFILE_UPDATED,
            user_id=user_id,
            ip_address=client_ip(),
            details={"fields": sorted(dto.model_fields_set)},
        )
        logger.info(f"profile.update: ok user_id={user_id}")
        return jsonify(IdentityDTO.model_validate(identity).model_dump(mode="json"))

    def change_password(self) -> tuple[str, int]:
        dto = parse_body(ChangePasswordRequestDTO)
        user_id = current_identity().id

        self._change_password.execute(user_id, dto.current_password, dto.new_password)

        self._audit.log(AuditAction.PASSWORD_CHANGED, user_id=user_id, ip_address=client_ip())
        return "", 204

    def deactivate(self) -> tuple[str, int]:
        user_id = current_identity().id

        self._deactivate_user.execute(user_id, bearer_token())

        self._audit.log(AuditAction.ACCOUNT_DEACTIVATED, user_id=user_id, ip_address=client_ip())
        logger.info(f"profile.deactivate: ok user_id={user_id}")
        return "", 204

    def as_blueprint(self) -> Blueprint:
        protect = self._auth.protect
        bp = Blueprint("profile", __name__, url_prefix="/profile")
        bp.add_url_rule("", view_func=protect(self.get), methods=["GET"], endpoint="get")
        bp.add_url_rule("", view_func=protect(self.update), methods=["PUT"], endpoint="update")
        bp.add_url_rule(
            "",
            view_func=protect(self.deactivate),
            methods=["DELETE"],
            endpoint="deactivate",
        )
        bp.add_url_rule(
            "/password",
            view_func=protect(self.change_password),
            methods=["PUT"],
            endpoint="change_password",
        )
        return bp
