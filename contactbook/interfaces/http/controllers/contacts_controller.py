# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from contactbook.application.use_cases.contacts.create_contact import CreateContactUseCase
from contactbook.application.use_cases.contacts.delete_contact import DeleteContactUseCase
from contactbook.application.use_cases.contacts.list_contacts import ListContactsUseCase
from contactbook.application.use_cases.contacts.update_contact import UpdateContactUseCase
from contactbook.infrastructure.audit import AuditAction, AuditLogger
from contactbook.infrastructure.auth.middleware import AuthenticationMiddleware, current_identity
from contactbook.interfaces.http.controllers._request import client_ip, parse_body
from contactbook.interfaces.http.dto.contacts import ContactCreateDTO, ContactDTO, ContactUpdateDTO


class ContactsController:
    def __init__(
        self,
        *,
        auth: AuthenticationMiddleware,
        list_contacts: ListContactsUseCase,
        create_contact: CreateContactUseCase,
        update_contact: UpdateContactUseCase,
        delete_contact: DeleteContactUseCase,
        audit: AuditLogger,
    ) -> None:
        self._auth = auth
        self._list = list_contacts
        self._create = create_contact
        self._update = update_contact
        self._delete = delete_contact
        self._audit = audit

    def list(self) -> Response:
        contacts = self._list.execute(current_identity().id)
        return jsonify(
            [ContactDTO.model_validate(contact).model_dump(mode="json") for contact in contacts]
        )

    def create(self) -> tuple[Response, int]:
        dto = parse_body(ContactCreateDTO)
        owner_id = current_identity().id

        contact = self._create.execute(owner_id, dto.first_name, dto.last_name, dto.email)

        self._audit.log(
            AuditAction.CONTACT_CREATED,
            user_id=owner_id,
            ip_address=client_ip(),
            details={"contact_id": contact.id},
        )
        return jsonify(ContactDTO.model_validate(contact).model_dump(mode="json")), 201

    def update(self, contact_id: int) -> Response:
        dto = parse_body(ContactUpdateDTO)
        owner_id = current_identity().id

        contact = self._update.execute(owner_id, contact_id, dto.model_dump(exclude_unset=True))

        self._audit.log(
            AuditAction.CONTACT_UPDATED,
            user_id=owner_id,
            ip_address=client_ip(),
            details={"contact_id": contact_id, "fields": sorted(dto.model_fields_set)},
        )
        return jsonify(ContactDTO.model_validate(contact).model_dump(mode="json"))

    def delete(self, contact_id: int) -> tuple[str, int]:
        owner_id = current_identity().id

        self._delete.execute(owner_id, contact_id)

        self._audit.log(
            AuditAction.CONTACT_DELETED,
            user_id=owner_id,
            ip_address=client_ip(),
            details={"contact_id": contact_id},
        )
        return "", 204

    def as_blueprint(self) -> Blueprint:
        protect = self._auth.protect
        bp = Blueprint("contacts", __name__, url_prefix="/contacts")
        bp.add_url_rule("", view_func=protect(self.list), methods=["GET"], endpoint="list")
        bp.add_url_rule("", view_func=protect(self.create), methods=["POST"], endpoint="create")
        bp.add_url_rule(
            "/<int:contact_id>",
            view_func=protect(self.update),
            methods=["PATCH"],
            endpoint="update",
        )
        bp.add_url_rule(
            "/<int:contact_id>",
            view_func=protect(self.delete),
            methods=["DELETE"],
            endpoint="delete",
        )
        return bp
