# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from contactbook.application.services.credential_store import CredentialStore
from contactbook.application.services.password_hashing import WerkzeugPasswordHasher
from contactbook.application.services.session_tokens import SessionTokenService
from contactbook.application.use_cases.contacts.create_contact import CreateContactUseCase
from contactbook.application.use_cases.contacts.delete_contact import DeleteContactUseCase
from contactbook.application.use_cases.contacts.list_contacts import ListContactsUseCase
from contactbook.application.use_cases.contacts.update_contact import UpdateContactUseCase
from contactbook.application.use_cases.users.change_password import ChangePasswordUseCase
from contactbook.application.use_cases.users.deactivate_user import DeactivateUserUseCase
from contactbook.application.use_cases.users.get_profile import GetProfileUseCase
from contactbook.application.use_cases.users.login_user import LoginUserUseCase
from contactbook.application.use_cases.users.logout_user import LogoutUserUseCase
from contactbook.application.use_cases.users.register_user import RegisterUserUseCase
from contactbook.application.use_cases.users.update_profile import UpdateProfileUseCase
from contactbook.infrastructure.audit import AuditLogger
from contactbook.infrastructure.auth.login_attempts import LoginAttemptsTracker
from contactbook.infrastructure.auth.middleware import AuthenticationMiddleware
from contactbook.infrastructure.db import create_db_engine, create_session_factory
from contactbook.infrastructure.repositories.sqlalchemy import SqlAlchemyContactRepository
from contactbook.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyIdentityRepository,
    SqlAlchemyRevokedTokenRepository,
)
from contactbook.interfaces.http.controllers.auth_controller import AuthController
from contactbook.interfaces.http.controllers.contacts_controller import ContactsController
from contactbook.interfaces.http.controllers.misc_controller import MiscController
from contactbook.interfaces.http.controllers.profile_controller import ProfileController
from contactbook.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    # Persistence

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyIdentityRepository:
        return SqlAlchemyIdentityRepository(self.session_factory)

    @cached_property
    def revoked_token_repository(self) -> SqlAlchemyRevokedTokenRepository:
        return SqlAlchemyRevokedTokenRepository(self.session_factory)

    @cached_property
    def contact_repository(self) -> SqlAlchemyContactRepository:
        return SqlAlchemyContactRepository(self.session_factory)

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(users=self.user_repository, password_hasher=self.password_hasher)

    @cached_property
    def session_tokens(self) -> SessionTokenService:
        return SessionTokenService(
            secret_key=self.config.secret_key,
            default_ttl_seconds=self.config.token_ttl_seconds,
            revoked_tokens=self.revoked_token_repository,
        )

    @cached_property
    def login_attempts(self) -> LoginAttemptsTracker:
        security = self.config.security
        return LoginAttemptsTracker(
            max_attempts=security.login_max_attempts,
            lockout_seconds=security.login_lockout_seconds,
        )

    @cached_property
    def auth_middleware(self) -> AuthenticationMiddleware:
        return AuthenticationMiddleware(sessions=self.session_tokens, users=self.user_repository)

    @cached_property
    def audit_logger(self) -> AuditLogger:
        return AuditLogger(self.session_factory)

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(credentials=self.credential_store)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            credentials=self.credential_store,
            sessions=self.session_tokens,
            attempts=self.login_attempts,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_tokens)

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(users=self.user_repository)

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(credentials=self.credential_store)

    @cached_property
    def deactivate_user_use_case(self) -> DeactivateUserUseCase:
        return DeactivateUserUseCase(users=self.user_repository, sessions=self.session_tokens)

    # Contact use cases

    @cached_property
    def list_contacts_use_case(self) -> ListContactsUseCase:
        return ListContactsUseCase(contacts=self.contact_repository)

    @cached_property
    def create_contact_use_case(self) -> CreateContactUseCase:
        return CreateContactUseCase(contacts=self.contact_repository)

    @cached_property
    def update_contact_use_case(self) -> UpdateContactUseCase:
        return UpdateContactUseCase(contacts=self.contact_repository)

    @cached_property
    def delete_contact_use_case(self) -> DeleteContactUseCase:
        return DeleteContactUseCase(contacts=self.contact_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            audit=self.audit_logger,
            security=self.config.security,
        )

    @cached_property
    def profile_controller(self) -> ProfileController:
        return ProfileController(
            auth=self.auth_middleware,
            get_profile=self.get_profile_use_case,
            update_profile=self.update_profile_use_case,
            change_password=self.change_password_use_case,
            deactivate_user=self.deactivate_user_use_case,
            audit=self.audit_logger,
        )

    @cached_property
    def contacts_controller(self) -> ContactsController:
        return ContactsController(
            auth=self.auth_middleware,
            list_contacts=self.list_contacts_use_case,
            create_contact=self.create_contact_use_case,
            update_contact=self.update_contact_use_case,
            delete_contact=self.delete_contact_use_case,
            audit=self.audit_logger,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
