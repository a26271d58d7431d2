# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database unit of work implementation."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from contactbook.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork(AbstractContextManager):
    """One session, one transaction.

    Read-only units never commit: whatever the block did is rolled back on
    exit, which also releases SQLite's shared lock promptly.
    """

    session_factory: Callable[[], Session]
    readonly: bool = False
    _session: Session | None = field(default=None, init=False)

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._session is not None
        try:
            if exc is not None:
                logger.debug(f"uow: rollback due to {exc_type.__name__}")
                self._session.rollback()
            elif self.readonly:
                self._session.rollback()
            else:
                self._session.commit()
        except Exception:
            logger.exception("uow: exception while finalising")
            self._session.rollback()
            raise
        finally:
            self._session.close()
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork session accessed before entering context")
        return self._session


@contextmanager
def unit_of_work_scope(
    factory: Callable[[], Session], *, readonly: bool = False
) -> Iterator[Session]:
    """Yield a session whose transaction commits (or rolls back) on exit."""

    with SqlAlchemyUnitOfWork(factory, readonly=readonly) as uow:
        yield uow.session


__all__ = ["SqlAlchemyUnitOfWork", "unit_of_work_scope"]
