# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from contactbook.shared.config import DatabaseConfig
from contactbook.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


def create_db_engine(config: DatabaseConfig) -> Engine:
    if config.is_sqlite():
        engine = create_engine(
            config.url,
            echo=False,
            connect_args={
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            },
        )
        event.listen(engine, "connect", _set_sqlite_pragmas)
    else:
        engine = create_engine(
            config.url,
            echo=False,
            pool_pre_ping=True,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )
    logger.debug(f"db.engine: created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata
    from contactbook.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")


def check_database(engine: Engine) -> bool:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return True
