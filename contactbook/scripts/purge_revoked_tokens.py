# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Drop revocation entries whose tokens have expired anyway."""

from __future__ import annotations

import argparse
from datetime import UTC, datetime

from contactbook.infrastructure.db import create_db_engine, create_session_factory, init_db
from contactbook.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyRevokedTokenRepository,
)
from contactbook.shared.config import DatabaseConfig, load_config


def purge(database: DatabaseConfig, now: datetime | None = None) -> int:
    engine = create_db_engine(database)
    try:
        init_db(engine)
        repository = SqlAlchemyRevokedTokenRepository(create_session_factory(engine))
        return repository.purge_expired(now or datetime.now(UTC))
    finally:
        engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Purge expired revoked tokens")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="Database URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args()

    database = load_config().database
    if args.database_url:
        database = database.model_copy(update={"url": args.database_url})

    removed = purge(database)
    print(f"Purged {removed} revoked token(s)")


if __name__ == "__main__":
    main()
