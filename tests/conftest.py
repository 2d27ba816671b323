# tests/conftest.py
from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import text, update
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from testcontainers.postgres import PostgresContainer

from luna.common.settings import get_settings
from luna.database.core.main import build_engine
from luna.database.core.seed import seed_unknown_rows
from luna.database.models import Base, Record
from luna.services.clock.system_clock import FixedClock

TODAY = date(2024, 5, 17)


@pytest.fixture(scope="session")
def _database_url():
    """
    Postgres in a throwaway container when USE_TESTCONTAINERS=true,
    otherwise TEST_DATABASE_URL (in-memory SQLite by default).
    """
    cfg = get_settings()
    if not cfg.use_testcontainers:
        yield cfg.test_database_url
        return
    with PostgresContainer(cfg.test_db_image) as pg:
        # testcontainers hands out a psycopg2 URL; we ship psycopg (v3)
        yield pg.get_connection_url().replace("psycopg2", "psycopg")


@pytest.fixture(scope="session")
def db_engine(_database_url) -> Engine:
    engine = build_engine(_database_url)

    # Skip Alembic here; create tables from models and seed the "Unknown" rows
    Base.metadata.create_all(bind=engine)
    with engine.begin() as conn:
        seed_unknown_rows(conn)

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(TODAY)


@pytest.fixture()
def break_fk():
    """
    Point a record's director_id at a row that does not exist, bypassing
    FK enforcement for the rest of the (rolled back) test transaction.
    """
    def _break(db: Session, record_id: str, missing_id: int = 999) -> None:
        db.flush()
        if db.get_bind().dialect.name == "sqlite":
            db.execute(text("PRAGMA defer_foreign_keys=ON"))
        else:
            db.execute(text("SET LOCAL session_replication_role = replica"))
        db.execute(
            update(Record).where(Record.id == record_id).values(director_id=missing_id)
        )
        db.expire_all()

    return _break
