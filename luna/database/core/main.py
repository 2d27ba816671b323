# luna/database/core/main.py
from __future__ import annotations

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from luna.common.settings import get_settings

_settings = get_settings()

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(
        schema=_settings.db_schema if _settings.db_schema and _settings.db_schema.lower() != "public" else None,
        naming_convention=NAMING_CONVENTION,
    )


def _sqlite_pragmas(dbapi_conn, _):
    # ON DELETE SET DEFAULT / CASCADE need FK enforcement; LIKE filters are case-sensitive
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.execute("PRAGMA case_sensitive_like=ON")
    cur.close()


def build_engine(url: str, **overrides) -> Engine:
    """
    Create an Engine for `url`. Postgres gets the pool settings from config;
    SQLite (local runs and tests) gets FK enforcement and, for :memory:,
    a single shared connection.
    """
    if url.startswith("sqlite"):
        kw = {"future": True, "echo": _settings.db.echo}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
            kw.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
        kw.update(overrides)
        eng = create_engine(url, **kw)
        event.listen(eng, "connect", _sqlite_pragmas)
        return eng

    kw = dict(
        echo=_settings.db.echo,
        pool_size=_settings.db.pool_size,
        max_overflow=_settings.db.max_overflow,
        pool_pre_ping=_settings.db.pool_pre_ping,
        pool_recycle=_settings.db.pool_recycle,
        future=True,
    )
    kw.update(overrides)
    eng = create_engine(url, **kw)

    # Ensure the app schema is first, then public (so extensions remain visible)
    if _settings.db_schema and _settings.db_schema.lower() != "public":
        @event.listens_for(eng, "connect")
        def _set_search_path(dbapi_conn, _):
            with dbapi_conn.cursor() as cur:
                cur.execute(f'SET search_path TO "{_settings.db_schema}", public')

    return eng


engine = build_engine(_settings.database_url)

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False, future=True, autoflush=False)

