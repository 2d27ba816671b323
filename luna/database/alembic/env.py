# luna/database/alembic/env.py
from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool, text
from sqlalchemy.engine import Connection

# Keep this import light: settings + metadata only, not the API graph.
from luna.common.settings import get_settings
from luna.database.models import Base

cfg = get_settings()

alembic_config = context.config

if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

# DATABASE_URL wins over the assembled DB__* settings
database_url = os.getenv("DATABASE_URL", cfg.database_url)
target_metadata = Base.metadata

app_schema = cfg.db_schema if cfg.db_schema and cfg.db_schema.lower() != "public" else None
version_table_schema = cfg.alembic_version_table_schema if database_url.startswith("postgresql") else None


def include_object(object, name, type_, reflected, compare_to):
    """Limit autogenerate to the app schema (version table may live in public)."""
    obj_schema = getattr(object, "schema", None)
    if type_ == "table":
        if obj_schema is None:
            return True
        return obj_schema in {app_schema, version_table_schema}
    return True


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_schemas=app_schema is not None,
        include_object=include_object,
        version_table_schema=version_table_schema,
    )

    with context.begin_transaction():
        context.run_migrations()


def _prepare_connection(conn: Connection) -> None:
    """Create the app schema and put it first on the search_path (Postgres only)."""
    if conn.dialect.name != "postgresql" or app_schema is None:
        return
    conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{app_schema}"'))
    conn.execute(text(f'SET search_path TO "{app_schema}", public'))


def run_migrations_online() -> None:
    connectable = create_engine(database_url, poolclass=pool.NullPool, future=True)

    with connectable.connect() as connection:
        _prepare_connection(connection)

        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_schemas=app_schema is not None,
            include_object=include_object,
            version_table_schema=version_table_schema,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
