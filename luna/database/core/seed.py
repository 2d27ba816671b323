# luna/database/core/seed.py
from __future__ import annotations

from sqlalchemy import select, func
from sqlalchemy.engine import Connection

from luna.database.models.lookup import Director, Studio, Label, Series

UNKNOWN_LOOKUP_ID = 1

# Rows that must hold id UNKNOWN_LOOKUP_ID in their tables: record FKs default to them.
UNKNOWN_ROWS = (
    (Director, "Unknown Director"),
    (Studio, "Unknown Studio"),
    (Label, "Unknown Label"),
    (Series, "Unknown Series"),
)


def seed_unknown_rows(conn: Connection) -> None:
    """
    Insert the "Unknown ..." rows into empty lookup tables. Ids are left to
    the database so sequences stay in step; on a fresh table that is id 1.
    """
    for model, name in UNKNOWN_ROWS:
        table = model.__table__
        has_rows = conn.execute(select(func.count()).select_from(table)).scalar_one()
        if has_rows:
            continue
        conn.execute(table.insert().values(name=name, link="", manual=False))
