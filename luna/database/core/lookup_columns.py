# luna/database/core/lookup_columns.py
from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, declared_attr

# BIGINT on Postgres; SQLite only auto-increments an INTEGER primary key.
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")


class LookupColumns:
    """
    Mixin providing the columns shared by every reference table.
    Use with multiple inheritance: `class Director(LookupColumns, Base): ...`

    No unique constraint on (name, link, manual):
    LookupRepo deduplicates at write time.
    """
    __abstract__ = True

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    @declared_attr
    def name(cls) -> Mapped[str]:
        return mapped_column(String(255), nullable=False, index=True)

    @declared_attr
    def link(cls) -> Mapped[str]:
        return mapped_column(Text, nullable=False, default="", server_default=text("''"))

    @declared_attr
    def manual(cls) -> Mapped[bool]:
        return mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} name={self.name!r}>"
