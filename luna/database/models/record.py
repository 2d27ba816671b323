# luna/database/models/record.py
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import List

from sqlalchemy import (
    Boolean, Date, ForeignKey, Integer, BigInteger, Numeric, String, Text,
    UniqueConstraint, Index, text, func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from luna.database.core.main import Base
from luna.database.core.lookup_columns import BigIntPK


def _fk_target(table: str) -> str:
    schema = Base.metadata.schema
    return f"{schema}.{table}.id" if schema else f"{table}.id"


def _lookup_fk(table: str):
    # Deleting a lookup row re-points records at the seeded "Unknown" row (id 1)
    return mapped_column(
        BigInteger,
        ForeignKey(_fk_target(table), ondelete="SET DEFAULT"),
        nullable=False,
        server_default=text("1"),
    )


class Record(Base):
    __tablename__ = "record"
    __table_args__ = (
        Index("ix_record_director_id", "director_id"),
        Index("ix_record_studio_id", "studio_id"),
        Index("ix_record_label_id", "label_id"),
        Index("ix_record_series_id", "series_id"),
    )

    # caller-supplied, not generated
    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    title: Mapped[str] = mapped_column(String(1024), nullable=False, server_default="Untitled")
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, server_default=text("'1970-01-01'"))
    duration: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))

    director_id: Mapped[int] = _lookup_fk("director")
    studio_id: Mapped[int] = _lookup_fk("studio")
    label_id: Mapped[int] = _lookup_fk("label")
    series_id: Mapped[int] = _lookup_fk("series")

    has_links: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))
    permission: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("3"))
    local_img_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("-1"))
    create_time: Mapped[dt.date] = mapped_column(Date, nullable=False, server_default=func.current_date())
    update_time: Mapped[dt.date] = mapped_column(Date, nullable=False, server_default=func.current_date())
    creator: Mapped[str] = mapped_column(String(255), nullable=False, server_default="admin")
    modified_by: Mapped[str] = mapped_column(String(255), nullable=False, server_default="admin")

    # children are removed by the database (ON DELETE CASCADE)
    links: Mapped[List["Link"]] = relationship(
        back_populates="record", cascade="all, delete-orphan", passive_deletes=True
    )
    genre_links: Mapped[List["RecordGenre"]] = relationship(
        back_populates="record", cascade="all, delete-orphan", passive_deletes=True
    )
    idol_links: Mapped[List["IdolParticipation"]] = relationship(
        back_populates="record", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Record id={self.id!r} title={self.title!r}>"


class RecordGenre(Base):
    """Association Record <-> Genre with a per-association `manual` flag."""
    __tablename__ = "record_genre"
    __table_args__ = (
        UniqueConstraint("record_id", "genre_id", name="uq_record_genre_record_genre"),
        Index("ix_record_genre_genre_id", "genre_id"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    record_id: Mapped[str] = mapped_column(
        String(255), ForeignKey(_fk_target("record"), ondelete="CASCADE"), nullable=False
    )
    genre_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey(_fk_target("genre"), ondelete="CASCADE"), nullable=False
    )
    manual: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))

    record: Mapped[Record] = relationship(back_populates="genre_links")


class IdolParticipation(Base):
    """Association Record <-> Idol with a per-association `manual` flag."""
    __tablename__ = "idol_participation"
    __table_args__ = (
        UniqueConstraint("record_id", "idol_id", name="uq_idol_participation_record_idol"),
        Index("ix_idol_participation_idol_id", "idol_id"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    idol_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey(_fk_target("idol"), ondelete="CASCADE"), nullable=False
    )
    record_id: Mapped[str] = mapped_column(
        String(255), ForeignKey(_fk_target("record"), ondelete="CASCADE"), nullable=False
    )
    manual: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=text("false"))

    record: Mapped[Record] = relationship(back_populates="idol_links")


class Link(Base):
    __tablename__ = "links"
    __table_args__ = (
        Index("ix_links_record_id", "record_id"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    record_id: Mapped[str] = mapped_column(
        String(255), ForeignKey(_fk_target("record"), ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, server_default=text("-1"))
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, server_default=text("'1970-01-01'"))
    link: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    star: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("false"))

    record: Mapped[Record] = relationship(back_populates="links")
