# luna/database/models/lookup.py
from __future__ import annotations

from luna.database.core.main import Base
from luna.database.core.lookup_columns import LookupColumns


# =======================
# Reference tables
# =======================
# Id 1 of director/studio/label/series is the seeded "Unknown ..." row that
# record FKs fall back to (ON DELETE SET DEFAULT).

class Director(LookupColumns, Base):
    __tablename__ = "director"


class Studio(LookupColumns, Base):
    __tablename__ = "studio"


class Label(LookupColumns, Base):
    __tablename__ = "label"


class Series(LookupColumns, Base):
    __tablename__ = "series"


class Genre(LookupColumns, Base):
    __tablename__ = "genre"


class Idol(LookupColumns, Base):
    __tablename__ = "idol"
