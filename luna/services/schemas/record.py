# luna/services/schemas/record.py
from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from luna.services.schemas.lookup import LookupCreate, LookupRead


# ---------- Links ----------

class LinkCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    size: Optional[Decimal] = None
    date: Optional[Date] = None
    link: Optional[str] = None
    star: Optional[bool] = None


class LinkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    record_id: str
    name: str
    size: Decimal
    date: Date
    link: str
    star: bool


class LinksAdded(BaseModel):
    added: int


# ---------- Genre / Idol on a record ----------

class RecordGenreCreate(BaseModel):
    genre: LookupCreate
    manual: bool = False


class IdolParticipationCreate(BaseModel):
    idol: LookupCreate
    manual: bool = False


class RecordGenreRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    genre: LookupRead
    manual: bool


class IdolParticipationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    idol: LookupRead
    manual: bool


# ---------- Record ----------

class RecordBase(BaseModel):
    title: str = Field("Untitled", max_length=1024)
    date: Date = Date(1970, 1, 1)
    duration: int = 0
    has_links: bool = False
    permission: int = 3
    local_img_count: int = -1


class RecordCreate(RecordBase):
    """
    Nested lookups are submitted by value (no ids); each one is resolved
    through dedup before the record is written. Missing ones fall back to
    the seeded "Unknown" rows.
    """
    id: str = Field(..., min_length=1, max_length=255)
    director: Optional[LookupCreate] = None
    studio: Optional[LookupCreate] = None
    label: Optional[LookupCreate] = None
    series: Optional[LookupCreate] = None
    genres: List[RecordGenreCreate] = []
    idols: List[IdolParticipationCreate] = []
    links: List[LinkCreate] = []
    creator: str = "admin"
    modified_by: str = "admin"


class RecordUpdate(RecordBase):
    """Full replacement: every scalar field must be sent."""
    title: str = Field(..., max_length=1024)
    date: Date
    duration: int
    has_links: bool
    permission: int
    local_img_count: int
    director: Optional[LookupCreate] = None
    studio: Optional[LookupCreate] = None
    label: Optional[LookupCreate] = None
    series: Optional[LookupCreate] = None
    # None keeps current associations; [] clears them
    genres: Optional[List[RecordGenreCreate]] = None
    idols: Optional[List[IdolParticipationCreate]] = None
    modified_by: str = "admin"


class RecordRead(RecordBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    director: LookupRead
    studio: LookupRead
    label: LookupRead
    series: LookupRead
    genres: List[RecordGenreRead] = []
    idols: List[IdolParticipationRead] = []
    links: List[LinkRead] = []
    create_time: Optional[Date] = None
    update_time: Optional[Date] = None
    creator: str
    modified_by: str
