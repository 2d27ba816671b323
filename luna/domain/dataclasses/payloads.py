# luna/domain/dataclasses/payloads.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from luna.domain.entities.lookup import NaturalKey


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LookupCandidate:
    """A lookup as submitted by a client, without an id."""
    name: str
    link: Optional[str] = None
    manual: Optional[bool] = None

    def natural_key(self) -> NaturalKey:
        return (self.name, self.link if self.link is not None else "", bool(self.manual))


@dataclass(frozen=True)
class LookupPatch:
    name: Optional[str] = None
    link: Optional[str] = None
    manual: Optional[bool] = None

    def merged_key(self, name: str, link: str, manual: bool) -> NaturalKey:
        """Natural key the row would have after this patch is applied."""
        return (
            self.name if self.name is not None else name,
            self.link if self.link is not None else link,
            self.manual if self.manual is not None else manual,
        )


@dataclass(frozen=True)
class LookupFilter:
    id: Optional[int] = None
    name: Optional[str] = None
    link: Optional[str] = None


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class JunctionRef:
    """Reference to an existing Genre/Idol plus the junction row's manual flag."""
    entity_id: int
    manual: bool = False


@dataclass(frozen=True)
class LinkCreate:
    name: str
    size: Optional[Decimal] = None
    date: Optional[date] = None
    link: Optional[str] = None
    star: Optional[bool] = None


@dataclass
class RecordCreate:
    """
    Insert payload for RecordRepository. Lookup ids must already exist
    (resolved by the caller through create_or_dedupe).
    """
    id: str
    title: str = "Untitled"
    date: date = date(1970, 1, 1)
    duration: int = 0
    director_id: int = 1
    studio_id: int = 1
    label_id: int = 1
    series_id: int = 1
    genres: List[JunctionRef] = field(default_factory=list)
    idols: List[JunctionRef] = field(default_factory=list)
    links: List[LinkCreate] = field(default_factory=list)
    has_links: bool = False
    permission: int = 3
    local_img_count: int = -1
    creator: str = "admin"
    modified_by: str = "admin"


@dataclass
class RecordUpdate:
    """
    Full replacement of a Record's scalar and FK fields.
    genres/idols left as None keep the existing junction rows.
    """
    title: str
    date: date
    duration: int
    director_id: int
    studio_id: int
    label_id: int
    series_id: int
    has_links: bool
    permission: int
    local_img_count: int
    modified_by: str
    genres: Optional[List[JunctionRef]] = None
    idols: Optional[List[JunctionRef]] = None


@dataclass(frozen=True)
class RecordFilter:
    id: Optional[str] = None
    title: Optional[str] = None
    director_id: Optional[int] = None
    studio_id: Optional[int] = None
    label_id: Optional[int] = None
    series_id: Optional[int] = None
