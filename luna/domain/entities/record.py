# luna/domain/entities/record.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from luna.domain.entities.lookup import Lookup
from luna.domain.entities.links.record_genre import RecordGenre
from luna.domain.entities.links.idol_participation import IdolParticipation


@dataclass(frozen=True)
class Link:
    id: Optional[int]
    record_id: str
    name: str
    size: Decimal = Decimal("-1")
    date: date = date(1970, 1, 1)
    link: str = ""
    star: bool = False


@dataclass
class RecordAggregate:
    """
    Read model for a Record: the bare row plus every related lookup and
    child collection, resolved.

    Never persisted as such; RecordAssembler builds one on every read.
    Invariants:
      - director/studio/label/series are always resolved (a missing row is
        an integrity fault raised by the assembler, never a None here)
      - genres/idols keep the junction row's `manual` flag
    """
    id: str
    title: str
    date: date
    duration: int
    director: Lookup
    studio: Lookup
    label: Lookup
    series: Lookup
    genres: List[RecordGenre] = field(default_factory=list)
    idols: List[IdolParticipation] = field(default_factory=list)
    has_links: bool = False
    links: List[Link] = field(default_factory=list)
    permission: int = 3
    local_img_count: int = -1
    create_time: Optional[date] = None
    update_time: Optional[date] = None
    creator: str = "admin"
    modified_by: str = "admin"

    def genre_ids(self) -> List[int]:
        return [g.genre.id for g in self.genres]

    def idol_ids(self) -> List[int]:
        return [i.idol.id for i in self.idols]
