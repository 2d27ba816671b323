# luna/services/mappers/record.py
from __future__ import annotations

from typing import Dict, List, Optional

from luna.domain.dataclasses.pagination import Page
from luna.domain.dataclasses.payloads import (
    JunctionRef,
    LinkCreate,
    LookupCandidate,
    LookupPatch,
    RecordCreate,
    RecordUpdate,
)
from luna.domain.entities.record import RecordAggregate
from luna.services.schemas.lookup import LookupCreate, LookupUpdate
from luna.services.schemas.pagination import PageRead
from luna.services.schemas.record import (
    LinkCreate as LinkCreateIn,
    RecordCreate as RecordCreateIn,
    RecordUpdate as RecordUpdateIn,
    RecordRead,
)


def to_candidate(s: LookupCreate) -> LookupCandidate:
    return LookupCandidate(name=s.name, link=s.link, manual=s.manual)


def to_patch(s: LookupUpdate) -> LookupPatch:
    return LookupPatch(name=s.name, link=s.link, manual=s.manual)


def to_link_create(s: LinkCreateIn) -> LinkCreate:
    return LinkCreate(name=s.name, size=s.size, date=s.date, link=s.link, star=s.star)


def to_record_create(
    s: RecordCreateIn,
    fk_ids: Dict[str, int],
    genres: List[JunctionRef],
    idols: List[JunctionRef],
) -> RecordCreate:
    """`fk_ids` maps director/studio/label/series to resolved lookup ids."""
    return RecordCreate(
        id=s.id,
        title=s.title,
        date=s.date,
        duration=s.duration,
        director_id=fk_ids["director"],
        studio_id=fk_ids["studio"],
        label_id=fk_ids["label"],
        series_id=fk_ids["series"],
        genres=genres,
        idols=idols,
        links=[to_link_create(link) for link in s.links],
        has_links=s.has_links,
        permission=s.permission,
        local_img_count=s.local_img_count,
        creator=s.creator,
        modified_by=s.modified_by,
    )


def to_record_update(
    s: RecordUpdateIn,
    fk_ids: Dict[str, int],
    genres: Optional[List[JunctionRef]],
    idols: Optional[List[JunctionRef]],
) -> RecordUpdate:
    return RecordUpdate(
        title=s.title,
        date=s.date,
        duration=s.duration,
        director_id=fk_ids["director"],
        studio_id=fk_ids["studio"],
        label_id=fk_ids["label"],
        series_id=fk_ids["series"],
        has_links=s.has_links,
        permission=s.permission,
        local_img_count=s.local_img_count,
        modified_by=s.modified_by,
        genres=genres,
        idols=idols,
    )


def to_record_read(agg: RecordAggregate) -> RecordRead:
    return RecordRead.model_validate(agg)


def to_page_read(page: Page, fn) -> PageRead:
    return PageRead(count=page.count, next=page.next, previous=page.previous, results=[fn(r) for r in page.results])
