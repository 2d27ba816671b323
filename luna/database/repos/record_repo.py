# luna/database/repos/record_repo.py
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select, delete as sa_delete
from sqlalchemy.orm import Session

from luna.common.logging import get_logger
from luna.common.strings.splitters import blank_to_none
from luna.database.models.record import (
    Record as DBRecord,
    RecordGenre as DBRecordGenre,
    IdolParticipation as DBIdolParticipation,
    Link as DBLink,
)
from luna.database.repos.record_assembler import RecordAssembler
from luna.domain.dataclasses.pagination import Page, PageQuery
from luna.domain.dataclasses.payloads import (
    JunctionRef,
    LinkCreate,
    RecordCreate,
    RecordFilter,
    RecordUpdate,
)
from luna.domain.entities.record import RecordAggregate
from luna.domain.enums.lookup_kind import LookupKind
from luna.domain.policies.pagination import paginate_in_memory
from luna.domain.ports.clock import ClockPort

logger = get_logger()


def _unique_refs(refs: Iterable[JunctionRef]) -> List[JunctionRef]:
    # one junction row per (record, entity); first occurrence wins
    seen = set()
    out: List[JunctionRef] = []
    for ref in refs:
        if ref.entity_id in seen:
            continue
        seen.add(ref.entity_id)
        out.append(ref)
    return out


class RecordRepo:
    """
    Record writes plus aggregate reads. Mutations flush into the caller's
    transaction; reads go through RecordAssembler on the same Session, so an
    update returns what it just wrote.
    """

    def __init__(self, db: Session, clock: ClockPort) -> None:
        self.db = db
        self.clock = clock
        self.assembler = RecordAssembler(db)

    # -------- reads --------

    def load(self, record_id: str) -> Optional[RecordAggregate]:
        return self.assembler.load(record_id)

    def exists(self, record_id: str) -> bool:
        return self.db.get(DBRecord, record_id) is not None

    def find_all_ids(self) -> List[str]:
        stmt = select(DBRecord.id).order_by(DBRecord.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def _filtered_rows(self, flt: Optional[RecordFilter]) -> List[DBRecord]:
        stmt = select(DBRecord)
        if flt is not None:
            rid = blank_to_none(flt.id)
            if rid is not None:
                stmt = stmt.where(DBRecord.id.contains(rid, autoescape=True))
            title = blank_to_none(flt.title)
            if title is not None:
                stmt = stmt.where(DBRecord.title.contains(title, autoescape=True))
            for kind in ("director", "studio", "label", "series"):
                val = getattr(flt, f"{kind}_id")
                if val is not None:
                    stmt = stmt.where(getattr(DBRecord, f"{kind}_id") == val)
        stmt = stmt.order_by(DBRecord.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def find_list(self, flt: Optional[RecordFilter] = None) -> List[RecordAggregate]:
        return self.assembler.load_many(self._filtered_rows(flt))

    def find_list_paginated(self, flt: Optional[RecordFilter], page: PageQuery) -> Page[RecordAggregate]:
        """
        In-memory paging: the bare rows are paged first, then only the rows
        of the requested page are assembled.
        """
        rows_page = paginate_in_memory(self._filtered_rows(flt), page)
        return rows_page.map(self.assembler.assemble)

    def find_by_lookup(self, kind: LookupKind | str, lookup_id: int, page: PageQuery) -> Page[RecordAggregate]:
        """Records referencing one lookup row, via FK or junction depending on kind."""
        kind = kind if isinstance(kind, LookupKind) else LookupKind.parse(kind)
        if kind is LookupKind.genre:
            stmt = (
                select(DBRecord)
                .join(DBRecordGenre, DBRecordGenre.record_id == DBRecord.id)
                .where(DBRecordGenre.genre_id == lookup_id)
            )
        elif kind is LookupKind.idol:
            stmt = (
                select(DBRecord)
                .join(DBIdolParticipation, DBIdolParticipation.record_id == DBRecord.id)
                .where(DBIdolParticipation.idol_id == lookup_id)
            )
        else:
            stmt = select(DBRecord).where(getattr(DBRecord, f"{kind.value}_id") == lookup_id)
        rows = list(self.db.execute(stmt.order_by(DBRecord.id.asc())).scalars().all())
        return paginate_in_memory(rows, page).map(self.assembler.assemble)

    # -------- mutations --------

    def _add_junctions(self, record_id: str, genres: Iterable[JunctionRef], idols: Iterable[JunctionRef]) -> None:
        for ref in _unique_refs(genres):
            self.db.add(DBRecordGenre(record_id=record_id, genre_id=ref.entity_id, manual=ref.manual))
        for ref in _unique_refs(idols):
            self.db.add(DBIdolParticipation(record_id=record_id, idol_id=ref.entity_id, manual=ref.manual))

    def _link_row(self, record_id: str, link: LinkCreate) -> DBLink:
        row = DBLink(record_id=record_id, name=link.name)
        if link.size is not None:
            row.size = link.size
        if link.date is not None:
            row.date = link.date
        if link.link is not None:
            row.link = link.link
        if link.star is not None:
            row.star = link.star
        return row

    def create(self, payload: RecordCreate) -> str:
        """
        Insert a record with its genre/idol junction rows and links.
        An id that already exists is returned as-is without touching the row.
        """
        if self.db.get(DBRecord, payload.id) is not None:
            logger.info("Record %s already exists; create is a no-op", payload.id)
            return payload.id

        today = self.clock.today()
        row = DBRecord(
            id=payload.id,
            title=payload.title,
            date=payload.date,
            duration=payload.duration,
            director_id=payload.director_id,
            studio_id=payload.studio_id,
            label_id=payload.label_id,
            series_id=payload.series_id,
            has_links=payload.has_links or bool(payload.links),
            permission=payload.permission,
            local_img_count=payload.local_img_count,
            create_time=today,
            update_time=today,
            creator=payload.creator,
            modified_by=payload.modified_by,
        )
        self.db.add(row)
        # parent first so junction/link FKs resolve
        self.db.flush()

        self._add_junctions(payload.id, payload.genres, payload.idols)
        for link in payload.links:
            self.db.add(self._link_row(payload.id, link))
        self.db.flush()
        return payload.id

    def update(self, record_id: str, payload: RecordUpdate) -> Optional[RecordAggregate]:
        row = self.db.get(DBRecord, record_id)
        if row is None:
            return None

        row.title = payload.title
        row.date = payload.date
        row.duration = payload.duration
        row.director_id = payload.director_id
        row.studio_id = payload.studio_id
        row.label_id = payload.label_id
        row.series_id = payload.series_id
        row.has_links = payload.has_links
        row.permission = payload.permission
        row.local_img_count = payload.local_img_count
        row.modified_by = payload.modified_by
        row.update_time = self.clock.today()

        if payload.genres is not None:
            self.db.execute(sa_delete(DBRecordGenre).where(DBRecordGenre.record_id == record_id))
        if payload.idols is not None:
            self.db.execute(sa_delete(DBIdolParticipation).where(DBIdolParticipation.record_id == record_id))
        self._add_junctions(record_id, payload.genres or [], payload.idols or [])
        self.db.flush()

        return self.assembler.assemble(row)

    def add_links(self, record_id: str, links: Iterable[LinkCreate]) -> Optional[int]:
        """
        Append links whose URL is not already on the record and mark it as
        having links. Returns how many were added, or None if the record is missing.
        """
        row = self.db.get(DBRecord, record_id)
        if row is None:
            return None

        existing = set(
            self.db.execute(select(DBLink.link).where(DBLink.record_id == record_id)).scalars().all()
        )
        added = 0
        for link in links:
            url = link.link if link.link is not None else ""
            if url in existing:
                continue
            existing.add(url)
            self.db.add(self._link_row(record_id, link))
            added += 1

        if added:
            row.has_links = True
            row.update_time = self.clock.today()
        self.db.flush()
        return added

    def delete(self, record_id: str) -> bool:
        row = self.db.get(DBRecord, record_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True
