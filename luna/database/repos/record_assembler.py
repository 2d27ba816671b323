# luna/database/repos/record_assembler.py
from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from luna.common.errors import RecordIntegrityError
from luna.common.logging import get_logger
from luna.database.models.lookup import Genre, Idol
from luna.database.models.record import (
    Record as DBRecord,
    RecordGenre as DBRecordGenre,
    IdolParticipation as DBIdolParticipation,
    Link as DBLink,
)
from luna.database.repos._mapping import to_domain_lookup, to_domain_link
from luna.database.repos.lookup_repo import LookupRepo
from luna.domain.entities.links.idol_participation import IdolParticipation
from luna.domain.entities.links.record_genre import RecordGenre
from luna.domain.entities.lookup import Lookup
from luna.domain.entities.record import RecordAggregate
from luna.domain.enums.lookup_kind import LookupKind, RECORD_FK_KINDS

logger = get_logger()


class RecordAssembler:
    """
    Builds RecordAggregate read models from bare record rows.

    Per record: one lookup per FK (director/studio/label/series), then one
    query each for genres, idols and links. A FK that does not resolve raises
    RecordIntegrityError; junction rows whose genre/idol is gone are dropped.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self._lookups = {k: LookupRepo(db, k) for k in RECORD_FK_KINDS}

    def load(self, record_id: str) -> Optional[RecordAggregate]:
        row = self.db.get(DBRecord, record_id)
        if row is None:
            return None
        return self.assemble(row)

    def load_many(self, rows: Iterable[DBRecord]) -> List[RecordAggregate]:
        return [self.assemble(r) for r in rows]

    def _resolve(self, row: DBRecord, kind: LookupKind) -> Lookup:
        fk = getattr(row, f"{kind.value}_id")
        found = self._lookups[kind].find_by_id(fk)
        if found is None:
            logger.error("Record %s references missing %s id=%s", row.id, kind.value, fk)
            raise RecordIntegrityError(row.id, kind.value, fk)
        return found

    def _genres(self, record_id: str) -> List[RecordGenre]:
        stmt = (
            select(DBRecordGenre, Genre)
            .outerjoin(Genre, Genre.id == DBRecordGenre.genre_id)
            .where(DBRecordGenre.record_id == record_id)
            .order_by(DBRecordGenre.id.asc())
        )
        return [
            RecordGenre(genre=to_domain_lookup(g), manual=bool(j.manual))
            for j, g in self.db.execute(stmt).all()
            if g is not None
        ]

    def _idols(self, record_id: str) -> List[IdolParticipation]:
        stmt = (
            select(DBIdolParticipation, Idol)
            .outerjoin(Idol, Idol.id == DBIdolParticipation.idol_id)
            .where(DBIdolParticipation.record_id == record_id)
            .order_by(DBIdolParticipation.id.asc())
        )
        return [
            IdolParticipation(idol=to_domain_lookup(i), manual=bool(j.manual))
            for j, i in self.db.execute(stmt).all()
            if i is not None
        ]

    def _links(self, record_id: str):
        stmt = select(DBLink).where(DBLink.record_id == record_id).order_by(DBLink.id.asc())
        return [to_domain_link(r) for r in self.db.execute(stmt).scalars().all()]

    def assemble(self, row: DBRecord) -> RecordAggregate:
        director, studio, label, series = (self._resolve(row, k) for k in RECORD_FK_KINDS)
        return RecordAggregate(
            id=row.id,
            title=row.title,
            date=row.date,
            duration=row.duration,
            director=director,
            studio=studio,
            label=label,
            series=series,
            genres=self._genres(row.id),
            idols=self._idols(row.id),
            has_links=bool(row.has_links),
            links=self._links(row.id),
            permission=row.permission,
            local_img_count=row.local_img_count,
            create_time=row.create_time,
            update_time=row.update_time,
            creator=row.creator,
            modified_by=row.modified_by,
        )
