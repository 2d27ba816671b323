# luna/database/repos/lookup_repo.py
from __future__ import annotations

from typing import Dict, List, Optional, Type

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from luna.common.errors import ProtectedLookupError
from luna.common.logging import get_logger
from luna.common.strings.splitters import blank_to_none
from luna.database.core.lookup_columns import LookupColumns
from luna.database.core.seed import UNKNOWN_LOOKUP_ID
from luna.database.models.lookup import Director, Studio, Label, Series, Genre, Idol
from luna.database.models.record import Record, RecordGenre, IdolParticipation
from luna.database.repos._mapping import to_domain_lookup
from luna.domain.dataclasses.pagination import Page, PageQuery
from luna.domain.dataclasses.payloads import LookupCandidate, LookupFilter, LookupPatch
from luna.domain.dataclasses.reports import EntityCount
from luna.domain.entities.lookup import Lookup, NaturalKey
from luna.domain.enums.lookup_kind import LookupKind, RECORD_FK_KINDS
from luna.domain.policies.pagination import paginate_query

logger = get_logger()

LOOKUP_MODELS: Dict[LookupKind, Type[LookupColumns]] = {
    LookupKind.director: Director,
    LookupKind.studio: Studio,
    LookupKind.label: Label,
    LookupKind.series: Series,
    LookupKind.genre: Genre,
    LookupKind.idol: Idol,
}

# Column whose value is the lookup id for each kind: a Record FK for the four
# direct references, the junction table column for genre/idol.
RECORD_COUNT_COLUMNS = {
    LookupKind.director: Record.director_id,
    LookupKind.studio: Record.studio_id,
    LookupKind.label: Record.label_id,
    LookupKind.series: Record.series_id,
    LookupKind.genre: RecordGenre.genre_id,
    LookupKind.idol: IdolParticipation.idol_id,
}


class LookupRepo:
    """
    Repository for one reference table (director, studio, label, series,
    genre or idol). The six tables share one shape, so a single class is
    parameterised by kind instead of six near-identical copies.

    Rows are deduplicated on the natural key (name, link, manual):
      - create_or_dedupe returns the id of an existing exact match
      - update merges into another row that already holds the resulting key
    Both run inside the caller's transaction; nothing here commits.
    """

    def __init__(self, db: Session, kind: LookupKind | str) -> None:
        self.db = db
        self.kind = kind if isinstance(kind, LookupKind) else LookupKind.parse(kind)
        self.model = LOOKUP_MODELS[self.kind]

    # -------- reads --------

    def _get(self, lookup_id: int) -> Optional[LookupColumns]:
        return self.db.get(self.model, lookup_id)

    def find_by_id(self, lookup_id: int) -> Optional[Lookup]:
        row = self._get(lookup_id)
        return to_domain_lookup(row) if row else None

    def find_all(self) -> List[Lookup]:
        stmt = select(self.model).order_by(self.model.id.asc())
        return [to_domain_lookup(r) for r in self.db.execute(stmt).scalars().all()]

    def _filtered(self, flt: Optional[LookupFilter]):
        stmt = select(self.model)
        if flt is None:
            return stmt
        if flt.id is not None:
            stmt = stmt.where(self.model.id == flt.id)
        name = blank_to_none(flt.name)
        if name is not None:
            stmt = stmt.where(self.model.name.contains(name, autoescape=True))
        link = blank_to_none(flt.link)
        if link is not None:
            stmt = stmt.where(self.model.link.contains(link, autoescape=True))
        return stmt

    def find_list(self, flt: Optional[LookupFilter] = None) -> List[Lookup]:
        stmt = self._filtered(flt).order_by(self.model.id.asc())
        return [to_domain_lookup(r) for r in self.db.execute(stmt).scalars().all()]

    def find_list_paginated(self, flt: Optional[LookupFilter], page: PageQuery) -> Page[Lookup]:
        base = self._filtered(flt)

        def count() -> int:
            stmt = select(func.count()).select_from(base.subquery())
            return int(self.db.execute(stmt).scalar_one() or 0)

        def fetch(row_offset: int, limit: int) -> List[Lookup]:
            stmt = base.order_by(self.model.id.asc()).offset(row_offset).limit(limit)
            return [to_domain_lookup(r) for r in self.db.execute(stmt).scalars().all()]

        return paginate_query(page, count=count, fetch=fetch)

    def _find_by_key(self, key: NaturalKey, *, exclude_id: Optional[int] = None) -> Optional[LookupColumns]:
        name, link, manual = key
        stmt = select(self.model).where(
            self.model.name == name,
            self.model.link == link,
            self.model.manual == manual,
        )
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        # oldest row wins when a race has left duplicates behind
        stmt = stmt.order_by(self.model.id.asc()).limit(1)
        return self.db.execute(stmt).scalars().first()

    # -------- mutations --------

    def create_or_dedupe(self, candidate: LookupCandidate) -> int:
        """
        Return the id of the row holding candidate's natural key, inserting
        one if none exists. Missing link/manual default to "" / False.
        """
        key = candidate.natural_key()
        existing = self._find_by_key(key)
        if existing is not None:
            logger.info("%s dedup hit: %r -> id=%s", self.kind.display_name, key, existing.id)
            return existing.id

        name, link, manual = key
        obj = self.model(name=name, link=link, manual=manual)
        self.db.add(obj)
        self.db.flush()
        return obj.id

    def update(self, lookup_id: int, patch: LookupPatch) -> Optional[Lookup]:
        """
        Apply `patch` to row `lookup_id`.

        When another row already holds the patched natural key, the edited row
        is deleted and that other row is returned instead, so the caller may
        get back a different id than the one it passed.

        The seeded "Unknown" row of a FK kind is never the one deleted: on a
        collision the other row is merged into it instead, and its records
        fall back onto the Unknown row through ON DELETE SET DEFAULT.
        """
        obj = self._get(lookup_id)
        if obj is None:
            return None

        key = patch.merged_key(obj.name, obj.link or "", bool(obj.manual))
        other = self._find_by_key(key, exclude_id=lookup_id)
        if other is not None and self._is_protected(lookup_id):
            logger.info(
                "%s merge: id=%s collides with protected id=%s on %r; deleting id=%s",
                self.kind.display_name, other.id, lookup_id, key, other.id,
            )
            self.db.delete(other)
            self.db.flush()
            obj.name, obj.link, obj.manual = key
            self.db.flush()
            return to_domain_lookup(obj)
        if other is not None:
            logger.info(
                "%s merge: id=%s collides with id=%s on %r; deleting id=%s",
                self.kind.display_name, lookup_id, other.id, key, lookup_id,
            )
            self.db.delete(obj)
            self.db.flush()
            return to_domain_lookup(other)

        obj.name, obj.link, obj.manual = key
        self.db.flush()
        return to_domain_lookup(obj)

    def _is_protected(self, lookup_id: int) -> bool:
        return self.kind in RECORD_FK_KINDS and lookup_id == UNKNOWN_LOOKUP_ID

    def delete(self, lookup_id: int) -> bool:
        """
        Remove row `lookup_id`. The seeded "Unknown" row of a FK kind raises
        ProtectedLookupError: records fall back to it on delete.
        """
        obj = self._get(lookup_id)
        if obj is None:
            return False
        if self._is_protected(lookup_id):
            raise ProtectedLookupError(self.kind.value, lookup_id)
        self.db.delete(obj)
        self.db.flush()
        return True

    # -------- reports --------

    def record_counts(self) -> List[EntityCount]:
        """
        Number of records referencing each row, highest first.
        One count query per row; rows with no records are included with 0.
        """
        col = RECORD_COUNT_COLUMNS[self.kind]
        out: List[EntityCount] = []
        for row in self.db.execute(select(self.model).order_by(self.model.id.asc())).scalars().all():
            n = self.db.execute(
                select(func.count()).select_from(col.class_).where(col == row.id)
            ).scalar_one()
            out.append(EntityCount(id=row.id, name=row.name, count=int(n or 0)))
        out.sort(key=lambda c: c.count, reverse=True)
        return out
