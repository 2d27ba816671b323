# luna/services/catalog/service.py
from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from luna.common.logging import get_logger
from luna.database.core.seed import UNKNOWN_LOOKUP_ID
from luna.database.core.transaction import transactional
from luna.database.repos.lookup_repo import LookupRepo
from luna.database.repos.record_repo import RecordRepo
from luna.domain.dataclasses.payloads import JunctionRef, LinkCreate
from luna.domain.entities.record import RecordAggregate
from luna.domain.enums.lookup_kind import LookupKind, RECORD_FK_KINDS
from luna.domain.ports.clock import ClockPort
from luna.services.mappers.record import to_candidate, to_record_create, to_record_update
from luna.services.schemas.lookup import LookupCreate
from luna.services.schemas.record import RecordCreate as RecordCreateIn, RecordUpdate as RecordUpdateIn

logger = get_logger()


class CatalogService:
    """
    Orchestrates a record write: every nested lookup in the payload is
    resolved through create_or_dedupe, then the record is written with the
    resulting ids and assembled, all in one transaction on `db`.
    """

    def __init__(self, db: Session, clock: ClockPort) -> None:
        self.db = db
        self.clock = clock
        self.records = RecordRepo(db, clock)

    def lookups(self, kind: LookupKind | str) -> LookupRepo:
        return LookupRepo(self.db, kind)

    # ---- helpers ----

    def _resolve_fk_ids(self, payload) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for kind in RECORD_FK_KINDS:
            nested: Optional[LookupCreate] = getattr(payload, kind.value)
            if nested is None:
                out[kind.value] = UNKNOWN_LOOKUP_ID
            else:
                out[kind.value] = self.lookups(kind).create_or_dedupe(to_candidate(nested))
        return out

    def _resolve_refs(self, kind: LookupKind, items, attr: str) -> List[JunctionRef]:
        repo = self.lookups(kind)
        return [
            JunctionRef(entity_id=repo.create_or_dedupe(to_candidate(getattr(it, attr))), manual=it.manual)
            for it in items
        ]

    # ---- records ----

    def create_record(self, payload: RecordCreateIn) -> RecordAggregate:
        """Replaying an existing id returns the stored record and creates no lookups."""
        with transactional(self.db):
            if self.records.exists(payload.id):
                logger.info("Record %s already exists; returning it unchanged", payload.id)
                return self.records.load(payload.id)
            fk_ids = self._resolve_fk_ids(payload)
            genres = self._resolve_refs(LookupKind.genre, payload.genres, "genre")
            idols = self._resolve_refs(LookupKind.idol, payload.idols, "idol")
            record_id = self.records.create(to_record_create(payload, fk_ids, genres, idols))
            logger.info("Record %s written", record_id)
            return self.records.load(record_id)

    def update_record(self, record_id: str, payload: RecordUpdateIn) -> Optional[RecordAggregate]:
        with transactional(self.db):
            if not self.records.exists(record_id):
                return None
            fk_ids = self._resolve_fk_ids(payload)
            genres = (
                self._resolve_refs(LookupKind.genre, payload.genres, "genre")
                if payload.genres is not None else None
            )
            idols = (
                self._resolve_refs(LookupKind.idol, payload.idols, "idol")
                if payload.idols is not None else None
            )
            return self.records.update(record_id, to_record_update(payload, fk_ids, genres, idols))

    def add_links(self, record_id: str, links: List[LinkCreate]) -> Optional[int]:
        with transactional(self.db):
            return self.records.add_links(record_id, links)

    def delete_record(self, record_id: str) -> bool:
        with transactional(self.db):
            return self.records.delete(record_id)
