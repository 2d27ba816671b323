# luna/services/api/deps.py
from __future__ import annotations
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from luna.database.core.main import SessionLocal
from luna.domain.ports.clock import ClockPort
from luna.services.catalog.service import CatalogService
from luna.services.clock.system_clock import SystemClock


def get_clock() -> ClockPort:
    """Stamps create_time/update_time. Tests override this with a fixed day."""
    return SystemClock()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Everything done on this session during the
    request commits together on normal exit and rolls back if an exception
    bubbles out.
    """
    with db.begin():
        yield db


def get_catalog(
    db: Session = Depends(transactional_session),
    clock: ClockPort = Depends(get_clock),
) -> CatalogService:
    return CatalogService(db, clock)
