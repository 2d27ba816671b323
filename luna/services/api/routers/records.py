# luna/services/api/routers/records.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from luna.common.settings import get_settings
from luna.domain.dataclasses.payloads import RecordFilter
from luna.domain.enums.lookup_kind import LookupKind
from luna.services.api.deps import get_catalog
from luna.services.api.routers.lookups import page_query
from luna.services.catalog.service import CatalogService
from luna.services.mappers.record import to_link_create, to_page_read, to_record_read
from luna.services.schemas.pagination import PageRead
from luna.services.schemas.record import (
    LinkCreate,
    LinksAdded,
    RecordCreate,
    RecordRead,
    RecordUpdate,
)

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/cards/records", tags=["records"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Record not found")


@router.get("", response_model=Union[PageRead[RecordRead], List[RecordRead]])
def list_records(
    id: Optional[str] = Query(None),
    title: Optional[str] = Query(None, description="Case-sensitive substring"),
    director_id: Optional[int] = Query(None),
    studio_id: Optional[int] = Query(None),
    label_id: Optional[int] = Query(None),
    series_id: Optional[int] = Query(None),
    limit: Optional[int] = Query(None, le=cfg.pagination.max_limit),
    offset: Optional[int] = Query(None),
    svc: CatalogService = Depends(get_catalog),
):
    flt = RecordFilter(
        id=id, title=title,
        director_id=director_id, studio_id=studio_id, label_id=label_id, series_id=series_id,
    )
    if limit is None and offset is None:
        return [to_record_read(r) for r in svc.records.find_list(flt)]
    return to_page_read(svc.records.find_list_paginated(flt, page_query(limit, offset)), to_record_read)


@router.get("/ids", response_model=List[str])
def list_record_ids(svc: CatalogService = Depends(get_catalog)) -> List[str]:
    return svc.records.find_all_ids()


@router.get("/by-{kind}/{lookup_id}", response_model=PageRead[RecordRead])
def records_by_lookup(
    kind: LookupKind,
    lookup_id: int,
    limit: Optional[int] = Query(None, le=cfg.pagination.max_limit),
    offset: Optional[int] = Query(None),
    svc: CatalogService = Depends(get_catalog),
) -> PageRead[RecordRead]:
    page = svc.records.find_by_lookup(kind, lookup_id, page_query(limit, offset))
    return to_page_read(page, to_record_read)


@router.post("", response_model=RecordRead, status_code=HTTPStatus.CREATED)
def create_record(
    payload: RecordCreate,
    svc: CatalogService = Depends(get_catalog),
) -> RecordRead:
    return to_record_read(svc.create_record(payload))


@router.get("/{record_id}", response_model=RecordRead)
def get_record(
    record_id: str,
    svc: CatalogService = Depends(get_catalog),
) -> RecordRead:
    agg = svc.records.load(record_id)
    if agg is None:
        raise _not_found()
    return to_record_read(agg)


@router.put("/{record_id}", response_model=RecordRead)
def update_record(
    record_id: str,
    payload: RecordUpdate,
    svc: CatalogService = Depends(get_catalog),
) -> RecordRead:
    agg = svc.update_record(record_id, payload)
    if agg is None:
        raise _not_found()
    return to_record_read(agg)


@router.patch("/{record_id}/links", response_model=LinksAdded)
def add_record_links(
    record_id: str,
    payload: List[LinkCreate],
    svc: CatalogService = Depends(get_catalog),
) -> LinksAdded:
    added = svc.add_links(record_id, [to_link_create(x) for x in payload])
    if added is None:
        raise _not_found()
    return LinksAdded(added=added)


@router.delete("/{record_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_record(
    record_id: str,
    svc: CatalogService = Depends(get_catalog),
) -> None:
    if not svc.delete_record(record_id):
        raise _not_found()
    return None
