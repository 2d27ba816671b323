# luna/services/api/routers/lookups.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Path

from luna.common.errors import ProtectedLookupError
from luna.common.settings import get_settings
from luna.domain.dataclasses.pagination import PageQuery
from luna.domain.dataclasses.payloads import LookupFilter
from luna.domain.enums.lookup_kind import LookupKind
from luna.services.api.deps import get_catalog
from luna.services.catalog.service import CatalogService
from luna.services.mappers.record import to_candidate, to_patch, to_page_read
from luna.services.schemas.lookup import LookupCreate, LookupUpdate, LookupRead, LookupCreated
from luna.services.schemas.pagination import PageRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/cards", tags=["lookups"])


def page_query(limit: Optional[int], offset: Optional[int]) -> PageQuery:
    return PageQuery(limit=limit, offset=offset, default_limit=cfg.pagination.default_limit)


@router.get("/{kind}", response_model=Union[PageRead[LookupRead], List[LookupRead]])
def list_lookups(
    kind: LookupKind,
    id: Optional[int] = Query(None),
    name: Optional[str] = Query(None, description="Case-sensitive substring"),
    link: Optional[str] = Query(None, description="Case-sensitive substring"),
    limit: Optional[int] = Query(None, le=cfg.pagination.max_limit),
    offset: Optional[int] = Query(None),
    svc: CatalogService = Depends(get_catalog),
):
    repo = svc.lookups(kind)
    flt = LookupFilter(id=id, name=name, link=link)
    if limit is None and offset is None:
        return [LookupRead.model_validate(x) for x in repo.find_list(flt)]
    page = repo.find_list_paginated(flt, page_query(limit, offset))
    return to_page_read(page, LookupRead.model_validate)


@router.post("/{kind}", response_model=LookupCreated, status_code=HTTPStatus.CREATED)
def create_lookup(
    kind: LookupKind,
    payload: LookupCreate,
    svc: CatalogService = Depends(get_catalog),
) -> LookupCreated:
    return LookupCreated(id=svc.lookups(kind).create_or_dedupe(to_candidate(payload)))


@router.get("/{kind}/{lookup_id}", response_model=LookupRead)
def get_lookup(
    kind: LookupKind,
    lookup_id: int = Path(...),
    svc: CatalogService = Depends(get_catalog),
) -> LookupRead:
    found = svc.lookups(kind).find_by_id(lookup_id)
    if found is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"{kind.display_name} not found")
    return LookupRead.model_validate(found)


@router.patch("/{kind}/{lookup_id}", response_model=LookupRead)
def update_lookup(
    kind: LookupKind,
    lookup_id: int,
    payload: LookupUpdate,
    svc: CatalogService = Depends(get_catalog),
) -> LookupRead:
    # may come back with a different id when the edit merges into an existing row
    updated = svc.lookups(kind).update(lookup_id, to_patch(payload))
    if updated is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"{kind.display_name} not found")
    return LookupRead.model_validate(updated)


@router.delete("/{kind}/{lookup_id}", status_code=HTTPStatus.NO_CONTENT)
def delete_lookup(
    kind: LookupKind,
    lookup_id: int,
    svc: CatalogService = Depends(get_catalog),
) -> None:
    try:
        removed = svc.lookups(kind).delete(lookup_id)
    except ProtectedLookupError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(e))
    if not removed:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"{kind.display_name} not found")
    return None
