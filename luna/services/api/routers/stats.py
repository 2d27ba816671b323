# luna/services/api/routers/stats.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from luna.common.settings import get_settings
from luna.domain.enums.lookup_kind import LookupKind
from luna.services.api.deps import get_catalog
from luna.services.catalog.service import CatalogService
from luna.services.schemas.lookup import EntityCountRead

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/cards/stats", tags=["stats"])


@router.get("/{kind}-records-count", response_model=List[EntityCountRead])
def record_counts(
    kind: LookupKind,
    svc: CatalogService = Depends(get_catalog),
) -> List[EntityCountRead]:
    """Records per lookup row, most used first."""
    return [EntityCountRead.model_validate(c) for c in svc.lookups(kind).record_counts()]
