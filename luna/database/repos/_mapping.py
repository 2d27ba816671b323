# luna/database/repos/_mapping.py
from __future__ import annotations

from decimal import Decimal

from luna.database.core.lookup_columns import LookupColumns
from luna.database.models.record import Link as DBLink
from luna.domain.entities.lookup import Lookup
from luna.domain.entities.record import Link


def to_domain_lookup(row: LookupColumns) -> Lookup:
    return Lookup(
        id=row.id,
        name=row.name,
        link=row.link if row.link is not None else "",
        manual=bool(row.manual),
    )


def to_domain_link(row: DBLink) -> Link:
    return Link(
        id=row.id,
        record_id=row.record_id,
        name=row.name,
        size=Decimal(row.size) if row.size is not None else Decimal("-1"),
        date=row.date,
        link=row.link or "",
        star=bool(row.star),
    )
