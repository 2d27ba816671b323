from luna.services.schemas.lookup import (
    LookupCreate,
    LookupUpdate,
    LookupRead,
    LookupCreated,
    EntityCountRead,
)
from luna.services.schemas.record import (
    LinkCreate,
    LinkRead,
    LinksAdded,
    RecordCreate,
    RecordUpdate,
    RecordRead,
)
from luna.services.schemas.pagination import PageRead

__all__ = [
    "LookupCreate",
    "LookupUpdate",
    "LookupRead",
    "LookupCreated",
    "EntityCountRead",
    "LinkCreate",
    "LinkRead",
    "LinksAdded",
    "RecordCreate",
    "RecordUpdate",
    "RecordRead",
    "PageRead",
]
