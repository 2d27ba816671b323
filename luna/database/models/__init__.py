# luna/database/models/__init__.py

from luna.database.core.main import Base
from luna.database.models.lookup import (
    Director,
    Studio,
    Label,
    Series,
    Genre,
    Idol,
)
from luna.database.models.record import (
    Record,
    RecordGenre,
    IdolParticipation,
    Link,
)

__all__ = [
    "Base",
    "Director",
    "Studio",
    "Label",
    "Series",
    "Genre",
    "Idol",
    "Record",
    "RecordGenre",
    "IdolParticipation",
    "Link",
]
