# luna/domain/entities/links/record_genre.py
from __future__ import annotations

from dataclasses import dataclass

from luna.domain.entities.lookup import Lookup


@dataclass(frozen=True)
class RecordGenre:
    """
    Genre attached to a Record. `manual` comes from the junction row,
    not from the Genre itself.
    """
    genre: Lookup
    manual: bool = False
