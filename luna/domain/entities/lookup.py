# luna/domain/entities/lookup.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

NaturalKey = Tuple[str, str, bool]


@dataclass(frozen=True)
class Lookup:
    """
    One row of a reference table (Director, Studio, Label, Series, Genre, Idol).

    Two rows describe the same conceptual entity when their natural key
    (name, link, manual) is equal; the surrogate id plays no part in that.
    """
    id: Optional[int]
    name: str
    link: str = ""
    manual: bool = False

    @property
    def natural_key(self) -> NaturalKey:
        return (self.name, self.link, self.manual)
