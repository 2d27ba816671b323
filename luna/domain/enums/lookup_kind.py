from __future__ import annotations
from enum import StrEnum

from luna.common.errors import UnknownLookupKind


class LookupKind(StrEnum):
    director = "director"
    studio = "studio"
    label = "label"
    series = "series"
    genre = "genre"
    idol = "idol"

    @property
    def via_junction(self) -> bool:
        """Genre and Idol attach to records through a junction table, the rest through a FK."""
        return self in (LookupKind.genre, LookupKind.idol)

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: str) -> "LookupKind":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownLookupKind(f"Unknown lookup kind: {value!r}") from None


# Kinds a Record points at directly via <kind>_id columns.
RECORD_FK_KINDS = (LookupKind.director, LookupKind.studio, LookupKind.label, LookupKind.series)
