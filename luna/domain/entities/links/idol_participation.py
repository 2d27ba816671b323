# luna/domain/entities/links/idol_participation.py
from __future__ import annotations

from dataclasses import dataclass

from luna.domain.entities.lookup import Lookup


@dataclass(frozen=True)
class IdolParticipation:
    """Idol appearing in a Record; `manual` is the junction row's flag."""
    idol: Lookup
    manual: bool = False
