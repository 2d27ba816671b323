# luna/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EntityCount:
    """How many Records reference one lookup row."""
    id: int
    name: str
    count: int
