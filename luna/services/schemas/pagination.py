# luna/services/schemas/pagination.py
from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class PageRead(BaseModel, Generic[T]):
    model_config = ConfigDict(from_attributes=True)

    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[T] = []
