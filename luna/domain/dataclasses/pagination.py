# luna/domain/dataclasses/pagination.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")

DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class PageQuery:
    """
    `limit`/`offset` as received from the caller. Missing values fall back to
    the defaults; a non-positive limit is treated as missing so page math never
    divides by zero, and a negative offset is clamped to 0.
    """
    limit: Optional[int] = None
    offset: Optional[int] = None
    default_limit: int = DEFAULT_LIMIT

    @property
    def effective_limit(self) -> int:
        if self.limit is None or self.limit <= 0:
            return self.default_limit
        return int(self.limit)

    @property
    def effective_offset(self) -> int:
        if self.offset is None or self.offset < 0:
            return 0
        return int(self.offset)


@dataclass
class Page(Generic[T]):
    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[T] = field(default_factory=list)

    def map(self, fn) -> "Page":
        return Page(count=self.count, next=self.next, previous=self.previous, results=[fn(r) for r in self.results])
