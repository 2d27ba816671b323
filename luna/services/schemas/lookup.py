# luna/services/schemas/lookup.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LookupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    link: Optional[str] = None
    manual: Optional[bool] = None


class LookupUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    link: Optional[str] = None
    manual: Optional[bool] = None


class LookupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    link: str = ""
    manual: bool = False


class LookupCreated(BaseModel):
    id: int


class EntityCountRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    count: int
