# luna/common/strings/splitters.py
from typing import List


def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, list):
        return [s.strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def blank_to_none(v: str | None) -> str | None:
    """Treat empty or whitespace-only filter values as absent."""
    if v is None or not str(v).strip():
        return None
    return v
