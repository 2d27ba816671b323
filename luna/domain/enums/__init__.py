from luna.domain.enums.lookup_kind import LookupKind, RECORD_FK_KINDS

__all__ = [
    "LookupKind",
    "RECORD_FK_KINDS",
]
