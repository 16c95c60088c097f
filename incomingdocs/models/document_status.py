from __future__ import annotations
from enum import Enum


class DocumentStatus(str, Enum):
    """Lifecycle status of an incoming document."""
    PENDING = "pending"
    ARCHIVED = "archived"

    @classmethod
    def parse(cls, raw: "str | DocumentStatus | None") -> "DocumentStatus":
        """Accept enum members or case-insensitive wire values; None -> PENDING."""
        if isinstance(raw, DocumentStatus):
            return raw
        if raw is None or not str(raw).strip():
            return cls.PENDING
        return cls(str(raw).strip().lower())
