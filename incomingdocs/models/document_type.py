"""
===============================================================================
DocumentType – canonical incoming document types
-------------------------------------------------------------------------------
Wire values are lower-case: invoice, report, contract.
===============================================================================
"""
from __future__ import annotations
from enum import Enum


class DocumentType(str, Enum):
    INVOICE = "invoice"
    REPORT = "report"
    CONTRACT = "contract"


def from_wire(raw: "str | DocumentType | None") -> "DocumentType | None":
    """
    Map a wire/form value to a DocumentType.

    Rules:
      - members are returned unchanged
      - matching is case-insensitive and ignores surrounding blanks
      - empty or unknown values -> None (validation decides what that means)
    """
    if isinstance(raw, DocumentType):
        return raw
    if not raw:
        return None
    key = str(raw).strip().lower()
    for member in DocumentType:
        if member.value == key:
            return member
    return None
