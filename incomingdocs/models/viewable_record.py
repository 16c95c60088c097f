"""
===============================================================================
ViewableRecord – tagged variant over Document | InboxSummary
-------------------------------------------------------------------------------
The viewer is polymorphic over a capability set instead of probing for
optional attributes:

    Document      -> title, content, status, assignee
    InboxSummary  -> title only

Callers ask `capabilities_of(record)` and render what is there.
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .document import Document, InboxSummary
from .record_kind import RecordKind

ViewableRecord = Union[Document, InboxSummary]


@dataclass(frozen=True, slots=True)
class RecordCapabilities:
    kind: RecordKind
    has_title: bool = True
    has_content: bool = False
    has_status: bool = False
    has_assignee: bool = False


_DOCUMENT_CAPS = RecordCapabilities(RecordKind.DOCUMENT, has_content=True, has_status=True, has_assignee=True)
_INBOX_CAPS = RecordCapabilities(RecordKind.INBOX)


def capabilities_of(record: ViewableRecord) -> RecordCapabilities:
    if record.kind is RecordKind.DOCUMENT:
        return _DOCUMENT_CAPS
    if record.kind is RecordKind.INBOX:
        return _INBOX_CAPS
    raise TypeError(f"Not a viewable record: {type(record).__name__}")


def content_of(record: ViewableRecord) -> str:
    """Body markup, or "" for records without content."""
    return record.content if capabilities_of(record).has_content else ""  # type: ignore[union-attr]


def status_of(record: ViewableRecord) -> Optional[str]:
    """Status wire value, or None for records without a status."""
    if not capabilities_of(record).has_status:
        return None
    return record.status.value  # type: ignore[union-attr]
