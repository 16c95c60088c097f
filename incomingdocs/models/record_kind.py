from __future__ import annotations
from enum import Enum


class RecordKind(str, Enum):
    """Tag of a record that can be routed into the viewer."""
    DOCUMENT = "document"
    INBOX = "inbox"
