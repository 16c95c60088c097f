from __future__ import annotations
from dataclasses import dataclass

@dataclass(slots=True)
class InboxItemDTO:
    """Row for the inbox table."""
    id: str
    title: str
    sender: str
    received_date: str
