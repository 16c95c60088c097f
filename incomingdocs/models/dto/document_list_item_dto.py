from __future__ import annotations
from dataclasses import dataclass

@dataclass(slots=True)
class DocumentListItemDTO:
    """
    Row for the document table.
    Keep strings preformatted for the UI; action flags come from the
    lifecycle policy so the view never decides on its own.
    """
    id: str
    title: str
    doc_type: str
    status: str
    assignee: str          # "-" when unassigned
    receipt_date: str
    archive_enabled: bool
