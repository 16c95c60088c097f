"""
===============================================================================
UI State (Incoming Documents) – view-facing flags
-------------------------------------------------------------------------------
Purpose:
    Serializable structures telling the view which controls are enabled and
    what the viewer pane shows. Produced by controllers from policy
    decisions; the view never derives them itself.
===============================================================================
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class RowActionsState:
    """
    Per-row actions of the document table.

    Fields
    ------
    archive_enabled : bool
        False once the document is archived (terminal state).
    """
    archive_enabled: bool = True


@dataclass(slots=True)
class ViewerState:
    """
    What the viewer pane shows for the selected record.

    Fields
    ------
    kind : Optional[str]
        "document", "inbox" or None when nothing is selected.
    title : str
    status : Optional[str]
        None for records without a status (inbox items).
    assignee : Optional[str]
    print_enabled : bool
        True whenever a record is selected.
    """
    kind: Optional[str] = None
    record_id: Optional[str] = None
    title: str = ""
    status: Optional[str] = None
    assignee: Optional[str] = None
    print_enabled: bool = False


@dataclass(slots=True)
class AssignmentDialogState:
    visible: bool = False
    document_id: Optional[str] = None
    document_title: str = ""
    assignee: str = ""
