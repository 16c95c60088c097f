"""
===============================================================================
ViewerController – shared "view" pipeline for documents and inbox items
-------------------------------------------------------------------------------
- Loads a record's body into the authoring surface (read-only display).
  Inbox items have no content: the surface is cleared instead.
- Remembers the record as the current selection for printing.
- print_selected() raises NoSelectionError when nothing is selected; the
  calling controller turns that into a warning notification.
===============================================================================
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from incomingdocs.exceptions.errors import NoSelectionError
from incomingdocs.logic.editor.authoring_surface import AuthoringSurface
from incomingdocs.logic.services.actions.printing_service import PrintingService
from incomingdocs.logic.viewstate.ui_state import ViewerState
from incomingdocs.models.viewable_record import ViewableRecord, capabilities_of, content_of, status_of

logger = logging.getLogger(__name__)


class _ViewerView(Protocol):
    def render_viewer(self, state: ViewerState) -> None: ...


class ViewerController:
    def __init__(self, *, view: _ViewerView, surface: AuthoringSurface, printing_service: PrintingService) -> None:
        self._view = view
        self._surface = surface
        self._printing = printing_service
        self._selected: Optional[ViewableRecord] = None

    @property
    def selected(self) -> Optional[ViewableRecord]:
        return self._selected

    def state(self) -> ViewerState:
        rec = self._selected
        if rec is None:
            return ViewerState()
        caps = capabilities_of(rec)
        return ViewerState(
            kind=caps.kind.value,
            record_id=str(rec.id),
            title=rec.title or "",
            status=status_of(rec),
            assignee=getattr(rec, "assignee", None) if caps.has_assignee else None,
            print_enabled=True,
        )

    def show(self, record: ViewableRecord) -> None:
        """Load the record into the surface and select it."""
        self._surface.set_read_only(True)
        self._surface.set_content(content_of(record))
        self._selected = record
        logger.debug("viewing %s %s", record.kind.value, record.id)
        self._view.render_viewer(self.state())

    def refresh_selected(self, record: ViewableRecord) -> None:
        """Replace the selected record (same id) after a write, without reloading the surface."""
        if self._selected is not None and self._selected.kind == record.kind and str(self._selected.id) == str(record.id):
            self._selected = record
            self._view.render_viewer(self.state())

    def clear(self) -> None:
        """Drop the selection; the surface is handed back by the form (start_new)."""
        self._selected = None
        self._view.render_viewer(self.state())

    def print_selected(self) -> Path:
        if self._selected is None:
            raise NoSelectionError("No document selected for printing.")
        return self._printing.print_record(self._selected)
