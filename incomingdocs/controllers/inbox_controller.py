"""InboxController – externally received items, read-only.

One fetch per mount; `view()` routes an item into the shared viewer, which
copes with the missing content/status.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, Union

from incomingdocs.controllers.viewer_controller import ViewerController
from incomingdocs.exceptions.errors import IncomingDocumentsError
from incomingdocs.logic.services.document_service import DocumentService
from incomingdocs.models.document import InboxSummary
from incomingdocs.models.dto.inbox_item_dto import InboxItemDTO

logger = logging.getLogger(__name__)


class _InboxView(Protocol):
    def render_inbox(self, rows: List[InboxItemDTO]) -> None: ...
    def show_error(self, title: str, message: str) -> None: ...
    def show_warning(self, title: str, message: str) -> None: ...


class InboxController:
    def __init__(self, *, view: _InboxView, doc_service: DocumentService, viewer: ViewerController) -> None:
        self._view = view
        self._docs = doc_service
        self._viewer = viewer
        self._items: List[InboxSummary] = []
        self._mounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> Sequence[InboxSummary]:
        """Fetch once per mount; later calls return the items of this mount."""
        if self._mounted:
            return self.list()
        self._mounted = True
        try:
            self._items = self._docs.list_inbox()
        except IncomingDocumentsError as exc:
            logger.error("fetching inbox failed: %s", exc)
            self._items = []
            self._view.show_error("Inbox", f"Error fetching inbox: {exc}")
        self._view.render_inbox(self._docs.to_inbox_rows(self._items))
        return self.list()

    def unmount(self) -> None:
        self._mounted = False
        self._items = []

    def list(self) -> Sequence[InboxSummary]:
        return tuple(self._items)

    def view(self, item: Union[InboxSummary, str]) -> Optional[InboxSummary]:
        if not isinstance(item, InboxSummary):
            found = next((i for i in self._items if str(i.id) == str(item)), None)
            if found is None:
                self._view.show_warning("Inbox", f"Inbox item {item} not found.")
                return None
            item = found
        self._viewer.show(item)
        return item
