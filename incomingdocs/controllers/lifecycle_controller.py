"""
===============================================================================
DocumentLifecycleController – document table + per-row actions
-------------------------------------------------------------------------------
This controller only:
  - loads the document list (full re-fetch through the cache),
  - receives row actions (archive, assign, track, view) and print,
  - delegates to services,
  - shows user feedback via the view (show_info / show_error / show_warning),
  - refreshes the list after every mutation.

Errors never escape to the view: transport and validation failures are
logged and turned into notifications, leaving local state unchanged.
===============================================================================
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Protocol, Tuple

from incomingdocs.controllers.viewer_controller import ViewerController
from incomingdocs.exceptions.errors import IncomingDocumentsError, NoSelectionError, ValidationError
from incomingdocs.logic.policy.lifecycle_policy import LifecyclePolicy
from incomingdocs.logic.services.actions.workflow_service import WorkflowService
from incomingdocs.logic.services.document_service import DocumentService
from incomingdocs.logic.viewstate.ui_state import RowActionsState
from incomingdocs.models.document import Document
from incomingdocs.models.dto.document_list_item_dto import DocumentListItemDTO

logger = logging.getLogger(__name__)


class _LifecycleView(Protocol):
    def render_document_list(self, rows: List[DocumentListItemDTO]) -> None: ...
    def show_info(self, title: str, message: str) -> None: ...
    def show_error(self, title: str, message: str) -> None: ...
    def show_warning(self, title: str, message: str) -> None: ...


class DocumentLifecycleController:
    """Delegating controller for the document table."""

    def __init__(
        self,
        *,
        view: _LifecycleView,
        doc_service: DocumentService,
        workflow_service: WorkflowService,
        viewer: ViewerController,
        policy: Optional[LifecyclePolicy] = None,
    ) -> None:
        self._view = view
        self._docs = doc_service
        self._flow = workflow_service
        self._viewer = viewer
        self._policy = policy or LifecyclePolicy()
        self._documents: Tuple[Document, ...] = ()

    # ---------- state ----------
    @property
    def documents(self) -> Tuple[Document, ...]:
        return self._documents

    def find_document(self, doc_id: str) -> Optional[Document]:
        key = str(doc_id)
        for doc in self._documents:
            if str(doc.id) == key:
                return doc
        return self._docs.find_cached(key)

    def row_actions(self, doc_id: str) -> RowActionsState:
        doc = self.find_document(doc_id)
        if doc is None:
            return RowActionsState(archive_enabled=False)
        return RowActionsState(archive_enabled=self._policy.can_archive(doc))

    # ---------- list ----------
    def load_document_list(self) -> bool:
        """Re-fetch and render; returns False if the fetch failed or was stale."""
        try:
            snap = self._docs.list_documents()
        except IncomingDocumentsError as exc:
            logger.error("fetching documents failed: %s", exc)
            self._view.show_error("Documents", f"Error fetching documents: {exc}")
            return False
        if snap.stale:
            return False
        self._documents = snap.documents
        self._view.render_document_list(self._docs.to_rows(snap.documents))
        return True

    def _after_write(self, updated: Document) -> None:
        # local list follows the write whether or not the refresh succeeds
        self._documents = tuple(updated if str(d.id) == str(updated.id) else d for d in self._documents)
        self._viewer.refresh_selected(updated)
        if not self.load_document_list():
            self._view.render_document_list(self._docs.to_rows(self._documents))

    # ---------- actions ----------
    def archive(self, doc_id: str) -> Optional[Document]:
        current = self.find_document(doc_id)
        if current is not None and not self._policy.can_archive(current):
            logger.info("archive suppressed for %s: status %s", doc_id, current.status.value)
            return None
        try:
            updated = self._flow.archive(document_id=doc_id, current=current)
        except IncomingDocumentsError as exc:
            logger.error("archiving %s failed: %s", doc_id, exc)
            self._view.show_error("Archive", f"Error archiving document: {exc}")
            return None
        if updated is None:
            return None
        self._after_write(updated)
        self._view.show_info("Archive", "Document archived.")
        return updated

    def assign(self, doc_id: str, assignee: Optional[str]) -> Optional[Document]:
        try:
            updated = self._flow.assign(document_id=doc_id, assignee=assignee)
        except ValidationError as exc:
            self._view.show_warning("Assign task", str(exc))
            return None
        except IncomingDocumentsError as exc:
            logger.error("assigning %s failed: %s", doc_id, exc)
            self._view.show_error("Assign task", f"Error assigning task: {exc}")
            return None
        self._after_write(updated)
        self._view.show_info("Assign task", f"Task assigned to {updated.assignee}.")
        return updated

    def track(self, doc_id: str) -> Optional[str]:
        try:
            status = self._docs.track(doc_id)
        except IncomingDocumentsError as exc:
            logger.error("tracking %s failed: %s", doc_id, exc)
            self._view.show_error("Track", f"Error tracking document: {exc}")
            return None
        self._view.show_info("Track", f"Document status: {status}")
        return status

    def view(self, doc_id: str) -> Optional[Document]:
        try:
            doc = self._docs.get_document(doc_id)
        except IncomingDocumentsError as exc:
            logger.error("loading %s failed: %s", doc_id, exc)
            self._view.show_error("View", f"Error loading document: {exc}")
            return None
        self._viewer.show(doc)
        return doc

    def print(self) -> Optional[Path]:
        try:
            return self._viewer.print_selected()
        except NoSelectionError as exc:
            self._view.show_warning("Print", str(exc))
        except Exception as exc:  # OS dispatch, reportlab or pypdf failures
            logger.exception("printing failed")
            self._view.show_error("Print", f"Error printing document: {exc}")
        return None
