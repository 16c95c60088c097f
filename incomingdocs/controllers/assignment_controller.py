"""AssignmentController - modal flow capturing an assignee for one document."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from incomingdocs.controllers.lifecycle_controller import DocumentLifecycleController
from incomingdocs.exceptions.errors import AssignmentInProgressError, IncomingDocumentsError
from incomingdocs.logic.services.document_service import DocumentService
from incomingdocs.logic.viewstate.ui_state import AssignmentDialogState

logger = logging.getLogger(__name__)


class _AssignmentView(Protocol):
    def render_assignment_dialog(self, state: AssignmentDialogState) -> None: ...
    def show_warning(self, title: str, message: str) -> None: ...
    def show_error(self, title: str, message: str) -> None: ...


class AssignmentController:
    """
    Owns the dialog visibility and the edited assignee value.

    Responsibilities:
    - open(document_id): capture the target, prefill its current assignee
    - confirm(): persist via the lifecycle controller, close on success
    - cancel(): close without persisting

    Only one flow may be active at a time.
    """

    def __init__(
            self,
            *,
            view: _AssignmentView,
            lifecycle: DocumentLifecycleController,
            doc_service: DocumentService,
    ) -> None:
        self._view = view
        self._lifecycle = lifecycle
        self._docs = doc_service
        self._state = AssignmentDialogState()

    @property
    def state(self) -> AssignmentDialogState:
        return self._state

    @property
    def visible(self) -> bool:
        return self._state.visible

    @property
    def assignee(self) -> str:
        return self._state.assignee

    def begin(self, document_id: str) -> None:
        """
        Start a flow for the given document.

        Raises:
            AssignmentInProgressError: another flow is still open
            TransportError / NotFoundError: the document could not be loaded
        """
        if self._state.visible:
            raise AssignmentInProgressError(
                f"Assignment for document {self._state.document_id} is still open."
            )
        doc = self._lifecycle.find_document(document_id) or self._docs.get_document(document_id)
        self._state = AssignmentDialogState(
            visible=True,
            document_id=str(doc.id),
            document_title=doc.title,
            assignee=doc.assignee or "",
        )
        self._view.render_assignment_dialog(self._state)

    def open(self, document_id: str) -> bool:
        """UI entry point: like begin() but reports problems as notifications."""
        try:
            self.begin(document_id)
        except AssignmentInProgressError as ex:
            self._view.show_warning("Assign task", str(ex))
            return False
        except IncomingDocumentsError as ex:
            logger.error("opening assignment for %s failed: %s", document_id, ex)
            self._view.show_error("Assign task", f"Error loading document: {ex}")
            return False
        return True

    def set_assignee(self, value: Optional[str]) -> None:
        if not self._state.visible:
            return
        self._state.assignee = value or ""

    def confirm(self) -> bool:
        """Persist the assignee; the dialog stays open (edit intact) on failure."""
        if not self._state.visible or self._state.document_id is None:
            return False
        updated = self._lifecycle.assign(self._state.document_id, self._state.assignee)
        if updated is None:
            return False
        self._close()
        return True

    def cancel(self) -> None:
        self._close()

    def _close(self) -> None:
        self._state = AssignmentDialogState()
        self._view.render_assignment_dialog(self._state)
