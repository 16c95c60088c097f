"""
===============================================================================
DocumentFormController – new incoming document (metadata + rich-text body)
-------------------------------------------------------------------------------
Zweck
    - Holds the draft (PendingFormState) while the user fills the form.
    - Subscribes to the authoring surface: every edit is copied into
      draft.content synchronously, so the draft is current at submit time.
    - submit(): validate + create through DocumentCreationService, then
      re-fetch the list, clear draft and surface, notify.

Failure
    Validation and transport errors keep the draft untouched, show an error
    notification and skip the refresh.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Protocol

from incomingdocs.exceptions.errors import IncomingDocumentsError, ValidationError
from incomingdocs.logic.editor.authoring_surface import AuthoringSurface
from incomingdocs.logic.policy.lifecycle_policy import field_label
from incomingdocs.logic.services.document_creation_service import DocumentCreationService
from incomingdocs.models.document import Document, DocumentDraft

logger = logging.getLogger(__name__)


class _FormView(Protocol):
    def render_form(self, values: Dict[str, str], invalid: tuple[str, ...] = ()) -> None: ...
    def show_info(self, title: str, message: str) -> None: ...
    def show_error(self, title: str, message: str) -> None: ...


class DocumentFormController:
    """
    Controller for the "new incoming document" form.

    Parameter
    ---------
    view : _FormView
        Renders field values and notifications.
    creation_service : DocumentCreationService
        Validation + persistence.
    surface : AuthoringSurface
        Rich-text editor bound to draft.content.
    on_created : Optional[Callable[[Document], Any]]
        Called after a successful create; used to re-fetch the document list.
    """

    def __init__(self, *, view: _FormView, creation_service: DocumentCreationService,
                 surface: AuthoringSurface,
                 on_created: Optional[Callable[[Document], Any]] = None) -> None:
        self._view = view
        self._svc = creation_service
        self._surface = surface
        self._on_created = on_created
        self._draft = DocumentDraft()
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ---------------- draft ---------------- #
    @property
    def draft(self) -> DocumentDraft:
        return self._draft

    def bind_surface(self, container: Any = None) -> None:
        """Attach the editor (once per mount) and mirror its changes into the draft."""
        self._surface.bind(container)
        if self._unsubscribe is None:
            self._unsubscribe = self._surface.on_change(self._on_content_changed)
        self._draft.content = self._surface.get_content()

    def unbind_surface(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_content_changed(self, markup: str) -> None:
        # a read-only surface is showing a viewed record, not the draft
        if self._surface.read_only:
            return
        self._draft.content = markup

    def set_field(self, name: str, value: Any) -> None:
        if name == "content":
            markup = "" if value is None else str(value)
            if self._surface.read_only:
                self._draft.content = markup
            else:
                self._surface.set_content(markup)
            return
        self._draft.set(name, value)

    def start_new(self) -> None:
        """Leave the viewer: make the surface editable and show the draft body again."""
        self._surface.set_read_only(False)
        self._surface.set_content(self._draft.content)
        self._view.render_form(self._draft.as_dict())

    # ---------------- submit ---------------- #
    def submit(self) -> Optional[Document]:
        if not self._surface.read_only:
            self._draft.content = self._surface.get_content()
        try:
            doc = self._svc.create(self._draft.copy())
        except ValidationError as exc:
            logger.info("draft rejected: %s", exc)
            self._view.render_form(self._draft.as_dict(), invalid=exc.fields)
            names = ", ".join(field_label(n) for n in exc.fields)
            self._view.show_error("Add document", f"Please check: {names}" if names else str(exc))
            return None
        except IncomingDocumentsError as exc:
            logger.error("adding document failed: %s", exc)
            self._view.show_error("Add document", f"Error adding document: {exc}")
            return None

        if self._on_created is not None:
            self._on_created(doc)
        self._draft.clear()
        self._surface.set_read_only(False)
        self._surface.set_content("")
        self._view.render_form(self._draft.as_dict())
        self._view.show_info("Add document", f"Document added: {doc.title}")
        return doc
