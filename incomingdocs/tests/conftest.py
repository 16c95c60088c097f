"""Shared fixtures: in-memory document store, recording view, wired workflow."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import pytest

from core.config.config_service import PrintConfig
from incomingdocs.exceptions.errors import NotFoundError, TransportError
from incomingdocs.logic.editor.authoring_surface import BufferAuthoringSurface
from incomingdocs.logic.services.actions.printing_service import PrintingService
from incomingdocs.models.document import Document, DocumentDraft, InboxSummary
from incomingdocs.models.document_status import DocumentStatus
from incomingdocs.models.document_type import from_wire
from incomingdocs.models.ids import DocumentId, InboxItemId
from incomingdocs.wiring import build_workflow


class FakeDocumentStore:
    """DocumentStore kept in a dict; `fail` names operations that raise TransportError."""

    def __init__(self) -> None:
        self.documents: Dict[str, Document] = {}
        self.inbox: List[InboxSummary] = []
        self.calls: List[Tuple[str, tuple]] = []
        self.fail: set[str] = set()
        self._next = 1

    def _call(self, name: str, *args) -> None:
        self.calls.append((name, args))
        if name in self.fail:
            raise TransportError(f"{name} unavailable", status_code=503)

    def count(self, name: str) -> int:
        return sum(1 for n, _ in self.calls if n == name)

    def add(self, title: str, *, status: DocumentStatus = DocumentStatus.PENDING,
            content: str = "", assignee: Optional[str] = None) -> Document:
        doc = Document(
            id=DocumentId(str(self._next)),
            title=title,
            doc_type=from_wire("report"),
            status=status,
            document_number=f"R-{self._next}",
            issue_date="2024-01-01",
            issuing_entity="ACME",
            receipt_date="2024-01-02",
            responsible_person="Kim",
            content=content,
            assignee=assignee,
        )
        self._next += 1
        self.documents[str(doc.id)] = doc
        return doc

    def _get(self, doc_id: str) -> Document:
        try:
            return self.documents[str(doc_id)]
        except KeyError:
            raise NotFoundError(f"document {doc_id} not found", status_code=404) from None

    # DocumentStore
    def list_documents(self) -> List[Document]:
        self._call("list_documents")
        return list(self.documents.values())

    def create_document(self, draft: DocumentDraft) -> Document:
        self._call("create_document", draft)
        doc = Document(
            id=DocumentId(str(self._next)),
            title=draft.title.strip(),
            doc_type=from_wire(draft.doc_type),
            document_number=draft.document_number.strip(),
            issue_date=draft.issue_date.strip(),
            issuing_entity=draft.issuing_entity.strip(),
            accompanying_documents=draft.accompanying_documents.strip() or None,
            receipt_date=draft.receipt_date.strip(),
            responsible_person=draft.responsible_person.strip(),
            content=draft.content,
        )
        self._next += 1
        self.documents[str(doc.id)] = doc
        return doc

    def update_status(self, doc_id: str, status: DocumentStatus) -> Document:
        self._call("update_status", doc_id, status)
        doc = replace(self._get(doc_id), status=status)
        self.documents[str(doc_id)] = doc
        return doc

    def assign(self, doc_id: str, assignee: str) -> Document:
        self._call("assign", doc_id, assignee)
        doc = replace(self._get(doc_id), assignee=assignee)
        self.documents[str(doc_id)] = doc
        return doc

    def get_document(self, doc_id: str) -> Document:
        self._call("get_document", doc_id)
        return self._get(doc_id)

    def track(self, doc_id: str) -> str:
        self._call("track", doc_id)
        return self._get(doc_id).status.value

    def list_inbox(self) -> List[InboxSummary]:
        self._call("list_inbox")
        return list(self.inbox)


class RecordingView:
    """Collects everything the controllers render or announce."""

    def __init__(self) -> None:
        self.document_rows: list = []
        self.inbox_rows: list = []
        self.forms: list = []
        self.viewer_states: list = []
        self.dialog_states: list = []
        self.infos: List[Tuple[str, str]] = []
        self.warnings: List[Tuple[str, str]] = []
        self.errors: List[Tuple[str, str]] = []

    def render_document_list(self, rows) -> None:
        self.document_rows.append(list(rows))

    def render_inbox(self, rows) -> None:
        self.inbox_rows.append(list(rows))

    def render_form(self, values, invalid=()) -> None:
        self.forms.append((dict(values), tuple(invalid)))

    def render_viewer(self, state) -> None:
        self.viewer_states.append(state)

    def render_assignment_dialog(self, state) -> None:
        self.dialog_states.append(state)

    def show_info(self, title: str, message: str) -> None:
        self.infos.append((title, message))

    def show_warning(self, title: str, message: str) -> None:
        self.warnings.append((title, message))

    def show_error(self, title: str, message: str) -> None:
        self.errors.append((title, message))

    @property
    def last_rows(self) -> list:
        return self.document_rows[-1] if self.document_rows else []


class RecordingDispatcher:
    def __init__(self) -> None:
        self.paths: list = []

    def __call__(self, path) -> None:
        self.paths.append(path)


def _make_draft(**overrides: str) -> DocumentDraft:
    values = dict(
        title="Invoice A",
        doc_type="invoice",
        document_number="INV-001",
        issue_date="2024-03-01",
        issuing_entity="Supplier GmbH",
        receipt_date="2024-03-04",
        responsible_person="Alex",
    )
    values.update(overrides)
    return DocumentDraft(**values)


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def surface() -> BufferAuthoringSurface:
    return BufferAuthoringSurface()


@pytest.fixture
def printer() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def workflow(store, view, surface, printer, tmp_path):
    printing = PrintingService(PrintConfig(output_dir=str(tmp_path)), dispatcher=printer)
    wf = build_workflow(view=view, surface=surface, store=store, printing=printing)
    wf.form.bind_surface(object())
    return wf


@pytest.fixture
def make_draft():
    return _make_draft


@pytest.fixture
def inbox_item() -> InboxSummary:
    return InboxSummary(id=InboxItemId("in-1"), title="Customs notice", sender="Port authority",
                        received_date="2024-02-10")
