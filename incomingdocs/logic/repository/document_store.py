"""
===============================================================================
DocumentStore Protocol – contract of the external persistence service
-------------------------------------------------------------------------------
Purpose:
    Define the operations the incoming-document workflow needs from the
    store. The production implementation talks HTTP (HttpDocumentStore);
    tests use an in-memory fake.

Design:
    - Protocol only; no implementation details.
    - Every method raises TransportError (or NotFoundError) on failure.
    - No delete operation: documents are never removed by this feature.
===============================================================================
"""
from __future__ import annotations
from typing import Protocol, List

from incomingdocs.models.document import Document, DocumentDraft, InboxSummary
from incomingdocs.models.document_status import DocumentStatus


class DocumentStore(Protocol):
    """
    Store contract.

    Methods
    -------
    list_documents() -> list[Document]
        GET /documents
    create_document(draft) -> Document
        POST /documents; the store assigns the id, status starts pending.
    update_status(doc_id, status) -> Document
        PUT /documents/{id}
    assign(doc_id, assignee) -> Document
        PUT /documents/{id}/assign
    get_document(doc_id) -> Document
        GET /documents/{id}
    track(doc_id) -> str
        GET /documents/{id}/track, returns the status string for display.
    list_inbox() -> list[InboxSummary]
        GET /inbox
    """

    def list_documents(self) -> List[Document]:
        ...

    def create_document(self, draft: DocumentDraft) -> Document:
        ...

    def update_status(self, doc_id: str, status: DocumentStatus) -> Document:
        ...

    def assign(self, doc_id: str, assignee: str) -> Document:
        ...

    def get_document(self, doc_id: str) -> Document:
        ...

    def track(self, doc_id: str) -> str:
        ...

    def list_inbox(self) -> List[InboxSummary]:
        ...
