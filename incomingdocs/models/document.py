from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import ClassVar, Dict, Optional

from .ids import DocumentId, InboxItemId
from .document_type import DocumentType
from .document_status import DocumentStatus
from .record_kind import RecordKind


@dataclass(slots=True)
class Document:
    """
    Incoming document as persisted by the document store.

    Notes:
    - 'id'       opaque identifier assigned by the store on creation
    - 'status'   only ever moves pending -> archived
    - 'content'  serialized rich text (HTML) from the authoring surface
    - 'assignee' unset until a task is assigned; may be overwritten
    - dates are ISO strings (YYYY-MM-DD) exactly as the store returns them
    """

    kind: ClassVar[RecordKind] = RecordKind.DOCUMENT

    # Identity / classification
    id: DocumentId
    title: str
    doc_type: DocumentType

    # Lifecycle
    status: DocumentStatus = DocumentStatus.PENDING

    # Registration metadata
    document_number: str = ""
    issue_date: str = ""
    issuing_entity: str = ""
    accompanying_documents: Optional[str] = None
    receipt_date: str = ""
    responsible_person: str = ""

    # Body / task
    content: str = ""
    assignee: Optional[str] = None


@dataclass(slots=True)
class InboxSummary:
    """Externally received item; read-only, no content and no status."""

    kind: ClassVar[RecordKind] = RecordKind.INBOX

    id: InboxItemId
    title: str
    sender: str = ""
    received_date: str = ""


@dataclass
class DocumentDraft:
    """
    Transient, client-held state of a document being authored.

    All values are kept as the user typed them; validation and type parsing
    happen on submit. 'doc_type' holds the raw form value (e.g. "invoice").
    """

    title: str = ""
    doc_type: str = ""
    document_number: str = ""
    issue_date: str = ""
    issuing_entity: str = ""
    accompanying_documents: str = ""
    receipt_date: str = ""
    responsible_person: str = ""
    content: str = ""

    REQUIRED: ClassVar[tuple[str, ...]] = (
        "title",
        "doc_type",
        "document_number",
        "issue_date",
        "issuing_entity",
        "receipt_date",
        "responsible_person",
    )

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def set(self, name: str, value: object) -> None:
        if name not in self.field_names():
            raise AttributeError(f"Unknown draft field: {name}")
        setattr(self, name, "" if value is None else str(value))

    def missing_required(self) -> list[str]:
        return [name for name in self.REQUIRED if not (getattr(self, name) or "").strip()]

    def clear(self) -> None:
        for name in self.field_names():
            setattr(self, name, "")

    def copy(self) -> "DocumentDraft":
        return replace(self)

    def as_dict(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in self.field_names()}
