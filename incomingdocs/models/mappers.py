"""
Wire <-> model mapping for the document store.

The store speaks camelCase JSON (``documentNumber``, ``issueDate`` ...) and
names the type field ``type``; the models use snake_case.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from .document import Document, DocumentDraft, InboxSummary
from .document_status import DocumentStatus
from .document_type import from_wire
from .ids import DocumentId, InboxItemId
from .dto.document_list_item_dto import DocumentListItemDTO
from .dto.inbox_item_dto import InboxItemDTO

# model attribute -> wire key
_DOCUMENT_WIRE_KEYS: Dict[str, str] = {
    "title": "title",
    "doc_type": "type",
    "document_number": "documentNumber",
    "issue_date": "issueDate",
    "issuing_entity": "issuingEntity",
    "accompanying_documents": "accompanyingDocuments",
    "receipt_date": "receiptDate",
    "responsible_person": "responsiblePerson",
    "content": "content",
}


def _str(v: Any) -> str:
    return "" if v is None else str(v)


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v)
    return s if s.strip() else None


def document_from_wire(data: Mapping[str, Any]) -> Document:
    """
    Build a Document from a store payload.

    Raises
    ------
    KeyError
        If 'id' is missing.
    ValueError
        If 'type' or 'status' carry values outside the known enumerations.
    """
    doc_type = from_wire(data.get("type"))
    if doc_type is None:
        raise ValueError(f"Unknown document type: {data.get('type')!r}")
    return Document(
        id=DocumentId(_str(data["id"])),
        title=_str(data.get("title")),
        doc_type=doc_type,
        status=DocumentStatus.parse(data.get("status")),
        document_number=_str(data.get("documentNumber")),
        issue_date=_str(data.get("issueDate")),
        issuing_entity=_str(data.get("issuingEntity")),
        accompanying_documents=_opt_str(data.get("accompanyingDocuments")),
        receipt_date=_str(data.get("receiptDate")),
        responsible_person=_str(data.get("responsiblePerson")),
        content=_str(data.get("content")),
        assignee=_opt_str(data.get("assignee")),
    )


def draft_to_wire(draft: DocumentDraft) -> Dict[str, Any]:
    """
    Payload for ``POST /documents``.

    'status' is always sent as pending; an empty optional field is sent as
    null rather than "".
    """
    payload: Dict[str, Any] = {}
    for attr, key in _DOCUMENT_WIRE_KEYS.items():
        value = getattr(draft, attr)
        if attr == "doc_type":
            parsed = from_wire(value)
            value = parsed.value if parsed is not None else value
        elif attr == "accompanying_documents":
            value = _opt_str(value)
        else:
            value = value.strip() if attr != "content" else value
        payload[key] = value
    payload["status"] = DocumentStatus.PENDING.value
    return payload


def inbox_item_from_wire(data: Mapping[str, Any]) -> InboxSummary:
    return InboxSummary(
        id=InboxItemId(_str(data["id"])),
        title=_str(data.get("title")),
        sender=_str(data.get("sender")),
        received_date=_str(data.get("receivedDate")),
    )


def to_list_item_dto(doc: Document, *, archive_enabled: bool) -> DocumentListItemDTO:
    return DocumentListItemDTO(
        id=str(doc.id),
        title=doc.title,
        doc_type=doc.doc_type.value,
        status=doc.status.value,
        assignee=doc.assignee or "-",
        receipt_date=doc.receipt_date or "-",
        archive_enabled=archive_enabled,
    )


def to_inbox_item_dto(item: InboxSummary) -> InboxItemDTO:
    return InboxItemDTO(
        id=str(item.id),
        title=item.title,
        sender=item.sender or "-",
        received_date=item.received_date or "-",
    )
