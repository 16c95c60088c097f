"""
===============================================================================
LifecyclePolicy – status transitions and draft rules
-------------------------------------------------------------------------------
States
    pending (initial) -> archived (terminal)

Rules
    - archive: only from pending; archived -> archived is a no-op that the
      interaction layer suppresses (control disabled).
    - assign: orthogonal to status, allowed in both states.
    - drafts: title, type, number, issue date, issuing entity, receipt date
      and responsible person are mandatory; dates are ISO (YYYY-MM-DD); the
      receipt date may not precede the issue date.

Pure rules, no I/O.
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from incomingdocs.exceptions.errors import ValidationError
from incomingdocs.models.document import Document, DocumentDraft
from incomingdocs.models.document_status import DocumentStatus
from incomingdocs.models.document_type import DocumentType, from_wire

_FIELD_LABELS: Dict[str, str] = {
    "title": "Title",
    "doc_type": "Type",
    "document_number": "Document number",
    "issue_date": "Issue date",
    "issuing_entity": "Issuing entity",
    "accompanying_documents": "Accompanying documents",
    "receipt_date": "Receipt date",
    "responsible_person": "Responsible person",
    "content": "Content",
}

_TRANSITIONS: Dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PENDING: frozenset({DocumentStatus.ARCHIVED}),
    DocumentStatus.ARCHIVED: frozenset(),
}


def field_label(name: str) -> str:
    return _FIELD_LABELS.get(name, name)


def _parse_iso(value: str) -> Optional[date]:
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class DraftCheck:
    missing: tuple[str, ...] = ()
    invalid: tuple[str, ...] = ()
    doc_type: Optional[DocumentType] = None

    @property
    def ok(self) -> bool:
        return not self.missing and not self.invalid


class LifecyclePolicy:
    """Transition and validation rules for incoming documents."""

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #
    def can_transition(self, current: DocumentStatus, target: DocumentStatus) -> bool:
        return target in _TRANSITIONS.get(current, frozenset())

    def can_archive(self, doc: Document) -> bool:
        return self.can_transition(doc.status, DocumentStatus.ARCHIVED)

    def archive_target(self, doc: Document) -> Optional[DocumentStatus]:
        """
        Status to persist for an archive request.

        Returns None when the document has no archive transition (already
        archived), which callers treat as a no-op.
        """
        if not self.can_archive(doc):
            return None
        return DocumentStatus.ARCHIVED

    # ------------------------------------------------------------------ #
    # Drafts / input
    # ------------------------------------------------------------------ #
    def check_draft(self, draft: DocumentDraft) -> DraftCheck:
        missing = draft.missing_required()
        invalid: List[str] = []

        doc_type = from_wire(draft.doc_type)
        if "doc_type" not in missing and doc_type is None:
            invalid.append("doc_type")

        parsed: Dict[str, Optional[date]] = {}
        for name in ("issue_date", "receipt_date"):
            if name in missing:
                continue
            parsed[name] = _parse_iso(getattr(draft, name))
            if parsed[name] is None:
                invalid.append(name)

        issued, received = parsed.get("issue_date"), parsed.get("receipt_date")
        if issued and received and received < issued:
            invalid.append("receipt_date")

        return DraftCheck(missing=tuple(missing), invalid=tuple(invalid), doc_type=doc_type)

    def validate_draft(self, draft: DocumentDraft) -> DocumentType:
        """Raise ValidationError naming every offending field; return the parsed type."""
        check = self.check_draft(draft)
        if check.ok and check.doc_type is not None:
            return check.doc_type

        parts = []
        if check.missing:
            parts.append("Missing: " + ", ".join(field_label(n) for n in check.missing))
        if check.invalid:
            parts.append("Invalid: " + ", ".join(field_label(n) for n in check.invalid))
        raise ValidationError("; ".join(parts), fields=check.missing + check.invalid)

    def normalize_assignee(self, assignee: Optional[str]) -> str:
        name = (assignee or "").strip()
        if not name:
            raise ValidationError("Assignee name is required.", fields=("assignee",))
        return name
