"""Incoming documents feature exceptions."""
from __future__ import annotations

from typing import Iterable, Optional


class IncomingDocumentsError(Exception):
    """Base exception for the incoming documents feature."""


class SubmissionError(IncomingDocumentsError):
    """Raised when a document cannot be created or mutated."""


class ValidationError(SubmissionError):
    """Raised when required fields are missing or malformed.

    ``fields`` lists the offending field names (draft attribute names).
    """

    def __init__(self, message: str, fields: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class TransportError(SubmissionError):
    """Raised on network/HTTP failures talking to the document store."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(TransportError):
    """Raised when the store reports that a record does not exist (HTTP 404)."""


class NoSelectionError(IncomingDocumentsError):
    """Raised when an action needs a selected record and none is selected."""


class AssignmentInProgressError(IncomingDocumentsError):
    """Raised when an assignment flow is opened while another one is active."""
