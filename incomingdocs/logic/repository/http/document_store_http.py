"""
===============================================================================
HttpDocumentStore – DocumentStore over the REST backend (requests)
-------------------------------------------------------------------------------
Endpoints (relative to the configured base URL):
    GET  /documents                 -> list of documents
    POST /documents                 -> created document
    PUT  /documents/{id}            -> {"status": ...}
    PUT  /documents/{id}/assign     -> {"assignee": ...}
    GET  /documents/{id}            -> full document
    GET  /documents/{id}/track      -> {"status": "..."}
    GET  /inbox                     -> list of inbox items

Auth:
    A token provider callable supplies the bearer credential. A missing
    token is not validated here; the backend answers with an HTTP error.

Errors:
    404 -> NotFoundError, any other failure -> TransportError.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from incomingdocs.exceptions.errors import NotFoundError, TransportError
from incomingdocs.models.document import Document, DocumentDraft, InboxSummary
from incomingdocs.models.document_status import DocumentStatus
from incomingdocs.models.mappers import document_from_wire, draft_to_wire, inbox_item_from_wire

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class HttpDocumentStore:
    """Synchronous HTTP client; one requests.Session per store instance."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        token_provider: Optional[TokenProvider] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._timeout = timeout
        self._token = token_provider or (lambda: None)
        self._session = session or requests.Session()

    # ------------------------------------------------------------------ #
    # DocumentStore
    # ------------------------------------------------------------------ #
    def list_documents(self) -> List[Document]:
        data = self._request("GET", "/documents")
        return [self._document(item) for item in self._as_list(data, "/documents")]

    def create_document(self, draft: DocumentDraft) -> Document:
        data = self._request("POST", "/documents", json=draft_to_wire(draft))
        return self._document(data)

    def update_status(self, doc_id: str, status: DocumentStatus) -> Document:
        data = self._request("PUT", f"/documents/{self._seg(doc_id)}", json={"status": status.value})
        return self._document(data)

    def assign(self, doc_id: str, assignee: str) -> Document:
        data = self._request("PUT", f"/documents/{self._seg(doc_id)}/assign", json={"assignee": assignee})
        return self._document(data)

    def get_document(self, doc_id: str) -> Document:
        data = self._request("GET", f"/documents/{self._seg(doc_id)}")
        return self._document(data)

    def track(self, doc_id: str) -> str:
        data = self._request("GET", f"/documents/{self._seg(doc_id)}/track")
        if not isinstance(data, dict) or "status" not in data:
            raise TransportError("Malformed tracking response")
        return str(data["status"])

    def list_inbox(self) -> List[InboxSummary]:
        data = self._request("GET", "/inbox")
        items = self._as_list(data, "/inbox")
        try:
            return [inbox_item_from_wire(item) for item in items]
        except (KeyError, TypeError) as exc:
            raise TransportError(f"Malformed inbox item: {exc}") from exc

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    @staticmethod
    def _seg(doc_id: str) -> str:
        return quote(str(doc_id), safe="")

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        url = f"{self._base}{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(method, url, json=json, headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code == 404:
            raise NotFoundError(f"{method} {path}: not found", status_code=404)
        if not 200 <= resp.status_code < 300:
            raise TransportError(f"{method} {path}: HTTP {resp.status_code}", status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path}: invalid JSON response", status_code=resp.status_code) from exc

    @staticmethod
    def _as_list(data: Any, path: str) -> list:
        if not isinstance(data, list):
            raise TransportError(f"GET {path}: expected a list")
        return data

    @staticmethod
    def _document(data: Any) -> Document:
        if not isinstance(data, dict):
            raise TransportError("Malformed document response")
        try:
            return document_from_wire(data)
        except (KeyError, ValueError) as exc:
            raise TransportError(f"Malformed document response: {exc}") from exc
