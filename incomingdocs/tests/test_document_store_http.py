"""HttpDocumentStore against a patched requests.Session."""
from __future__ import annotations

import json
from unittest import mock

import pytest
import requests

from incomingdocs.exceptions.errors import NotFoundError, TransportError
from incomingdocs.logic.repository.http.document_store_http import HttpDocumentStore
from incomingdocs.models.document import DocumentDraft
from incomingdocs.models.document_status import DocumentStatus
from incomingdocs.models.document_type import DocumentType

BASE = "http://backend.test/api"

WIRE_DOC = {
    "id": 7,
    "title": "Invoice A",
    "type": "invoice",
    "status": "pending",
    "documentNumber": "INV-001",
    "issueDate": "2024-03-01",
    "issuingEntity": "Supplier GmbH",
    "accompanyingDocuments": None,
    "receiptDate": "2024-03-04",
    "responsiblePerson": "Alex",
    "content": "<p>x</p>",
}


def _response(status: int, payload=None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    return resp


@pytest.fixture
def http():
    with mock.patch.object(requests.Session, "request") as request:
        yield request


def test_list_documents_maps_wire_fields(http):
    http.return_value = _response(200, [WIRE_DOC])
    docs = HttpDocumentStore(BASE).list_documents()

    doc = docs[0]
    assert doc.id == "7"
    assert doc.doc_type is DocumentType.INVOICE
    assert doc.document_number == "INV-001"
    assert doc.accompanying_documents is None
    method, url = http.call_args.args
    assert (method, url) == ("GET", f"{BASE}/documents")


def test_create_sends_pending_status_and_camel_case(http):
    http.return_value = _response(201, WIRE_DOC)
    draft = DocumentDraft(title=" Invoice A ", doc_type="Invoice", document_number="INV-001",
                          issue_date="2024-03-01", issuing_entity="Supplier GmbH",
                          receipt_date="2024-03-04", responsible_person="Alex", content="<p>x</p>")

    HttpDocumentStore(BASE).create_document(draft)

    body = http.call_args.kwargs["json"]
    assert body["status"] == "pending"
    assert body["title"] == "Invoice A"
    assert body["type"] == "invoice"
    assert body["accompanyingDocuments"] is None
    assert body["receiptDate"] == "2024-03-04"


def test_update_status_and_assign_paths(http):
    http.return_value = _response(200, dict(WIRE_DOC, status="archived", assignee="Kai"))
    store = HttpDocumentStore(BASE + "/")

    assert store.update_status("7", DocumentStatus.ARCHIVED).status is DocumentStatus.ARCHIVED
    assert http.call_args.args == ("PUT", f"{BASE}/documents/7")
    assert http.call_args.kwargs["json"] == {"status": "archived"}

    assert store.assign("7", "Kai").assignee == "Kai"
    assert http.call_args.args == ("PUT", f"{BASE}/documents/7/assign")
    assert http.call_args.kwargs["json"] == {"assignee": "Kai"}


def test_ids_are_quoted(http):
    http.return_value = _response(200, {"status": "pending"})
    HttpDocumentStore(BASE).track("a/b c")
    assert http.call_args.args[1] == f"{BASE}/documents/a%2Fb%20c/track"


def test_bearer_token_only_when_available(http):
    http.return_value = _response(200, [])
    HttpDocumentStore(BASE, token_provider=lambda: "s3cret").list_inbox()
    assert http.call_args.kwargs["headers"]["Authorization"] == "Bearer s3cret"

    HttpDocumentStore(BASE).list_inbox()
    assert "Authorization" not in http.call_args.kwargs["headers"]


def test_inbox_items(http):
    http.return_value = _response(200, [{"id": "in-1", "title": "Notice", "sender": "Port", "receivedDate": "2024-02-10"}])
    item = HttpDocumentStore(BASE).list_inbox()[0]
    assert (item.id, item.title, item.sender, item.received_date) == ("in-1", "Notice", "Port", "2024-02-10")


def test_404_raises_not_found(http):
    http.return_value = _response(404)
    with pytest.raises(NotFoundError) as exc:
        HttpDocumentStore(BASE).get_document("9")
    assert exc.value.status_code == 404


def test_server_error_raises_transport_error(http):
    http.return_value = _response(500, {"error": "boom"})
    with pytest.raises(TransportError) as exc:
        HttpDocumentStore(BASE).list_documents()
    assert exc.value.status_code == 500


def test_connection_error_raises_transport_error(http):
    http.side_effect = requests.ConnectionError("refused")
    with pytest.raises(TransportError):
        HttpDocumentStore(BASE).list_documents()


def test_malformed_payloads_raise_transport_error(http):
    store = HttpDocumentStore(BASE)

    http.return_value = _response(200, dict(WIRE_DOC, type="memo"))
    with pytest.raises(TransportError):
        store.get_document("7")

    http.return_value = _response(200, {"documents": []})
    with pytest.raises(TransportError):
        store.list_documents()

    http.return_value = _response(200, {})
    with pytest.raises(TransportError):
        store.track("7")
