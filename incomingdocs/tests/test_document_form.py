"""New document form: draft capture, submit, validation and failure handling."""
from __future__ import annotations

from incomingdocs.models.document_status import DocumentStatus
from incomingdocs.models.document_type import DocumentType


def _fill(form, draft) -> None:
    for name, value in draft.as_dict().items():
        if name != "content":
            form.set_field(name, value)


def test_submit_creates_pending_document_and_refreshes_list(workflow, store, view, surface, make_draft):
    _fill(workflow.form, make_draft())
    surface.edit("<p>Amount due: <strong>120 EUR</strong></p>")

    doc = workflow.form.submit()

    assert doc is not None
    assert doc.status is DocumentStatus.PENDING
    assert doc.doc_type is DocumentType.INVOICE
    assert doc.content == "<p>Amount due: <strong>120 EUR</strong></p>"
    assert [r.title for r in view.last_rows] == ["Invoice A"]
    assert view.last_rows[0].status == "pending"
    assert view.infos[-1] == ("Add document", "Document added: Invoice A")


def test_created_document_carries_every_draft_field(workflow, surface, make_draft):
    draft = make_draft(accompanying_documents="Delivery note")
    _fill(workflow.form, draft)
    surface.edit("<p>body</p>")

    doc = workflow.form.submit()

    assert (doc.title, doc.document_number, doc.issue_date, doc.issuing_entity) == (
        draft.title, draft.document_number, draft.issue_date, draft.issuing_entity)
    assert (doc.receipt_date, doc.responsible_person, doc.accompanying_documents) == (
        draft.receipt_date, draft.responsible_person, draft.accompanying_documents)
    assert doc.doc_type is DocumentType(draft.doc_type)
    assert doc.content == "<p>body</p>"
    assert doc.assignee is None


def test_ministry_invoice_is_listed_once_as_pending(workflow, store, view, surface, make_draft):
    _fill(workflow.form, make_draft(title="Invoice A", doc_type="invoice", issuing_entity="Ministry",
                                    responsible_person="A. Ali"))
    surface.edit("<p>body</p>")

    workflow.form.submit()

    assert len(store.documents) == 1
    assert [(r.title, r.status) for r in view.last_rows] == [("Invoice A", "pending")]
    (created,) = store.documents.values()
    assert (created.issuing_entity, created.responsible_person) == ("Ministry", "A. Ali")
    assert created.content == "<p>body</p>"
    assert created.status is DocumentStatus.PENDING


def test_submit_clears_draft_and_surface(workflow, surface, make_draft):
    _fill(workflow.form, make_draft())
    surface.edit("<p>body</p>")

    workflow.form.submit()

    assert workflow.form.draft.title == ""
    assert workflow.form.draft.content == ""
    assert surface.get_content() == ""
    assert surface.read_only is False


def test_content_edits_are_mirrored_into_draft(workflow, surface):
    surface.edit("<p>first</p>")
    assert workflow.form.draft.content == "<p>first</p>"
    workflow.form.set_field("content", "<p>second</p>")
    assert surface.get_content() == "<p>second</p>"
    assert workflow.form.draft.content == "<p>second</p>"


def test_failed_create_keeps_draft_and_adds_nothing(workflow, store, view, surface, make_draft):
    _fill(workflow.form, make_draft(title="Report B", doc_type="report"))
    surface.edit("<p>keep me</p>")
    store.fail.add("create_document")

    assert workflow.form.submit() is None

    assert store.documents == {}
    assert store.count("list_documents") == 0
    assert workflow.form.draft.title == "Report B"
    assert workflow.form.draft.content == "<p>keep me</p>"
    assert view.errors[-1][0] == "Add document"
    assert "Error adding document" in view.errors[-1][1]


def test_missing_fields_are_reported_and_nothing_is_sent(workflow, store, view, make_draft):
    _fill(workflow.form, make_draft(title="", responsible_person="  "))

    assert workflow.form.submit() is None

    assert store.count("create_document") == 0
    values, invalid = view.forms[-1]
    assert set(invalid) == {"title", "responsible_person"}
    assert values["document_number"] == "INV-001"
    assert view.errors[-1] == ("Add document", "Please check: Title, Responsible person")


def test_unknown_type_and_bad_dates_are_invalid(workflow, view, make_draft):
    _fill(workflow.form, make_draft(doc_type="memo", issue_date="01.03.2024"))

    workflow.form.submit()

    _, invalid = view.forms[-1]
    assert invalid == ("doc_type", "issue_date")


def test_receipt_before_issue_is_rejected(workflow, store, view, make_draft):
    _fill(workflow.form, make_draft(issue_date="2024-05-10", receipt_date="2024-05-01"))

    workflow.form.submit()

    assert store.count("create_document") == 0
    assert view.forms[-1][1] == ("receipt_date",)


def test_viewing_a_record_does_not_overwrite_the_draft_body(workflow, store, surface):
    surface.edit("<p>my draft</p>")
    doc = store.add("Old", content="<p>viewed</p>")

    workflow.lifecycle.view(str(doc.id))

    assert surface.read_only is True
    assert surface.get_content() == "<p>viewed</p>"
    assert workflow.form.draft.content == "<p>my draft</p>"

    workflow.form.start_new()

    assert surface.read_only is False
    assert surface.get_content() == "<p>my draft</p>"
