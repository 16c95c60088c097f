"""Assign-task dialog flow."""
from __future__ import annotations

import pytest

from incomingdocs.exceptions.errors import AssignmentInProgressError


def test_open_prefills_current_assignee(workflow, store, view):
    doc = store.add("Report", assignee="Sam")

    assert workflow.assignment.open(str(doc.id)) is True

    state = view.dialog_states[-1]
    assert state.visible is True
    assert state.document_title == "Report"
    assert state.assignee == "Sam"


def test_confirm_persists_and_closes(workflow, store, view):
    doc = store.add("Report")
    workflow.assignment.open(str(doc.id))
    workflow.assignment.set_assignee("Robin")

    assert workflow.assignment.confirm() is True

    assert store.documents[str(doc.id)].assignee == "Robin"
    assert workflow.assignment.visible is False
    assert view.dialog_states[-1].visible is False


def test_failed_confirm_keeps_dialog_open(workflow, store, view):
    doc = store.add("Report")
    workflow.assignment.open(str(doc.id))
    workflow.assignment.set_assignee("Robin")
    store.fail.add("assign")

    assert workflow.assignment.confirm() is False

    assert workflow.assignment.visible is True
    assert workflow.assignment.assignee == "Robin"
    assert view.errors[-1][0] == "Assign task"


def test_cancel_discards_edit(workflow, store):
    doc = store.add("Report")
    workflow.assignment.open(str(doc.id))
    workflow.assignment.set_assignee("Robin")

    workflow.assignment.cancel()

    assert workflow.assignment.visible is False
    assert store.count("assign") == 0


def test_second_flow_is_rejected_while_one_is_open(workflow, store, view):
    first, second = store.add("One"), store.add("Two")
    workflow.assignment.begin(str(first.id))

    with pytest.raises(AssignmentInProgressError):
        workflow.assignment.begin(str(second.id))

    assert workflow.assignment.open(str(second.id)) is False
    assert view.warnings[-1][0] == "Assign task"
    assert workflow.assignment.state.document_id == str(first.id)


def test_open_unknown_document_reports_error(workflow, view):
    assert workflow.assignment.open("missing") is False
    assert workflow.assignment.visible is False
    assert view.errors[-1][0] == "Assign task"


def test_reopen_after_failed_refresh_prefills_new_assignee(workflow, store, view):
    doc = store.add("Report")
    workflow.lifecycle.load_document_list()
    store.fail.add("list_documents")

    workflow.lifecycle.assign(str(doc.id), "Robin")
    assert workflow.assignment.open(str(doc.id)) is True

    assert view.dialog_states[-1].assignee == "Robin"
    assert [d.assignee for d in workflow.lifecycle.documents] == ["Robin"]
