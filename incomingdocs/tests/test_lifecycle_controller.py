"""Document table actions: archive, assign, track, view, print."""
from __future__ import annotations

from incomingdocs.models.document_status import DocumentStatus


def test_load_renders_rows_with_archive_flag(workflow, store, view):
    store.add("Pending one")
    store.add("Done", status=DocumentStatus.ARCHIVED)

    assert workflow.lifecycle.load_document_list() is True

    flags = {r.title: r.archive_enabled for r in view.last_rows}
    assert flags == {"Pending one": True, "Done": False}


def test_load_failure_keeps_previous_rows(workflow, store, view):
    store.add("Kept")
    workflow.lifecycle.load_document_list()
    workflow.cache.invalidate()
    store.fail.add("list_documents")

    assert workflow.lifecycle.load_document_list() is False

    assert [d.title for d in workflow.lifecycle.documents] == ["Kept"]
    assert view.errors[-1][0] == "Documents"


def test_archive_pending_document(workflow, store, view):
    doc = store.add("Contract X")
    workflow.lifecycle.load_document_list()

    updated = workflow.lifecycle.archive(str(doc.id))

    assert updated.status is DocumentStatus.ARCHIVED
    assert store.documents[str(doc.id)].status is DocumentStatus.ARCHIVED
    assert view.last_rows[0].status == "archived"
    assert view.last_rows[0].archive_enabled is False
    assert workflow.lifecycle.row_actions(str(doc.id)).archive_enabled is False
    assert view.infos[-1] == ("Archive", "Document archived.")


def test_archive_twice_sends_a_single_update(workflow, store, view):
    doc = store.add("Contract X")
    workflow.lifecycle.load_document_list()

    workflow.lifecycle.archive(str(doc.id))
    notices = len(view.infos)
    assert workflow.lifecycle.archive(str(doc.id)) is None

    assert store.count("update_status") == 1
    assert len(view.infos) == notices
    assert view.errors == []


def test_archive_with_failing_refresh_still_blocks_a_second_archive(workflow, store, view):
    doc = store.add("Contract X")
    workflow.lifecycle.load_document_list()
    store.fail.add("list_documents")

    workflow.lifecycle.archive(str(doc.id))
    assert workflow.lifecycle.archive(str(doc.id)) is None

    assert store.count("update_status") == 1
    assert workflow.lifecycle.row_actions(str(doc.id)).archive_enabled is False
    assert view.last_rows[0].status == "archived"
    assert view.last_rows[0].archive_enabled is False
    assert view.errors[-1][0] == "Documents"


def test_archive_failure_reports_and_leaves_state(workflow, store, view):
    doc = store.add("Contract X")
    workflow.lifecycle.load_document_list()
    store.fail.add("update_status")

    assert workflow.lifecycle.archive(str(doc.id)) is None

    assert store.documents[str(doc.id)].status is DocumentStatus.PENDING
    assert view.errors[-1][0] == "Archive"


def test_assign_then_view_shows_assignee(workflow, store, view):
    doc = store.add("Report Q1")
    workflow.lifecycle.load_document_list()

    workflow.lifecycle.assign(str(doc.id), "  Jordan ")
    viewed = workflow.lifecycle.view(str(doc.id))

    assert viewed.assignee == "Jordan"
    assert view.viewer_states[-1].assignee == "Jordan"
    assert view.last_rows[0].assignee == "Jordan"
    assert view.infos[-1] == ("Assign task", "Task assigned to Jordan.")


def test_assign_overwrites_on_archived_documents(workflow, store):
    doc = store.add("Old", status=DocumentStatus.ARCHIVED, assignee="Sam")

    updated = workflow.lifecycle.assign(str(doc.id), "Robin")

    assert updated.assignee == "Robin"
    assert updated.status is DocumentStatus.ARCHIVED


def test_assign_blank_name_is_a_warning(workflow, store, view):
    doc = store.add("Report Q1")

    assert workflow.lifecycle.assign(str(doc.id), "   ") is None

    assert store.count("assign") == 0
    assert view.warnings[-1][0] == "Assign task"


def test_track_shows_status(workflow, store, view):
    doc = store.add("Report Q1")

    assert workflow.lifecycle.track(str(doc.id)) == "pending"
    assert view.infos[-1] == ("Track", "Document status: pending")


def test_track_unknown_document_reports_error(workflow, view):
    assert workflow.lifecycle.track("404") is None
    assert view.errors[-1][0] == "Track"


def test_view_loads_content_read_only(workflow, store, surface, view):
    doc = store.add("Memo", content="<h1>Heading</h1><p>Body</p>")

    workflow.lifecycle.view(str(doc.id))

    assert surface.get_content() == "<h1>Heading</h1><p>Body</p>"
    assert surface.read_only is True
    state = view.viewer_states[-1]
    assert (state.kind, state.title, state.status, state.print_enabled) == ("document", "Memo", "pending", True)


def test_view_is_served_from_cache_after_first_fetch(workflow, store):
    doc = store.add("Memo")

    workflow.lifecycle.view(str(doc.id))
    workflow.lifecycle.view(str(doc.id))

    assert store.count("get_document") == 1


def test_print_without_selection_warns(workflow, view, printer):
    assert workflow.lifecycle.print() is None

    assert view.warnings[-1][0] == "Print"
    assert printer.paths == []


def test_print_selected_writes_html_with_raw_content(workflow, store, printer):
    doc = store.add("Invoice <7>", content="<p><em>raw</em> markup</p>")
    workflow.lifecycle.view(str(doc.id))

    path = workflow.lifecycle.print()

    html = path.read_text(encoding="utf-8")
    assert "<h1>Invoice &lt;7&gt;</h1>" in html
    assert "<p><em>raw</em> markup</p>" in html
    assert 'onload="window.print()"' in html
    assert printer.paths == [path]


def test_print_failure_is_reported(workflow, store, view, printer, monkeypatch):
    doc = store.add("Memo")
    workflow.lifecycle.view(str(doc.id))

    def _broken(path):
        raise OSError("no printer")

    monkeypatch.setattr(workflow.viewer._printing, "_dispatch", _broken)

    assert workflow.lifecycle.print() is None
    assert view.errors[-1][0] == "Print"
