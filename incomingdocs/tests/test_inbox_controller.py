"""Inbox: one fetch per mount, read-only viewing."""
from __future__ import annotations


def test_mount_fetches_once(workflow, store, view, inbox_item):
    store.inbox.append(inbox_item)

    workflow.inbox.mount()
    workflow.inbox.mount()

    assert store.count("list_inbox") == 1
    assert [r.title for r in view.inbox_rows[-1]] == ["Customs notice"]


def test_remount_fetches_again(workflow, store, inbox_item):
    store.inbox.append(inbox_item)
    workflow.inbox.mount()
    workflow.inbox.unmount()

    workflow.inbox.mount()

    assert store.count("list_inbox") == 2


def test_fetch_failure_leaves_list_empty(workflow, store, view):
    store.fail.add("list_inbox")

    assert workflow.inbox.mount() == ()

    assert view.errors[-1][0] == "Inbox"
    assert view.inbox_rows[-1] == []


def test_view_inbox_item_without_content(workflow, store, surface, view, inbox_item):
    store.inbox.append(inbox_item)
    workflow.inbox.mount()

    viewed = workflow.inbox.view("in-1")

    assert viewed == inbox_item
    assert surface.get_content() == ""
    state = view.viewer_states[-1]
    assert (state.kind, state.title, state.status, state.assignee) == ("inbox", "Customs notice", None, None)


def test_print_inbox_item_prints_title_only(workflow, store, printer, inbox_item):
    store.inbox.append(inbox_item)
    workflow.inbox.mount()
    workflow.inbox.view(inbox_item)

    path = workflow.lifecycle.print()

    html = path.read_text(encoding="utf-8")
    assert "<h1>Customs notice</h1>" in html
    assert "<div></div>" in html


def test_view_unknown_item_warns(workflow, view):
    workflow.inbox.mount()

    assert workflow.inbox.view("nope") is None
    assert view.warnings[-1][0] == "Inbox"
