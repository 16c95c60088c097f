"""Headless authoring surface contract."""
from __future__ import annotations

import pytest

from incomingdocs.logic.editor.authoring_surface import BufferAuthoringSurface


def test_change_callbacks_fire_for_edits_and_set_content():
    surface = BufferAuthoringSurface()
    seen = []
    surface.on_change(seen.append)

    surface.edit("<p>typed</p>")
    surface.set_content("<p>loaded</p>")

    assert seen == ["<p>typed</p>", "<p>loaded</p>"]


def test_unsubscribe_stops_notifications():
    surface = BufferAuthoringSurface()
    seen = []
    unsubscribe = surface.on_change(seen.append)
    unsubscribe()

    surface.edit("<p>x</p>")

    assert seen == []


def test_read_only_ignores_user_edits():
    surface = BufferAuthoringSurface("<p>fixed</p>")
    surface.set_read_only(True)

    surface.edit("<p>changed</p>")

    assert surface.get_content() == "<p>fixed</p>"


def test_bind_twice_is_an_error():
    surface = BufferAuthoringSurface()
    surface.bind(object())
    with pytest.raises(RuntimeError):
        surface.bind(object())
    surface.unbind()
    surface.bind(object())
    assert surface.bound is True
