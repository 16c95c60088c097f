"""
===============================================================================
AuthoringSurface – contract between the rich-text editor and its consumers
-------------------------------------------------------------------------------
    bind(container)        attach the editor once per mount
    get_content() -> str   serialized markup of the live buffer
    set_content(markup)    replace the buffer (reset with "" or load for view)
    on_change(callback)    synchronous notification on every change
    set_read_only(flag)    read display for the viewer

Change callbacks fire for user edits AND for set_content, so a subscriber
(the form's draft) always mirrors the buffer. Callbacks run in registration
order on the caller's thread; no debouncing.

BufferAuthoringSurface is the headless implementation (tests, scripts);
the tk implementation lives in incomingdocs/gui/rich_text_editor.py.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], None]


class AuthoringSurface(Protocol):
    def bind(self, container: Any) -> None: ...
    def get_content(self) -> str: ...
    def set_content(self, markup: str) -> None: ...
    def on_change(self, callback: ChangeCallback) -> Callable[[], None]: ...
    def set_read_only(self, flag: bool) -> None: ...

    @property
    def read_only(self) -> bool: ...


class ChangeNotifier:
    """Small subscriber list shared by surface implementations."""

    def __init__(self) -> None:
        self._callbacks: List[ChangeCallback] = []

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    def emit(self, markup: str) -> None:
        for cb in list(self._callbacks):
            cb(markup)


class BufferAuthoringSurface:
    """Headless surface holding the serialized markup directly."""

    def __init__(self, initial: str = "") -> None:
        self._buffer = initial or ""
        self._container: Optional[Any] = None
        self._bound = False
        self._read_only = False
        self._notifier = ChangeNotifier()

    # -- contract ---------------------------------------------------------
    def bind(self, container: Any) -> None:
        if self._bound:
            raise RuntimeError("Authoring surface is already bound")
        self._container = container
        self._bound = True

    def unbind(self) -> None:
        self._container = None
        self._bound = False

    @property
    def bound(self) -> bool:
        return self._bound

    def get_content(self) -> str:
        return self._buffer

    def set_content(self, markup: str) -> None:
        self._buffer = markup or ""
        self._notifier.emit(self._buffer)

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def set_read_only(self, flag: bool) -> None:
        self._read_only = bool(flag)

    @property
    def read_only(self) -> bool:
        return self._read_only

    # -- user edits -------------------------------------------------------
    def edit(self, markup: str) -> None:
        """Simulate a user edit; ignored while read-only."""
        if self._read_only:
            logger.debug("edit ignored: surface is read-only")
            return
        self._buffer = markup or ""
        self._notifier.emit(self._buffer)
