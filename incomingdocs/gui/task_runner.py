"""
===============================================================================
TaskRunner / UiDispatcher – keep store calls off the Tk mainloop
-------------------------------------------------------------------------------
- TaskRunner: ONE daemon worker thread executing submitted callables in
  order, so lifecycle actions never run in parallel.
- UiDispatcher: marshals callables back onto the Tk thread (queue drained
  with `after`). Calls made on the Tk thread run immediately.
===============================================================================
"""
from __future__ import annotations

import logging
import queue
import threading
import tkinter as tk
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

_STOP = object()


class UiDispatcher:
    def __init__(self, widget: tk.Misc, *, poll_ms: int = 40) -> None:
        self._widget = widget
        self._poll_ms = poll_ms
        self._queue: "queue.Queue[tuple[Callable[..., Any], tuple, dict]]" = queue.Queue()
        self._ui_thread = threading.get_ident()
        self._after_id: Optional[str] = self._widget.after(self._poll_ms, self._drain)

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        if threading.get_ident() == self._ui_thread:
            fn(*args, **kwargs)
        else:
            self._queue.put((fn, args, kwargs))

    def _drain(self) -> None:
        while True:
            try:
                fn, args, kwargs = self._queue.get_nowait()
            except queue.Empty:
                break
            try:
                fn(*args, **kwargs)
            except tk.TclError:
                # widget destroyed while the call was queued
                logger.debug("dropped UI call %r", fn, exc_info=True)
        self._after_id = self._widget.after(self._poll_ms, self._drain)

    def stop(self) -> None:
        if self._after_id is not None:
            try:
                self._widget.after_cancel(self._after_id)
            except tk.TclError:
                pass
            self._after_id = None


class TaskRunner:
    def __init__(self, name: str = "incomingdocs-worker") -> None:
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)
        self._thread.start()

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._queue.put((fn, args, kwargs))

    def shutdown(self) -> None:
        self._queue.put(_STOP)

    def _loop(self) -> None:
        while True:
            job = self._queue.get()
            if job is _STOP:
                return
            fn, args, kwargs = job
            try:
                fn(*args, **kwargs)
            except Exception:
                # controllers report domain errors themselves; anything left is a bug
                logger.exception("background task %r failed", getattr(fn, "__name__", fn))
