"""
===============================================================================
TkRichTextSurface – AuthoringSurface on a tk.Text widget
-------------------------------------------------------------------------------
Toolbar
    Bold / Italic / Underline toggles and a block selector
    (Paragraph, Heading 1, Heading 2, List item).

Model
    Inline styles are text tags "bold" / "italic" / "underline"; the block
    kind of a line is a "blk_<kind>" tag. Stored HTML is converted into this
    representation on load (markup.parse_markup) and back on every change
    (markup.serialize_blocks).

Threading
    get_content() returns a mirror string updated on the Tk thread, so it is
    safe to call from the worker thread. set_content() updates the mirror
    immediately and schedules the widget update through the UiDispatcher.
===============================================================================
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, List, Optional

from incomingdocs.gui.task_runner import UiDispatcher
from incomingdocs.logic.editor.authoring_surface import ChangeCallback, ChangeNotifier
from incomingdocs.logic.editor.markup import (
    BOLD, INLINE_STYLES, ITALIC, UNDERLINE, Block, Run, normalize_markup, parse_markup, serialize_blocks,
)

_BLOCK_CHOICES = (("Paragraph", "p"), ("Heading 1", "h1"), ("Heading 2", "h2"), ("List item", "li"))


class TkRichTextSurface:
    def __init__(self, dispatcher: Optional[UiDispatcher] = None) -> None:
        self._dispatcher = dispatcher
        self._notifier = ChangeNotifier()
        self._markup = ""
        self._read_only = False
        self._loading = False
        self._frame: Optional[ttk.Frame] = None
        self._text: Optional[tk.Text] = None
        self._var_block: Optional[tk.StringVar] = None

    # ------------------------------------------------------------------ #
    # AuthoringSurface
    # ------------------------------------------------------------------ #
    def bind(self, container: Any) -> None:
        if self._frame is not None:
            raise RuntimeError("Authoring surface is already bound")

        frm = ttk.Frame(container)
        frm.columnconfigure(0, weight=1)
        frm.rowconfigure(1, weight=1)

        bar = ttk.Frame(frm)
        bar.grid(row=0, column=0, sticky="ew", pady=(0, 4))
        ttk.Button(bar, text="B", width=3, command=lambda: self.toggle_style(BOLD)).grid(row=0, column=0, padx=2)
        ttk.Button(bar, text="I", width=3, command=lambda: self.toggle_style(ITALIC)).grid(row=0, column=1, padx=2)
        ttk.Button(bar, text="U", width=3, command=lambda: self.toggle_style(UNDERLINE)).grid(row=0, column=2, padx=2)
        self._var_block = tk.StringVar(value=_BLOCK_CHOICES[0][0])
        cb = ttk.Combobox(bar, textvariable=self._var_block, state="readonly", width=12,
                          values=[label for label, _ in _BLOCK_CHOICES])
        cb.grid(row=0, column=3, padx=(8, 2))
        cb.bind("<<ComboboxSelected>>", lambda _e: self.apply_block(self._selected_block_kind()))

        text = tk.Text(frm, wrap="word", height=12, undo=True)
        vsb = ttk.Scrollbar(frm, orient="vertical", command=text.yview)
        text.configure(yscrollcommand=vsb.set)
        text.grid(row=1, column=0, sticky="nsew")
        vsb.grid(row=1, column=1, sticky="ns")

        base = ("TkDefaultFont",)
        text.tag_configure(BOLD, font=base + (10, "bold"))
        text.tag_configure(ITALIC, font=base + (10, "italic"))
        text.tag_configure(UNDERLINE, underline=True)
        text.tag_configure("blk_h1", font=base + (15, "bold"), spacing1=6, spacing3=4)
        text.tag_configure("blk_h2", font=base + (12, "bold"), spacing1=4, spacing3=2)
        text.tag_configure("blk_h3", font=base + (11, "bold"))
        text.tag_configure("blk_li", lmargin1=12, lmargin2=24)
        text.bind("<<Modified>>", self._on_modified)

        frm.pack(fill="both", expand=True)
        self._frame = frm
        self._text = text
        self._load_widget(self._markup)

    def get_content(self) -> str:
        return self._markup

    def set_content(self, markup: str) -> None:
        self._markup = normalize_markup(markup)
        self._notifier.emit(self._markup)
        if self._dispatcher is not None:
            self._dispatcher.call(self._load_widget, self._markup)
        else:
            self._load_widget(self._markup)

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        return self._notifier.subscribe(callback)

    def set_read_only(self, flag: bool) -> None:
        self._read_only = bool(flag)
        if self._dispatcher is not None:
            self._dispatcher.call(self._apply_state)
        else:
            self._apply_state()

    @property
    def read_only(self) -> bool:
        return self._read_only

    # ------------------------------------------------------------------ #
    # Formatting commands
    # ------------------------------------------------------------------ #
    def toggle_style(self, style: str) -> None:
        text = self._text
        if text is None or self._read_only or style not in INLINE_STYLES:
            return
        try:
            start, end = text.index("sel.first"), text.index("sel.last")
        except tk.TclError:
            return
        ranges = text.tag_ranges(style)
        covered = any(
            text.compare(r_start, "<=", start) and text.compare(r_end, ">=", end)
            for r_start, r_end in zip(ranges[0::2], ranges[1::2])
        )
        if covered:
            text.tag_remove(style, start, end)
        else:
            text.tag_add(style, start, end)
        self._sync()

    def apply_block(self, kind: str) -> None:
        text = self._text
        if text is None or self._read_only:
            return
        try:
            start, end = text.index("sel.first linestart"), text.index("sel.last lineend")
        except tk.TclError:
            start, end = text.index("insert linestart"), text.index("insert lineend")
        for _, k in _BLOCK_CHOICES:
            text.tag_remove(f"blk_{k}", start, end)
        if kind != "p":
            text.tag_add(f"blk_{kind}", start, end)
        self._sync()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    def _selected_block_kind(self) -> str:
        label = self._var_block.get() if self._var_block is not None else ""
        return next((k for lbl, k in _BLOCK_CHOICES if lbl == label), "p")

    def _apply_state(self) -> None:
        if self._text is not None:
            self._text.configure(state="disabled" if self._read_only else "normal")

    def _load_widget(self, markup: str) -> None:
        text = self._text
        if text is None:
            return
        self._loading = True
        try:
            text.configure(state="normal")
            text.delete("1.0", "end")
            for idx, block in enumerate(parse_markup(markup)):
                if idx:
                    text.insert("end", "\n")
                line_start = text.index("end-1c")
                for run in block.runs:
                    text.insert("end", run.text.replace("\n", " "), tuple(sorted(run.styles)))
                if block.kind != "p":
                    text.tag_add(f"blk_{block.kind}", line_start, "end-1c")
            text.edit_modified(False)
            text.edit_reset()
        finally:
            self._loading = False
            self._apply_state()

    def _widget_blocks(self) -> List[Block]:
        assert self._text is not None
        blocks: List[Block] = []
        current = Block("p")
        active: set[str] = set()
        for key, value, _index in self._text.dump("1.0", "end-1c", tag=True, text=True):
            if key == "tagon":
                active.add(value)
            elif key == "tagoff":
                active.discard(value)
            elif key == "text":
                for i, part in enumerate(value.split("\n")):
                    if i:
                        blocks.append(current)
                        current = Block("p")
                    if not part:
                        continue
                    kind = next((t[4:] for t in active if t.startswith("blk_")), None)
                    if kind:
                        current.kind = kind
                    current.runs.append(Run(part, frozenset(t for t in active if t in INLINE_STYLES)))
        blocks.append(current)
        return blocks

    def _sync(self) -> None:
        self._markup = serialize_blocks(self._widget_blocks())
        self._notifier.emit(self._markup)

    def _on_modified(self, _event: Any = None) -> None:
        text = self._text
        if text is None or not text.edit_modified():
            return
        text.edit_modified(False)
        if not self._loading:
            self._sync()
