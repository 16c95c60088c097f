"""InboxPanel – read-only list of received items with a View action."""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, List

from incomingdocs.models.dto.inbox_item_dto import InboxItemDTO


class InboxPanel(ttk.Frame):
    def __init__(self, parent: tk.Misc, *, on_view: Callable[[str], None]) -> None:
        super().__init__(parent)
        self._on_view = on_view

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(self, columns=("title", "sender", "received"), show="headings")
        self.tree.heading("title", text="Title")
        self.tree.heading("sender", text="Sender")
        self.tree.heading("received", text="Received")
        self.tree.column("title", width=240, anchor="w")
        self.tree.column("sender", width=160, anchor="w")
        self.tree.column("received", width=100, anchor="center")
        self.tree.grid(row=0, column=0, sticky="nsew")

        ttk.Button(self, text="View", command=self._view_selected).grid(row=1, column=0, sticky="w", pady=(6, 0))
        self.tree.bind("<Double-1>", lambda _e: self._view_selected())

    def render_rows(self, rows: List[InboxItemDTO]) -> None:
        self.tree.delete(*self.tree.get_children())
        for row in rows:
            self.tree.insert("", "end", iid=row.id, values=(row.title, row.sender, row.received_date))

    def _view_selected(self) -> None:
        sel = self.tree.selection()
        if sel:
            self._on_view(str(sel[0]))
