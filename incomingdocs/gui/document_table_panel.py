"""
===============================================================================
DocumentTablePanel – document list (Treeview) + row actions
-------------------------------------------------------------------------------
Actions for the selected row: Archive, Assign task, Track, View, Print.
The Archive button follows the row's `archive_enabled` flag, so an archived
document cannot be archived again through the UI.
===============================================================================
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, List, Optional

from incomingdocs.models.dto.document_list_item_dto import DocumentListItemDTO

RowAction = Callable[[str], None]


class DocumentTablePanel(ttk.Frame):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        on_archive: RowAction,
        on_assign: RowAction,
        on_track: RowAction,
        on_view: RowAction,
        on_print: Callable[[], None],
    ) -> None:
        super().__init__(parent)
        self._rows: Dict[str, DocumentListItemDTO] = {}

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(self, columns=("title", "type", "status", "assignee"), show="headings")
        self.tree.heading("title", text="Title")
        self.tree.heading("type", text="Type")
        self.tree.heading("status", text="Status")
        self.tree.heading("assignee", text="Assignee")
        self.tree.column("title", width=240, anchor="w")
        self.tree.column("type", width=90, anchor="center")
        self.tree.column("status", width=90, anchor="center")
        self.tree.column("assignee", width=140, anchor="w")

        vsb = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        bar = ttk.Frame(self)
        bar.grid(row=1, column=0, columnspan=2, sticky="w", pady=(6, 0))
        self._btn_archive = ttk.Button(bar, text="Archive", command=lambda: self._with_selection(on_archive))
        self._btn_archive.grid(row=0, column=0, padx=4)
        self._btn_assign = ttk.Button(bar, text="Assign task", command=lambda: self._with_selection(on_assign))
        self._btn_assign.grid(row=0, column=1, padx=4)
        self._btn_track = ttk.Button(bar, text="Track", command=lambda: self._with_selection(on_track))
        self._btn_track.grid(row=0, column=2, padx=4)
        self._btn_view = ttk.Button(bar, text="View", command=lambda: self._with_selection(on_view))
        self._btn_view.grid(row=0, column=3, padx=4)
        ttk.Button(bar, text="Print", command=on_print).grid(row=0, column=4, padx=(16, 4))

        self.tree.bind("<<TreeviewSelect>>", lambda _e: self._update_buttons())
        self.tree.bind("<Double-1>", lambda _e: self._with_selection(on_view))
        self._update_buttons()

    # data rendering
    def render_rows(self, rows: List[DocumentListItemDTO]) -> None:
        selected = self.selected_id()
        self.tree.delete(*self.tree.get_children())
        self._rows = {r.id: r for r in rows}
        for row in rows:
            self.tree.insert("", "end", iid=row.id, values=(row.title, row.doc_type, row.status, row.assignee))
        if selected and selected in self._rows:
            self.tree.selection_set(selected)
        self._update_buttons()

    def selected_id(self) -> Optional[str]:
        sel = self.tree.selection()
        return str(sel[0]) if sel else None

    # internals
    def _with_selection(self, action: RowAction) -> None:
        doc_id = self.selected_id()
        if doc_id is not None:
            action(doc_id)

    def _update_buttons(self) -> None:
        row = self._rows.get(self.selected_id() or "")
        has_row = row is not None
        for btn in (self._btn_assign, self._btn_track, self._btn_view):
            btn.configure(state="normal" if has_row else "disabled")
        self._btn_archive.configure(state="normal" if has_row and row.archive_enabled else "disabled")
