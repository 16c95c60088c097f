"""
===============================================================================
DocumentFormPanel – metadata fields + rich-text body of a new document
-------------------------------------------------------------------------------
- Every field change is forwarded to the form controller (set_field).
- The editor container is handed to the controller's bind_surface().
- Issue and receipt dates are tkcalendar pickers writing ISO dates; the
  prefilled day is pushed into the draft once a controller is attached.
- "Add document" / "New" buttons call submit() / start_new() through the
  on_submit / on_new callbacks (the view runs them on the worker thread).
===============================================================================
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Dict, Optional

from tkcalendar import DateEntry

from incomingdocs.models.document_type import DocumentType

_FIELDS = (
    ("title", "Title *"),
    ("document_number", "Document number *"),
    ("issue_date", "Issue date *"),
    ("issuing_entity", "Issuing entity *"),
    ("receipt_date", "Receipt date *"),
    ("responsible_person", "Responsible person *"),
    ("accompanying_documents", "Accompanying documents"),
)
_DATE_FIELDS = frozenset({"issue_date", "receipt_date"})


class DocumentFormPanel(ttk.LabelFrame):
    def __init__(self, parent: tk.Misc, *, on_submit: Callable[[], None], on_new: Callable[[], None]) -> None:
        super().__init__(parent, text="New incoming document", padding=8)
        self._controller: Optional[Any] = None
        self._suspend = False
        self._vars: Dict[str, tk.StringVar] = {}
        self._labels: Dict[str, ttk.Label] = {}

        self.columnconfigure(1, weight=1)
        self.rowconfigure(len(_FIELDS) + 1, weight=1)

        for row, (name, label) in enumerate(_FIELDS):
            self._labels[name] = ttk.Label(self, text=label)
            self._labels[name].grid(row=row, column=0, sticky="w", pady=2, padx=(0, 8))
            var = tk.StringVar(value="")
            var.trace_add("write", lambda *_a, n=name: self._on_var_changed(n))
            self._vars[name] = var
            if name in _DATE_FIELDS:
                DateEntry(self, date_pattern="yyyy-mm-dd", textvariable=var, width=12).grid(
                    row=row, column=1, sticky="w")
            else:
                ttk.Entry(self, textvariable=var, width=40).grid(row=row, column=1, sticky="ew")

        type_row = len(_FIELDS)
        self._labels["doc_type"] = ttk.Label(self, text="Type *")
        self._labels["doc_type"].grid(row=type_row, column=0, sticky="w", pady=2, padx=(0, 8))
        self._vars["doc_type"] = tk.StringVar(value="")
        self._vars["doc_type"].trace_add("write", lambda *_a: self._on_var_changed("doc_type"))
        ttk.Combobox(self, textvariable=self._vars["doc_type"], state="readonly",
                     values=[t.value for t in DocumentType]).grid(row=type_row, column=1, sticky="w")

        self.editor_container = ttk.Frame(self)
        self.editor_container.grid(row=type_row + 1, column=0, columnspan=2, sticky="nsew", pady=(8, 0))

        btns = ttk.Frame(self)
        btns.grid(row=type_row + 2, column=0, columnspan=2, sticky="e", pady=(8, 0))
        ttk.Button(btns, text="New", command=on_new).grid(row=0, column=0, padx=6)
        ttk.Button(btns, text="Add document", command=on_submit).grid(row=0, column=1, padx=6)

    def set_controller(self, controller: Any) -> None:
        self._controller = controller
        for name in sorted(_DATE_FIELDS):
            if self._vars[name].get():
                controller.set_field(name, self._vars[name].get())

    def render(self, values: Dict[str, str], invalid: tuple[str, ...] = ()) -> None:
        self._suspend = True
        try:
            for name, var in self._vars.items():
                if name in values and var.get() != values[name]:
                    var.set(values[name])
        finally:
            self._suspend = False
        for name, lbl in self._labels.items():
            lbl.configure(foreground="#b00020" if name in invalid else "")

    def _on_var_changed(self, name: str) -> None:
        if self._suspend or self._controller is None:
            return
        self._controller.set_field(name, self._vars[name].get())
