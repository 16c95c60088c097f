"""
===============================================================================
AssignDialog – modal capturing the assignee of one document
-------------------------------------------------------------------------------
Pure view: the AssignmentController owns visibility and the edited value.
Typing updates the controller; Assign/Cancel call confirm/cancel.
===============================================================================
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable

from incomingdocs.logic.viewstate.ui_state import AssignmentDialogState


class AssignDialog(tk.Toplevel):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        state: AssignmentDialogState,
        on_change: Callable[[str], None],
        on_confirm: Callable[[], None],
        on_cancel: Callable[[], None],
    ) -> None:
        super().__init__(parent)
        self.title("Assign task")
        self.transient(parent)
        self.resizable(False, False)

        self.var_assignee = tk.StringVar(value=state.assignee)
        self.var_assignee.trace_add("write", lambda *_a: on_change(self.var_assignee.get()))

        frm = ttk.Frame(self, padding=12)
        frm.grid(row=0, column=0, sticky="nsew")
        frm.columnconfigure(1, weight=1)

        ttk.Label(frm, text=state.document_title, font=("TkDefaultFont", 10, "bold")).grid(
            row=0, column=0, columnspan=2, sticky="w", pady=(0, 8))
        ttk.Label(frm, text="Assign to").grid(row=1, column=0, sticky="w", padx=(0, 8))
        entry = ttk.Entry(frm, textvariable=self.var_assignee, width=36)
        entry.grid(row=1, column=1, sticky="ew")
        entry.focus_set()

        btns = ttk.Frame(frm)
        btns.grid(row=2, column=0, columnspan=2, sticky="e", pady=(12, 0))
        ttk.Button(btns, text="Cancel", command=on_cancel).grid(row=0, column=0, padx=6)
        ttk.Button(btns, text="Assign", command=on_confirm).grid(row=0, column=1, padx=6)

        self.bind("<Return>", lambda _e: on_confirm())
        self.bind("<Escape>", lambda _e: on_cancel())
        self.protocol("WM_DELETE_WINDOW", on_cancel)
        self.grab_set()
