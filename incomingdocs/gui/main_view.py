"""
===============================================================================
IncomingDocumentsView – Layout (Form | Documents+Viewer | Inbox | Status)
-------------------------------------------------------------------------------
- DocumentFormPanel (links), hosts the shared rich-text surface
- Notebook (rechts): "Documents" table + viewer header, "Inbox"
- Status bar (unten) for info notifications; warnings/errors use messagebox

Threading
    Controller calls that touch the store run on the TaskRunner. Every
    render_* / show_* method may therefore be called from the worker thread
    and is marshalled onto the Tk thread through the UiDispatcher.
===============================================================================
"""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Any, Callable, Dict, List, Optional

from core.config.config_service import ConfigService, get_config_service
from incomingdocs.gui.dialogs.assign_dialog import AssignDialog
from incomingdocs.gui.document_form_panel import DocumentFormPanel
from incomingdocs.gui.document_table_panel import DocumentTablePanel
from incomingdocs.gui.inbox_panel import InboxPanel
from incomingdocs.gui.rich_text_editor import TkRichTextSurface
from incomingdocs.gui.task_runner import TaskRunner, UiDispatcher
from incomingdocs.logic.repository.document_store import DocumentStore
from incomingdocs.logic.viewstate.ui_state import AssignmentDialogState, ViewerState
from incomingdocs.models.dto.document_list_item_dto import DocumentListItemDTO
from incomingdocs.models.dto.inbox_item_dto import InboxItemDTO
from incomingdocs.wiring import build_workflow, http_store_from_config

logger = logging.getLogger(__name__)

_STATUS_CLEAR_MS = 6000


class IncomingDocumentsView(ttk.Frame):
    def __init__(
        self,
        parent: tk.Misc,
        *,
        config: Optional[ConfigService] = None,
        store: Optional[DocumentStore] = None,
        **_ignore: Any,
    ) -> None:
        super().__init__(parent)
        self._cfg = config or get_config_service()
        self._dispatcher = UiDispatcher(self)
        self._runner = TaskRunner()
        self._assign_dialog: Optional[AssignDialog] = None
        self._status_after: Optional[str] = None

        self.columnconfigure(0, weight=1)
        self.columnconfigure(1, weight=2)
        self.rowconfigure(1, weight=1)

        ttk.Label(self, text="Incoming Documents", font=("Segoe UI", 15, "bold")).grid(
            row=0, column=0, columnspan=2, sticky="w", padx=12, pady=(10, 4))

        # LEFT: form + editor
        self.form_panel = DocumentFormPanel(self, on_submit=self._on_submit, on_new=self._on_new)
        self.form_panel.grid(row=1, column=0, sticky="nsew", padx=(12, 6), pady=6)

        # RIGHT: documents / inbox
        nb = ttk.Notebook(self)
        nb.grid(row=1, column=1, sticky="nsew", padx=(6, 12), pady=6)

        docs_tab = ttk.Frame(nb, padding=6)
        docs_tab.columnconfigure(0, weight=1)
        docs_tab.rowconfigure(0, weight=1)
        self.table_panel = DocumentTablePanel(
            docs_tab,
            on_archive=lambda doc_id: self._run(self.workflow.lifecycle.archive, doc_id),
            on_assign=lambda doc_id: self._run(self.workflow.assignment.open, doc_id),
            on_track=lambda doc_id: self._run(self.workflow.lifecycle.track, doc_id),
            on_view=lambda doc_id: self._run(self.workflow.lifecycle.view, doc_id),
            on_print=lambda: self._run(self.workflow.lifecycle.print),
        )
        self.table_panel.grid(row=0, column=0, sticky="nsew")
        self._viewer_label = ttk.Label(docs_tab, text="", anchor="w")
        self._viewer_label.grid(row=1, column=0, sticky="ew", pady=(6, 0))
        nb.add(docs_tab, text="Documents")

        self.inbox_panel = InboxPanel(
            nb, on_view=lambda item_id: self._run(self.workflow.inbox.view, item_id))
        nb.add(self.inbox_panel, text="Inbox")

        # BOTTOM: status
        self._status_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self._status_var, anchor="w", relief="sunken").grid(
            row=2, column=0, columnspan=2, sticky="ew")

        # Wiring
        self.surface = TkRichTextSurface(self._dispatcher)
        self.workflow = build_workflow(
            view=self,
            surface=self.surface,
            store=store or http_store_from_config(self._cfg),
            print_config=self._cfg.printing,
        )
        self.form_panel.set_controller(self.workflow.form)
        self.workflow.form.bind_surface(self.form_panel.editor_container)

        self.bind("<Destroy>", self._on_destroy, add="+")

        self._run(self.workflow.lifecycle.load_document_list)
        self._run(self.workflow.inbox.mount)

    # ------------------------------------------------------------------ #
    # Rendering (called by controllers, possibly off the Tk thread)
    # ------------------------------------------------------------------ #
    def render_document_list(self, rows: List[DocumentListItemDTO]) -> None:
        self._ui(self.table_panel.render_rows, list(rows))

    def render_inbox(self, rows: List[InboxItemDTO]) -> None:
        self._ui(self.inbox_panel.render_rows, list(rows))

    def render_form(self, values: Dict[str, str], invalid: tuple[str, ...] = ()) -> None:
        self._ui(self.form_panel.render, dict(values), tuple(invalid))

    def render_viewer(self, state: ViewerState) -> None:
        if state.kind is None:
            text = ""
        else:
            parts = [f"Viewing {state.kind}: {state.title}"]
            if state.status:
                parts.append(f"status {state.status}")
            if state.assignee:
                parts.append(f"assigned to {state.assignee}")
            text = ", ".join(parts)
        self._ui(self._viewer_label.configure, text=text)

    def render_assignment_dialog(self, state: AssignmentDialogState) -> None:
        self._ui(self._sync_assign_dialog, state)

    # ------------------------------------------------------------------ #
    # Notifications
    # ------------------------------------------------------------------ #
    def show_info(self, title: str, message: str) -> None:
        self._ui(self._set_status, f"{title}: {message}")

    def show_warning(self, title: str, message: str) -> None:
        self._ui(messagebox.showwarning, title, message, parent=self)

    def show_error(self, title: str, message: str) -> None:
        self._ui(messagebox.showerror, title, message, parent=self)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    def _ui(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._dispatcher.call(fn, *args, **kwargs)

    def _run(self, fn: Callable[..., Any], *args: Any) -> None:
        self._runner.submit(fn, *args)

    def _on_submit(self) -> None:
        self._run(self.workflow.form.submit)

    def _on_new(self) -> None:
        self._run(self._start_new)

    def _start_new(self) -> None:
        self.workflow.viewer.clear()
        self.workflow.form.start_new()

    def _set_status(self, text: str) -> None:
        self._status_var.set(text)
        if self._status_after is not None:
            self.after_cancel(self._status_after)
        self._status_after = self.after(_STATUS_CLEAR_MS, lambda: self._status_var.set(""))

    def _sync_assign_dialog(self, state: AssignmentDialogState) -> None:
        if not state.visible:
            if self._assign_dialog is not None:
                self._assign_dialog.grab_release()
                self._assign_dialog.destroy()
                self._assign_dialog = None
            return
        if self._assign_dialog is not None:
            return
        assignment = self.workflow.assignment
        self._assign_dialog = AssignDialog(
            self,
            state=state,
            on_change=assignment.set_assignee,
            on_confirm=lambda: self._run(assignment.confirm),
            on_cancel=assignment.cancel,
        )

    def _on_destroy(self, event: tk.Event) -> None:
        if event.widget is not self:
            return
        self.workflow.form.unbind_surface()
        self.workflow.inbox.unmount()
        self._runner.shutdown()
        self._dispatcher.stop()
        logger.debug("incoming documents view destroyed")
