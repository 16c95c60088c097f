"""
Incoming documents feature package.

Provides a factory the main window can call to mount the feature without
knowing its internals.
"""

from typing import Any, Optional
import tkinter as tk


def get_feature_name() -> str:
    return "Incoming Documents"


def create_feature_view(parent: tk.Misc, app_context: Optional[Any] = None) -> tk.Frame:
    """
    Factory for the incoming documents view.

    Args:
        parent (tk.Misc): Tk container to mount the view onto.
        app_context (object, optional): may carry a ``config`` attribute
            (ConfigService); the global config service is used otherwise.

    Returns:
        tk.Frame: The wired view; it starts loading documents and inbox.
    """
    from .gui.main_view import IncomingDocumentsView

    return IncomingDocumentsView(parent, config=getattr(app_context, "config", None))
