"""
core/logging/logging_setup.py
=============================

Root logger configuration for the console.

Modules log through ``logging.getLogger(__name__)``; this module only wires
handlers once at start-up (console + optional rotating file).
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from core.config.config_service import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_HANDLER_MARK = "_erpconsole_handler"


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    return handler


def configure_logging(cfg: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Install console (and optional file) handlers on the root logger.

    Calling it again replaces the handlers installed by a previous call and
    leaves foreign handlers (e.g. pytest's caplog) alone.
    """
    cfg = cfg or LoggingConfig()
    level = getattr(logging, (cfg.level or "INFO").upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        if getattr(h, _HANDLER_MARK, False):
            root.removeHandler(h)
            h.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = _mark(logging.StreamHandler())
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if cfg.file:
        path = Path(cfg.file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = _mark(RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5, encoding="utf-8"))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger(__name__).debug("Logging initialized (level=%s)", logging.getLevelName(level))
    return root
