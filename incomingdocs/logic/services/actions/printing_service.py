"""
===============================================================================
PrintingService – render the selected record and hand it to the printer
-------------------------------------------------------------------------------
Rules
    - Operates on a ViewableRecord (document or inbox item); records without
      content print their title only.
    - HTML (default): a minimal document with the escaped title and the RAW
      content markup. No sanitization; the markup comes from the authoring
      surface.
    - PDF ([Print] format = pdf): reportlab rendering + pypdf watermark.
    - One file per record ("incoming_print_<kind>_<id>"), overwritten on
      every print so the output directory does not grow.
    - Dispatch (platform-specific), then return the written surface path.

Collaborators
    - PdfRenderService / PdfWatermarkService (pdf only)
    - a dispatcher callable (defaults to send_to_printer)
===============================================================================
"""
from __future__ import annotations

import logging
import os
import re
import subprocess
import sys
import tempfile
from html import escape
from pathlib import Path
from typing import Callable, Optional

from core.config.config_service import PrintConfig
from incomingdocs.logic.services.pdf_render_service import PdfRenderService
from incomingdocs.logic.services.pdf_watermark_service import PdfWatermarkService
from incomingdocs.models.viewable_record import ViewableRecord, content_of

logger = logging.getLogger(__name__)

Dispatcher = Callable[[Path], None]

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body onload="window.print()">
<h1>{title}</h1>
<div>{content}</div>
</body>
</html>
"""


def render_print_html(title: str, content: str) -> str:
    """Minimal printable document; the title is escaped, content is inserted verbatim."""
    return _HTML_TEMPLATE.format(title=escape(title or ""), content=content or "")


def _open_with_os(path: Path) -> None:
    if sys.platform.startswith("win"):
        os.startfile(str(path))  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", str(path)])
    else:
        subprocess.Popen(["xdg-open", str(path)])


def send_to_printer(path: Path) -> None:
    """
    Hand a print surface to the platform.

    PDFs go to the print spooler (Windows shell "print" verb, `lp`
    elsewhere); HTML opens in the default viewer whose onload triggers the
    print dialog. If spooling fails the file is opened in the viewer.
    """
    if path.suffix.lower() != ".pdf":
        _open_with_os(path)
        return
    try:
        if sys.platform.startswith("win"):
            os.startfile(str(path), "print")  # type: ignore[attr-defined]
        else:
            subprocess.Popen(["lp", str(path)])
    except OSError:
        logger.warning("print spooler unavailable; opening %s in viewer", path)
        _open_with_os(path)


class PrintingService:
    """Print use case for the incoming document workflow."""

    def __init__(
        self,
        config: Optional[PrintConfig] = None,
        *,
        dispatcher: Optional[Dispatcher] = None,
        pdf_renderer: Optional[PdfRenderService] = None,
        watermark: Optional[PdfWatermarkService] = None,
    ) -> None:
        self._cfg = config or PrintConfig()
        self._dispatch = dispatcher or send_to_printer
        self._pdf = pdf_renderer
        self._wm = watermark

    def _target(self, record: ViewableRecord, suffix: str) -> Path:
        out_dir = Path(self._cfg.output_dir).expanduser() if self._cfg.output_dir else Path(tempfile.gettempdir())
        out_dir.mkdir(parents=True, exist_ok=True)
        safe_id = _UNSAFE.sub("_", str(record.id)) or "_"
        return out_dir / f"incoming_print_{record.kind.value}_{safe_id}{suffix}"

    def render(self, record: ViewableRecord) -> Path:
        """Write the print surface for a record and return its path."""
        title = record.title or ""
        content = content_of(record)

        if (self._cfg.format or "html").lower() == "pdf":
            renderer = self._pdf or PdfRenderService()
            pdf = renderer.render(title=title, content=content, target=self._target(record, ".pdf"))
            if self._cfg.watermark_text:
                wm = self._wm or PdfWatermarkService()
                stamped = wm.create_watermarked_copy(pdf, watermark_text=self._cfg.watermark_text)
                pdf.unlink(missing_ok=True)
                return stamped
            return pdf

        target = self._target(record, ".html")
        target.write_text(render_print_html(title, content), encoding="utf-8")
        return target

    def print_record(self, record: ViewableRecord) -> Path:
        path = self.render(record)
        if self._cfg.dispatch:
            self._dispatch(path)
        logger.info("print surface for %s %s written to %s", record.kind.value, record.id, path)
        return path
