"""
===============================================================================
PdfWatermarkService – stamp print copies of incoming documents
-------------------------------------------------------------------------------
- reportlab draws a transparent overlay (diagonal mark + footer line) sized
  to the page; overlays are kept in memory per (page size, text).
- pypdf merges the overlay onto every page and writes "<stem>_copy.pdf"
  beside the source file.
===============================================================================
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, Optional, Tuple

from pypdf import PdfReader, PdfWriter  # type: ignore
from reportlab.lib.colors import Color  # type: ignore
from reportlab.lib.units import cm  # type: ignore
from reportlab.pdfgen import canvas  # type: ignore

_OverlayKey = Tuple[float, float, str]


class PdfWatermarkService:
    def __init__(self, *, font_size: int = 54, opacity: float = 0.12) -> None:
        self._font_size = font_size
        self._opacity = opacity
        self._overlays: Dict[_OverlayKey, bytes] = {}

    def create_watermarked_copy(self, src_pdf: Path, *, watermark_text: str,
                                target: Optional[Path] = None) -> Path:
        """Write a stamped copy of `src_pdf` and return its path."""
        src_pdf = Path(src_pdf)
        if not src_pdf.is_file():
            raise FileNotFoundError(str(src_pdf))
        out = Path(target) if target is not None else src_pdf.with_name(f"{src_pdf.stem}_copy.pdf")

        writer = PdfWriter()
        for page in PdfReader(str(src_pdf)).pages:
            size = (float(page.mediabox.width), float(page.mediabox.height))
            stamp = PdfReader(io.BytesIO(self._overlay(size, watermark_text))).pages[0]
            page.merge_page(stamp)
            writer.add_page(page)

        with out.open("wb") as fh:
            writer.write(fh)
        return out

    def _overlay(self, size: Tuple[float, float], text: str) -> bytes:
        width, height = size
        key = (round(width, 1), round(height, 1), text)
        cached = self._overlays.get(key)
        if cached is not None:
            return cached

        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=size)

        pdf.saveState()
        pdf.translate(width / 2.0, height / 2.0)
        pdf.rotate(45)
        pdf.setFillColor(Color(0.3, 0.3, 0.3, alpha=self._opacity))
        pdf.setFont("Helvetica-Bold", self._font_size)
        pdf.drawCentredString(0, 0, text.upper())
        pdf.restoreState()

        pdf.setFillColor(Color(0.1, 0.1, 0.1, alpha=0.4))
        pdf.setFont("Helvetica-Oblique", 8)
        pdf.drawRightString(width - 2 * cm, 1.2 * cm, f"Incoming document ({text})")
        pdf.showPage()
        pdf.save()

        self._overlays[key] = buf.getvalue()
        return self._overlays[key]
