"""
PdfRenderService – title + rich-text body as a printable PDF (reportlab).

Blocks from the editor model map onto reportlab paragraph styles; inline
styles become reportlab's <b>/<i>/<u> paragraph markup. Run text is escaped
for the paragraph parser only, the stored markup is not altered.
"""
from __future__ import annotations

from html import escape
from pathlib import Path
from typing import List

from reportlab.lib.pagesizes import A4  # type: ignore
from reportlab.lib.styles import getSampleStyleSheet  # type: ignore
from reportlab.lib.units import cm  # type: ignore
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer  # type: ignore

from incomingdocs.logic.editor.markup import BOLD, ITALIC, UNDERLINE, Block, Run, parse_markup

_RL_TAGS = ((BOLD, "b"), (ITALIC, "i"), (UNDERLINE, "u"))
_BLOCK_STYLES = {"h1": "Heading1", "h2": "Heading2", "h3": "Heading3", "p": "BodyText", "li": "BodyText"}


def _run_markup(run: Run) -> str:
    text = escape(run.text, quote=False).replace("\n", "<br/>")
    for style, tag in _RL_TAGS:
        if style in run.styles:
            text = f"<{tag}>{text}</{tag}>"
    return text


class PdfRenderService:
    def render(self, *, title: str, content: str, target: Path) -> Path:
        styles = getSampleStyleSheet()
        story: List = [Paragraph(escape(title or "", quote=False), styles["Title"]), Spacer(1, 0.4 * cm)]

        blocks: List[Block] = parse_markup(content)
        for block in blocks:
            inner = "".join(_run_markup(r) for r in block.runs)
            style = styles[_BLOCK_STYLES.get(block.kind, "BodyText")]
            if block.kind == "li":
                story.append(Paragraph(inner, style, bulletText="•"))
            else:
                story.append(Paragraph(inner, style))

        target = Path(target)
        doc = SimpleDocTemplate(str(target), pagesize=A4, title=title or "",
                                leftMargin=2 * cm, rightMargin=2 * cm, topMargin=2 * cm, bottomMargin=2 * cm)
        doc.build(story)
        return target
