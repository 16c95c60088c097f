"""
===============================================================================
Rich-text markup <-> editor representation
-------------------------------------------------------------------------------
Stored document bodies are HTML fragments as produced by the authoring
surface. Editors work on a flat model:

    RichText = list[Block]
    Block    = kind ("p" | "h1" | "h2" | "h3" | "li") + list[Run]
    Run      = text + frozenset of inline styles ("bold", "italic", "underline")

`parse_markup` is lenient: unknown tags are dropped (their text is kept),
<script>/<style> bodies are skipped, <br> becomes a newline inside the run.
`serialize_blocks` produces the canonical fragment; consecutive list items
are wrapped in a single <ul>.
===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from html.parser import HTMLParser
from typing import FrozenSet, Iterable, List, Optional

BOLD = "bold"
ITALIC = "italic"
UNDERLINE = "underline"

INLINE_STYLES = (BOLD, ITALIC, UNDERLINE)
BLOCK_KINDS = ("p", "h1", "h2", "h3", "li")

_INLINE_TAGS = {
    "b": BOLD, "strong": BOLD,
    "i": ITALIC, "em": ITALIC,
    "u": UNDERLINE, "ins": UNDERLINE,
}
_STYLE_TAGS = {BOLD: "strong", ITALIC: "em", UNDERLINE: "u"}
_BLOCK_TAGS = {"p": "p", "div": "p", "h1": "h1", "h2": "h2", "h3": "h3", "li": "li"}
_SKIP_TAGS = {"script", "style"}


@dataclass(frozen=True, slots=True)
class Run:
    text: str
    styles: FrozenSet[str] = frozenset()


@dataclass(slots=True)
class Block:
    kind: str = "p"
    runs: List[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)

    def is_empty(self) -> bool:
        return not self.text.strip()


class _MarkupParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.blocks: List[Block] = []
        self._current: Optional[Block] = None
        self._styles: List[str] = []
        self._skip = 0

    # -- helpers ----------------------------------------------------------
    def _block(self) -> Block:
        if self._current is None:
            self._current = Block("p")
            self.blocks.append(self._current)
        return self._current

    def _close_block(self) -> None:
        self._current = None

    def _append(self, text: str) -> None:
        block = self._block()
        styles = frozenset(self._styles)
        if block.runs and block.runs[-1].styles == styles:
            block.runs[-1] = Run(block.runs[-1].text + text, styles)
        else:
            block.runs.append(Run(text, styles))

    # -- HTMLParser hooks -------------------------------------------------
    def handle_starttag(self, tag, attrs):  # noqa: D401
        if tag in _SKIP_TAGS:
            self._skip += 1
            return
        if tag in _INLINE_TAGS:
            self._styles.append(_INLINE_TAGS[tag])
        elif tag in _BLOCK_TAGS:
            self._close_block()
            self._current = Block(_BLOCK_TAGS[tag])
            self.blocks.append(self._current)
        elif tag == "br":
            self._append("\n")

    def handle_startendtag(self, tag, attrs):
        if tag == "br":
            self._append("\n")

    def handle_endtag(self, tag):
        if tag in _SKIP_TAGS:
            self._skip = max(0, self._skip - 1)
            return
        if tag in _INLINE_TAGS:
            style = _INLINE_TAGS[tag]
            # remove the innermost matching style; tolerate mis-nesting
            for idx in range(len(self._styles) - 1, -1, -1):
                if self._styles[idx] == style:
                    del self._styles[idx]
                    break
        elif tag in _BLOCK_TAGS or tag in ("ul", "ol"):
            self._close_block()

    def handle_data(self, data):
        if self._skip:
            return
        if self._current is None and not data.strip():
            return
        self._append(data)


def parse_markup(markup: Optional[str]) -> List[Block]:
    """HTML fragment -> blocks; blank input yields an empty list."""
    if not markup or not markup.strip():
        return []
    parser = _MarkupParser()
    parser.feed(markup)
    parser.close()
    return [b for b in parser.blocks if not b.is_empty()]


def _serialize_run(run: Run) -> str:
    text = escape(run.text, quote=False).replace("\n", "<br>")
    for style in INLINE_STYLES:
        if style in run.styles:
            tag = _STYLE_TAGS[style]
            text = f"<{tag}>{text}</{tag}>"
    return text


def serialize_blocks(blocks: Iterable[Block]) -> str:
    """Blocks -> canonical HTML fragment; empty blocks are dropped."""
    out: List[str] = []
    in_list = False
    for block in blocks:
        if block.is_empty():
            continue
        inner = "".join(_serialize_run(r) for r in block.runs if r.text)
        if block.kind == "li":
            if not in_list:
                out.append("<ul>")
                in_list = True
            out.append(f"<li>{inner}</li>")
            continue
        if in_list:
            out.append("</ul>")
            in_list = False
        kind = block.kind if block.kind in BLOCK_KINDS else "p"
        out.append(f"<{kind}>{inner}</{kind}>")
    if in_list:
        out.append("</ul>")
    return "".join(out)


def normalize_markup(markup: Optional[str]) -> str:
    """Canonical form of `markup`: supported blocks only, empty blocks dropped."""
    return serialize_blocks(parse_markup(markup))
