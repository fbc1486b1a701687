"""Serialize the canvas into a Typst document.

Two disjoint layouts exist. A canvas holding only drawing glyphs is written
as a fenced verbatim block of fixed-width rows. As soon as one text glyph is
present the grid is read back as prose instead: rows are joined into
paragraphs (blank rows separate them) and each paragraph is classified as
pre-formatted math, an inline equation or plain text.

The classification is a best-effort reconstruction of what the author meant;
it can misread prose that happens to contain a lone ``=`` next to an
arithmetic sign.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Optional, Sequence, Tuple

from .canvas import CanvasStore, Row
from .glyphs import display_char

FENCE: Final[str] = "```"
DEFAULT_TITLE: Final[str] = "Mathematical Calculations"
_ARITHMETIC: Final[str] = "+-*/"

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class TypstStyle:
    """Preamble settings written ahead of the exported body."""

    title: str = DEFAULT_TITLE
    text_colour: RGB = (255, 105, 180)
    margin: str = "0.5in"
    page_fill: str = "black"
    text_size: str = "12pt"
    leading: str = "0.6em"

    def preamble(self) -> str:
        red, green, blue = self.text_colour
        lines = [
            f"#set page(margin: {self.margin}, fill: {self.page_fill})",
            f'#set text(size: {self.text_size}, fill: rgb("#{red:02x}{green:02x}{blue:02x}"))',
            f"#set par(leading: {self.leading})",
            "",
        ]
        if self.title:
            lines.extend([f"= {self.title}", ""])
        return "\n".join(lines) + "\n"


def export_document(canvas: CanvasStore, style: Optional[TypstStyle] = None) -> str:
    """Return the full Typst source for ``canvas``."""

    style = style or TypstStyle()
    return style.preamble() + export_body(canvas)


def export_body(canvas: CanvasStore) -> str:
    if canvas.has_text():
        return render_paragraphs(canvas.rows())
    return render_verbatim(canvas.rows())


def render_verbatim(rows: Iterable[Row]) -> str:
    lines = [FENCE]
    for row in rows:
        lines.append("".join(display_char(cell) for cell in row).rstrip())
    lines.append(FENCE)
    return "\n".join(lines) + "\n"


def render_paragraphs(rows: Iterable[Row]) -> str:
    blocks = [classify_paragraph(paragraph) for paragraph in collect_paragraphs(rows)]
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def collect_paragraphs(rows: Iterable[Row]) -> List[str]:
    """Join consecutive non-blank rows with single spaces."""

    paragraphs: List[str] = []
    current: List[str] = []
    for row in rows:
        line = row_text(row)
        if line:
            current.append(line)
        elif current:
            paragraphs.append(" ".join(current))
            current = []
    if current:
        paragraphs.append(" ".join(current))
    return paragraphs


def row_text(row: Sequence) -> str:
    occupied = [index for index, cell in enumerate(row) if cell is not None]
    if not occupied:
        return ""
    span = row[occupied[0] : occupied[-1] + 1]
    return "".join(display_char(cell) for cell in span).strip()


def classify_paragraph(paragraph: str) -> str:
    text = paragraph.strip()
    if "$" in text:
        return text
    if text.count("=") == 1 and any(sign in text for sign in _ARITHMETIC):
        return f"${text}$"
    return text


__all__ = [
    "DEFAULT_TITLE",
    "FENCE",
    "TypstStyle",
    "classify_paragraph",
    "collect_paragraphs",
    "export_body",
    "export_document",
    "render_paragraphs",
    "render_verbatim",
    "row_text",
]
