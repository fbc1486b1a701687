from __future__ import annotations

from dravi.canvas import CanvasStore
from dravi.exporter import (
    TypstStyle,
    classify_paragraph,
    export_body,
    export_document,
)
from dravi.glyphs import HORIZONTAL, POINT, Glyph


def write_text(canvas: CanvasStore, row: int, col: int, text: str) -> None:
    for offset, char in enumerate(text):
        if char != " ":
            canvas.place(row, col + offset, Glyph.text(char))


def test_drawing_only_canvas_is_fenced_verbatim() -> None:
    canvas = CanvasStore(5, 3, 3)
    canvas.place(0, 0, POINT)
    for col in range(1, 4):
        canvas.place(1, col, HORIZONTAL)

    assert export_body(canvas) == "```\n•\n ---\n\n```\n"


def test_text_canvas_is_split_into_classified_paragraphs() -> None:
    canvas = CanvasStore(20, 6, 6)
    write_text(canvas, 0, 2, "x = 2 + 3")
    write_text(canvas, 2, 0, "hello")
    write_text(canvas, 3, 4, "world")
    write_text(canvas, 5, 1, "$a^2$")

    assert export_body(canvas) == "$x = 2 + 3$\n\nhello world\n\n$a^2$\n"


def test_drawing_glyphs_next_to_text_are_kept() -> None:
    canvas = CanvasStore(10, 3, 3)
    write_text(canvas, 0, 0, "a")
    canvas.place(1, 3, HORIZONTAL)
    canvas.place(1, 4, HORIZONTAL)

    assert export_body(canvas) == "a --\n"


def test_paragraph_classification() -> None:
    assert classify_paragraph("y = x * 2") == "$y = x * 2$"
    assert classify_paragraph("$ sum_(i=1)^n i $") == "$ sum_(i=1)^n i $"
    assert classify_paragraph("a = b = c + 1") == "a = b = c + 1"
    assert classify_paragraph("x = 5") == "x = 5"
    assert classify_paragraph("a - b") == "a - b"


def test_preamble_uses_style_colour_and_title() -> None:
    style = TypstStyle(title="Homework", text_colour=(26, 43, 60))

    assert style.preamble() == (
        "#set page(margin: 0.5in, fill: black)\n"
        '#set text(size: 12pt, fill: rgb("#1a2b3c"))\n'
        "#set par(leading: 0.6em)\n"
        "\n"
        "= Homework\n"
        "\n"
    )


def test_empty_title_omits_heading() -> None:
    assert "=" not in TypstStyle(title="").preamble()


def test_export_document_joins_preamble_and_body() -> None:
    canvas = CanvasStore(3, 1, 1)
    canvas.place(0, 1, POINT)

    document = export_document(canvas)

    assert document.startswith('#set page(margin: 0.5in, fill: black)\n')
    assert 'rgb("#ff69b4")' in document
    assert "= Mathematical Calculations\n" in document
    assert document.endswith("```\n •\n```\n")
