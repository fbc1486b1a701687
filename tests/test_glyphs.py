from __future__ import annotations

import pytest

from dravi.glyphs import (
    CROSS,
    DIAG_LEFT,
    DIAG_RIGHT,
    GLYPH_BY_KEY,
    HORIZONTAL,
    POINT,
    VERTICAL,
    Glyph,
    GlyphKind,
    display_char,
    rotate,
)


@pytest.mark.parametrize(
    ("glyph", "expected"),
    [
        (POINT, "•"),
        (HORIZONTAL, "-"),
        (VERTICAL, "|"),
        (CROSS, "+"),
        (DIAG_RIGHT, "/"),
        (DIAG_LEFT, "\\"),
        (Glyph.text("x"), "x"),
    ],
)
def test_display_character_per_kind(glyph: Glyph, expected: str) -> None:
    assert glyph.display == expected


def test_text_glyph_requires_single_character() -> None:
    with pytest.raises(ValueError):
        Glyph.text("ab")
    with pytest.raises(ValueError):
        Glyph(GlyphKind.TEXT)


def test_drawing_glyph_rejects_character_payload() -> None:
    with pytest.raises(ValueError):
        Glyph(GlyphKind.POINT, "x")


def test_glyph_keys_cover_every_drawing_kind() -> None:
    kinds = {glyph.kind for glyph in GLYPH_BY_KEY.values()}
    assert kinds == set(GlyphKind) - {GlyphKind.TEXT}


def test_rotation_cycles_line_glyphs_in_45_degree_steps() -> None:
    assert rotate(HORIZONTAL, 1) == DIAG_RIGHT
    assert rotate(HORIZONTAL, 2) == VERTICAL
    assert rotate(VERTICAL, 1) == DIAG_LEFT
    assert rotate(DIAG_LEFT, 1) == HORIZONTAL
    assert rotate(HORIZONTAL, -1) == DIAG_LEFT
    assert rotate(DIAG_RIGHT, 8) == DIAG_RIGHT


def test_rotation_leaves_symmetric_glyphs_unchanged() -> None:
    assert rotate(POINT, 3) == POINT
    assert rotate(CROSS, 1) == CROSS
    assert rotate(Glyph.text("q"), 2) == Glyph.text("q")


def test_names_and_empty_cells() -> None:
    assert DIAG_RIGHT.name == "diag-right"
    assert Glyph.text("z").name == "text(z)"
    assert display_char(None) == " "
    assert display_char(None, empty=".") == "."
    assert display_char(CROSS) == "+"
