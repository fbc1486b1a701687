"""Glyph vocabulary shared by the canvas, exporter and console renderer."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional


class GlyphKind(Enum):
    """Drawable mark kinds a canvas cell can hold."""

    POINT = "point"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    CROSS = "cross"
    DIAG_RIGHT = "diag-right"
    DIAG_LEFT = "diag-left"
    TEXT = "text"


_DISPLAY_CHARS: Final[dict[GlyphKind, str]] = {
    GlyphKind.POINT: "•",
    GlyphKind.HORIZONTAL: "-",
    GlyphKind.VERTICAL: "|",
    GlyphKind.CROSS: "+",
    GlyphKind.DIAG_RIGHT: "/",
    GlyphKind.DIAG_LEFT: "\\",
}

# Counter-clockwise order of the line glyphs in 45 degree steps.
_ROTATION_CYCLE: Final[tuple[GlyphKind, ...]] = (
    GlyphKind.HORIZONTAL,
    GlyphKind.DIAG_RIGHT,
    GlyphKind.VERTICAL,
    GlyphKind.DIAG_LEFT,
)

ROTATION_STEPS: Final[int] = 8


@dataclass(frozen=True, slots=True)
class Glyph:
    """Immutable mark stored in a canvas cell."""

    kind: GlyphKind
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is GlyphKind.TEXT:
            if self.char is None or len(self.char) != 1:
                raise ValueError("text glyphs carry exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} glyphs do not carry a character")

    @classmethod
    def text(cls, char: str) -> "Glyph":
        return cls(GlyphKind.TEXT, char)

    @property
    def is_text(self) -> bool:
        return self.kind is GlyphKind.TEXT

    @property
    def display(self) -> str:
        """Character used when the glyph is painted or exported."""

        if self.char is not None:
            return self.char
        return _DISPLAY_CHARS[self.kind]

    @property
    def name(self) -> str:
        if self.char is not None:
            return f"text({self.char})"
        return self.kind.value


POINT: Final[Glyph] = Glyph(GlyphKind.POINT)
HORIZONTAL: Final[Glyph] = Glyph(GlyphKind.HORIZONTAL)
VERTICAL: Final[Glyph] = Glyph(GlyphKind.VERTICAL)
CROSS: Final[Glyph] = Glyph(GlyphKind.CROSS)
DIAG_RIGHT: Final[Glyph] = Glyph(GlyphKind.DIAG_RIGHT)
DIAG_LEFT: Final[Glyph] = Glyph(GlyphKind.DIAG_LEFT)

# Drawing-mode keys that select the active glyph.
GLYPH_BY_KEY: Final[dict[str, Glyph]] = {
    ".": POINT,
    "-": HORIZONTAL,
    "|": VERTICAL,
    "+": CROSS,
    "/": DIAG_RIGHT,
    "\\": DIAG_LEFT,
}


def rotate(glyph: Glyph, steps: int) -> Glyph:
    """Rotate ``glyph`` counter-clockwise by ``steps`` multiples of 45 degrees."""

    if glyph.kind not in _ROTATION_CYCLE:
        return glyph
    index = _ROTATION_CYCLE.index(glyph.kind)
    rotated = _ROTATION_CYCLE[(index + steps) % len(_ROTATION_CYCLE)]
    return Glyph(rotated)


def display_char(cell: Optional[Glyph], empty: str = " ") -> str:
    if cell is None:
        return empty
    return cell.display


__all__ = [
    "CROSS",
    "DIAG_LEFT",
    "DIAG_RIGHT",
    "GLYPH_BY_KEY",
    "Glyph",
    "GlyphKind",
    "HORIZONTAL",
    "POINT",
    "ROTATION_STEPS",
    "VERTICAL",
    "display_char",
    "rotate",
]
