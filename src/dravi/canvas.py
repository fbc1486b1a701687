"""Mutable glyph grid with a virtual height larger than the visible window."""
from __future__ import annotations

from typing import Final, Iterator, List, Optional, Tuple

from .glyphs import Glyph

DEFAULT_WIDTH: Final[int] = 80
DEFAULT_HEIGHT: Final[int] = 40
DEFAULT_VIRTUAL_HEIGHT: Final[int] = 200

Row = Tuple[Optional[Glyph], ...]


class CanvasStore:
    """Grid buffer indexed ``[row][col]``; row 0 is the top of the drawing."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        virtual_height: int = DEFAULT_VIRTUAL_HEIGHT,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be positive")
        if virtual_height < height:
            raise ValueError("virtual height must be at least the visible height")
        self.width = width
        self.height = height
        self.virtual_height = virtual_height
        self._cells: List[List[Optional[Glyph]]] = [
            [None] * width for _ in range(virtual_height)
        ]

    @property
    def max_scroll(self) -> int:
        return self.virtual_height - self.height

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.virtual_height and 0 <= col < self.width

    def place(self, row: int, col: int, glyph: Glyph) -> None:
        """Write ``glyph`` at ``(row, col)``; out-of-range cells are ignored."""

        if self.in_bounds(row, col):
            self._cells[row][col] = glyph

    def clear(self, row: int, col: int) -> None:
        if self.in_bounds(row, col):
            self._cells[row][col] = None

    def clear_all(self) -> None:
        for row in self._cells:
            row[:] = [None] * self.width

    def get(self, row: int, col: int) -> Optional[Glyph]:
        if not self.in_bounds(row, col):
            return None
        return self._cells[row][col]

    def rows(self) -> Iterator[Row]:
        for row in self._cells:
            yield tuple(row)

    def visible_rows(self, scroll_y: int) -> Tuple[Row, ...]:
        """Return the ``height`` rows starting at ``scroll_y``."""

        start = max(0, min(scroll_y, self.max_scroll))
        return tuple(tuple(row) for row in self._cells[start : start + self.height])

    def has_text(self) -> bool:
        return any(
            cell is not None and cell.is_text for row in self._cells for cell in row
        )


__all__ = [
    "CanvasStore",
    "DEFAULT_HEIGHT",
    "DEFAULT_VIRTUAL_HEIGHT",
    "DEFAULT_WIDTH",
    "Row",
]
