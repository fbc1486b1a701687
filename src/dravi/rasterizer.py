"""Bresenham rasterization used by continuous (freehand) drawing."""
from __future__ import annotations

from typing import List, Tuple

from .canvas import CanvasStore
from .glyphs import Glyph

Cell = Tuple[int, int]


def line_cells(start: Cell, end: Cell) -> List[Cell]:
    """Return the ``(col, row)`` cells from ``start`` to ``end`` inclusive.

    The walk always runs from the lexicographically smaller endpoint so that
    swapping the endpoints only reverses the result.
    """

    if end < start:
        return list(reversed(line_cells(end, start)))

    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    cells: List[Cell] = []
    x, y = x0, y0
    while True:
        cells.append((x, y))
        if x == x1 and y == y1:
            return cells
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy


def rasterize(
    canvas: CanvasStore,
    start: Tuple[float, float],
    end: Tuple[float, float],
    glyph: Glyph,
) -> int:
    """Write ``glyph`` along the line between two cursor positions.

    Positions are ``(x, y)`` pairs truncated to cells. Cells outside the
    canvas are skipped; the count of written cells is returned.
    """

    written = 0
    for col, row in line_cells(_truncate(start), _truncate(end)):
        if canvas.in_bounds(row, col):
            canvas.place(row, col, glyph)
            written += 1
    return written


def _truncate(position: Tuple[float, float]) -> Cell:
    return int(position[0]), int(position[1])


__all__ = ["Cell", "line_cells", "rasterize"]
