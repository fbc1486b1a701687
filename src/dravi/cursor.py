"""Cursor motion, grid snapping and viewport autoscroll."""
from __future__ import annotations

import math
from typing import Callable, Final, Optional, Tuple

from .canvas import CanvasStore
from .glyphs import POINT, Glyph
from .rasterizer import rasterize

SCROLL_STEP: Final[int] = 3


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


class CursorController:
    """Track the real-valued cursor and keep it visible inside the viewport."""

    def __init__(
        self,
        canvas: CanvasStore,
        x: float = 0.0,
        y: float = 0.0,
        *,
        brush: Optional[Callable[[], Glyph]] = None,
    ) -> None:
        self.canvas = canvas
        self.scroll_y = 0
        self.grid_snap = False
        self.continuous_draw = False
        self._brush = brush or (lambda: POINT)
        self.x, self.y = self._clamp(x, y)
        self.last_x, self.last_y = self.x, self.y
        self._follow()

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def previous_position(self) -> Tuple[float, float]:
        return self.last_x, self.last_y

    def cell(self) -> Tuple[int, int]:
        """Return the ``(row, col)`` cell under the cursor."""

        return int(self.y), int(self.x)

    def move_by(self, dx: float, dy: float) -> None:
        """Step the cursor, snapping and drawing according to the toggles."""

        self.last_x, self.last_y = self.x, self.y
        new_x = self.x + dx
        new_y = self.y + dy
        if self.grid_snap:
            new_x = _round_half_away(new_x)
            new_y = _round_half_away(new_y)
        self.x, self.y = self._clamp(new_x, new_y)
        self._follow()
        if self.continuous_draw:
            rasterize(self.canvas, self.previous_position, self.position, self._brush())

    def jump_to(self, x: float, y: float) -> None:
        """Reposition without drawing; the viewport still follows."""

        self.last_x, self.last_y = self.x, self.y
        self.x, self.y = self._clamp(x, y)
        self._follow()

    def scroll_by(self, delta: int) -> None:
        self.scroll_y = max(0, min(self.scroll_y + delta, self.canvas.max_scroll))

    def cursor_visible(self) -> bool:
        row = int(self.y)
        return self.scroll_y <= row < self.scroll_y + self.canvas.height

    def _clamp(self, x: float, y: float) -> Tuple[float, float]:
        return (
            min(max(x, 0.0), float(self.canvas.width - 1)),
            min(max(y, 0.0), float(self.canvas.virtual_height - 1)),
        )

    def _follow(self) -> None:
        row = int(self.y)
        last_visible = self.scroll_y + self.canvas.height - 1
        if row < self.scroll_y:
            self.scroll_y = row
        elif row > last_visible:
            self.scroll_y = min(row + 1 - self.canvas.height, self.canvas.max_scroll)


__all__ = ["CursorController", "SCROLL_STEP"]
