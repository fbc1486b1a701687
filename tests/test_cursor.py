from __future__ import annotations

from dravi.canvas import CanvasStore
from dravi.cursor import CursorController
from dravi.glyphs import DIAG_LEFT, POINT


def _cursor(x: float = 0.0, y: float = 0.0) -> CursorController:
    return CursorController(CanvasStore(10, 5, 20), x, y)


def _assert_visible(cursor: CursorController) -> None:
    row, _ = cursor.cell()
    assert cursor.scroll_y <= row < cursor.scroll_y + cursor.canvas.height
    assert 0 <= cursor.scroll_y <= cursor.canvas.max_scroll


def test_moves_are_clamped_to_the_virtual_canvas() -> None:
    cursor = _cursor()

    cursor.move_by(-5.0, -5.0)
    assert cursor.position == (0.0, 0.0)

    cursor.move_by(100.0, 100.0)
    assert cursor.position == (9.0, 19.0)
    assert cursor.scroll_y == 15
    _assert_visible(cursor)


def test_viewport_follows_the_cursor_in_both_directions() -> None:
    cursor = _cursor()

    for _ in range(7):
        cursor.move_by(0.0, 1.0)
        _assert_visible(cursor)
    assert cursor.scroll_y == 3

    cursor.jump_to(0.0, 1.0)
    assert cursor.scroll_y == 1
    _assert_visible(cursor)


def test_grid_snap_rounds_half_away_from_zero() -> None:
    cursor = _cursor(1.5, 1.5)
    cursor.grid_snap = True

    cursor.move_by(1.0, 0.0)

    assert cursor.position == (3.0, 2.0)
    assert cursor.previous_position == (1.5, 1.5)


def test_continuous_draw_rasterizes_the_step() -> None:
    canvas = CanvasStore(10, 5, 20)
    cursor = CursorController(canvas, 1.0, 1.0, brush=lambda: DIAG_LEFT)
    cursor.continuous_draw = True

    cursor.move_by(3.0, 0.0)

    assert [canvas.get(1, col) for col in range(1, 5)] == [DIAG_LEFT] * 4
    assert canvas.get(1, 5) is None


def test_jump_does_not_draw() -> None:
    canvas = CanvasStore(10, 5, 20)
    cursor = CursorController(canvas, 0.0, 0.0)
    cursor.continuous_draw = True

    cursor.jump_to(5.0, 3.0)

    assert all(cell is None for row in canvas.rows() for cell in row)
    assert cursor.cell() == (3, 5)


def test_default_brush_is_a_point() -> None:
    canvas = CanvasStore(10, 5, 20)
    cursor = CursorController(canvas)
    cursor.continuous_draw = True

    cursor.move_by(1.0, 0.0)

    assert canvas.get(0, 0) == POINT
    assert canvas.get(0, 1) == POINT


def test_manual_scroll_is_clamped_and_may_hide_the_cursor() -> None:
    cursor = _cursor()

    cursor.scroll_by(-3)
    assert cursor.scroll_y == 0

    cursor.scroll_by(100)
    assert cursor.scroll_y == 15
    assert not cursor.cursor_visible()

    cursor.move_by(0.0, 1.0)
    _assert_visible(cursor)
    assert cursor.scroll_y == 1


def test_single_step_stroke_covers_every_cell() -> None:
    canvas = CanvasStore(10, 5, 20)
    cursor = CursorController(canvas, 0.0, 0.0)
    cursor.continuous_draw = True

    cursor.move_by(3.0, 0.0)

    assert [canvas.get(0, col) for col in range(4)] == [POINT] * 4
