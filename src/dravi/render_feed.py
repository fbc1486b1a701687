"""Read-only snapshot of editor state consumed by the console renderer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping, Optional, Tuple

from .canvas import Row
from .coordinates import SYSTEM_BY_KEY, CoordinateSystem
from .editor import HOT_PINK, RGB, EditorMode, EditorStateMachine

CURSOR_COLOURS: Final[Mapping[EditorMode, RGB]] = {
    EditorMode.DRAWING: HOT_PINK,
    EditorMode.SELECTION: (255, 255, 0),
    EditorMode.COLOR_SELECTION: (0, 255, 255),
    EditorMode.TYPST_INPUT: (0, 255, 0),
    EditorMode.COORDINATE_INPUT: (255, 0, 255),
    EditorMode.SETTINGS: (0, 0, 255),
    EditorMode.PDF_RENDER: (255, 255, 255),
}

DRAWING_HELP: Final[str] = (
    "hjkl:move | space:draw | i:text | g:goto | s:save | x:color | "
    "J/K:scroll | ?:settings | q:quit"
)

Cell = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class EditorFrame:
    """Everything needed to paint one frame; positions are window-relative."""

    rows: Tuple[Row, ...]
    scroll_y: int
    mode: EditorMode
    cursor: Optional[Cell]
    cursor_colour: RGB
    glyph_colour: RGB
    show_axes: bool
    origin: Optional[Cell]
    status_text: str
    settings_lines: Tuple[str, ...]
    keyboard_overlay: Tuple[Tuple[int, int, str], ...]


def capture_frame(editor: EditorStateMachine) -> EditorFrame:
    canvas = editor.canvas
    cursor = editor.cursor
    scroll_y = cursor.scroll_y

    cursor_cell: Optional[Cell] = None
    if cursor.cursor_visible():
        row, col = cursor.cell()
        cursor_cell = (row - scroll_y, col)

    origin_x, origin_y = editor.origin
    origin_row = int(origin_y) - scroll_y
    origin_cell: Optional[Cell] = None
    if 0 <= origin_row < canvas.height:
        origin_cell = (origin_row, int(origin_x))

    overlay: Tuple[Tuple[int, int, str], ...] = ()
    if editor.mode is EditorMode.SELECTION:
        overlay = tuple(
            (row, col, char)
            for char, (col, row) in sorted(editor.keyboard_grid.items())
            if col < canvas.width and row < canvas.height
        )

    return EditorFrame(
        rows=canvas.visible_rows(scroll_y),
        scroll_y=scroll_y,
        mode=editor.mode,
        cursor=cursor_cell,
        cursor_colour=CURSOR_COLOURS[editor.mode],
        glyph_colour=editor.current_color,
        show_axes=editor.show_axes,
        origin=origin_cell,
        status_text=status_text(editor),
        settings_lines=settings_lines(editor) if editor.mode is EditorMode.SETTINGS else (),
        keyboard_overlay=overlay,
    )


def status_text(editor: EditorStateMachine) -> str:
    mode = editor.mode
    if mode is EditorMode.DRAWING:
        return f"{DRAWING_HELP} | Drawing: {editor.brush().name} | {editor.current_coordinates()}"
    if mode is EditorMode.SELECTION:
        return "Selection mode - press any key to jump to that position, Esc to cancel"
    if mode is EditorMode.COLOR_SELECTION:
        return f"Color (hex): {editor.color_input} | Enter to apply, Esc to cancel"
    if mode is EditorMode.TYPST_INPUT:
        return (
            f"Typst mode: {editor.text_buffer} | Enter to place, use $ for math, "
            "Backspace to edit, Esc to exit"
        )
    if mode is EditorMode.SETTINGS:
        return "Settings mode - use keys shown in popup to toggle options, ? or Esc to close"
    if mode is EditorMode.PDF_RENDER:
        return "PDF Render mode - viewing compiled PDF. Press r or Esc to return to drawing"
    hint = editor.coordinate_system.hint
    return f"Go to ({hint}): {editor.coordinate_input} | Enter to move, Esc to cancel"


def settings_lines(editor: EditorStateMachine) -> Tuple[str, ...]:
    def on_off(flag: bool) -> str:
        return "ON" if flag else "OFF"

    def radio(key: str, system: CoordinateSystem) -> str:
        mark = "◉" if editor.coordinate_system is system else "○"
        return f"[{key}] {system.label} {mark}"

    return (
        "Settings (Press key to toggle):",
        "",
        f"[a] Axes: {on_off(editor.show_axes)}",
        f"[n] Grid Snap: {on_off(editor.grid_snap)}",
        f"[d] Continuous: {on_off(editor.continuous_draw)}",
        "",
        "Coordinate System:",
        *(radio(key, system) for key, system in SYSTEM_BY_KEY.items()),
        "",
        "Press ? or Esc to close",
    )


__all__ = [
    "CURSOR_COLOURS",
    "DRAWING_HELP",
    "EditorFrame",
    "capture_frame",
    "settings_lines",
    "status_text",
]
