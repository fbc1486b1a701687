from __future__ import annotations

from dravi.editor import EditorMode, EditorStateMachine
from dravi.keys import KeyEvent
from dravi.render_feed import CURSOR_COLOURS, DRAWING_HELP, capture_frame, status_text


def test_drawing_frame_reports_cursor_origin_and_status(editor: EditorStateMachine) -> None:
    frame = capture_frame(editor)

    assert frame.mode is EditorMode.DRAWING
    assert frame.cursor == (20, 40)
    assert frame.origin == (20, 40)
    assert frame.cursor_colour == CURSOR_COLOURS[EditorMode.DRAWING]
    assert frame.glyph_colour == editor.current_color
    assert frame.show_axes
    assert frame.keyboard_overlay == ()
    assert frame.settings_lines == ()
    assert len(frame.rows) == editor.canvas.height
    assert frame.status_text == f"{DRAWING_HELP} | Drawing: point | (0.0, 0.0)"


def test_scrolled_frame_hides_offscreen_cursor_and_origin(editor: EditorStateMachine) -> None:
    editor.cursor.scroll_by(30)

    frame = capture_frame(editor)

    assert frame.scroll_y == 30
    assert frame.cursor is None
    assert frame.origin is None


def test_selection_frame_carries_keyboard_overlay(editor: EditorStateMachine) -> None:
    editor.handle_key(KeyEvent.char("f"))

    frame = capture_frame(editor)

    assert (0, 0, "q") in frame.keyboard_overlay
    assert (26, 0, "z") in frame.keyboard_overlay
    assert len(frame.keyboard_overlay) == 30


def test_settings_frame_lists_toggles(editor: EditorStateMachine) -> None:
    editor.handle_key(KeyEvent.char("?"))
    editor.handle_key(KeyEvent.char("n"))

    frame = capture_frame(editor)

    assert "[a] Axes: ON" in frame.settings_lines
    assert "[n] Grid Snap: ON" in frame.settings_lines
    assert "[d] Continuous: OFF" in frame.settings_lines
    assert "[1] Cartesian ◉" in frame.settings_lines
    assert "[2] Polar ○" in frame.settings_lines
    assert "[3] Cylindrical ○" in frame.settings_lines


def test_status_text_echoes_mode_buffers(editor: EditorStateMachine) -> None:
    for key in "x1a":
        editor.handle_key(KeyEvent.char(key))
    assert status_text(editor).startswith("Color (hex): 1A |")

    editor.enter_mode(EditorMode.COORDINATE_INPUT)
    editor.handle_key(KeyEvent.char("7"))
    assert status_text(editor).startswith("Go to (x,y): 7 |")

    editor.enter_mode(EditorMode.TYPST_INPUT)
    editor.handle_key(KeyEvent.char("$"))
    assert status_text(editor).startswith("Typst mode: $$ |")
