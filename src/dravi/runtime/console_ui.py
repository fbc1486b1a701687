"""Curses front end that paints editor frames and feeds it keystrokes."""

from __future__ import annotations

import curses
import logging
from typing import Dict, Optional, Tuple, Union

from ..editor import RGB, EditorStateMachine
from ..keys import KeyEvent, Modifier, NamedKey
from ..render_feed import EditorFrame, capture_frame

LOGGER = logging.getLogger(__name__)

__all__ = ["DraviConsoleApp", "nearest_curses_colour", "translate_key"]

_NAMED_CHARS: Dict[str, NamedKey] = {
    "\x1b": NamedKey.ESC,
    "\n": NamedKey.ENTER,
    "\r": NamedKey.ENTER,
    "\x7f": NamedKey.BACKSPACE,
    "\x08": NamedKey.BACKSPACE,
}

_NAMED_CODES: Dict[int, NamedKey] = {
    curses.KEY_ENTER: NamedKey.ENTER,
    curses.KEY_BACKSPACE: NamedKey.BACKSPACE,
    curses.KEY_EXIT: NamedKey.ESC,
    curses.KEY_LEFT: NamedKey.LEFT,
    curses.KEY_RIGHT: NamedKey.RIGHT,
    curses.KEY_UP: NamedKey.UP,
    curses.KEY_DOWN: NamedKey.DOWN,
}

_SHIFTED_CODES: Dict[int, NamedKey] = {
    curses.KEY_SLEFT: NamedKey.LEFT,
    curses.KEY_SRIGHT: NamedKey.RIGHT,
    curses.KEY_SR: NamedKey.UP,
    curses.KEY_SF: NamedKey.DOWN,
}

_BASIC_COLOURS: Tuple[Tuple[int, RGB], ...] = (
    (curses.COLOR_BLACK, (0, 0, 0)),
    (curses.COLOR_RED, (255, 0, 0)),
    (curses.COLOR_GREEN, (0, 255, 0)),
    (curses.COLOR_YELLOW, (255, 255, 0)),
    (curses.COLOR_BLUE, (0, 0, 255)),
    (curses.COLOR_MAGENTA, (255, 0, 255)),
    (curses.COLOR_CYAN, (0, 255, 255)),
    (curses.COLOR_WHITE, (255, 255, 255)),
)

_FRAME_RGB: RGB = (100, 149, 237)
_AXIS_RGB: RGB = (255, 0, 0)
_OVERLAY_RGB: RGB = (0, 255, 0)
_SETTINGS_WIDTH = 30


def translate_key(raw: Union[int, str]) -> Optional[KeyEvent]:
    """Convert a ``get_wch`` result into a :class:`KeyEvent`."""

    if isinstance(raw, str):
        named = _NAMED_CHARS.get(raw)
        if named is not None:
            return KeyEvent.named(named)
        if len(raw) == 1 and raw.isprintable():
            return KeyEvent.char(raw)
        if len(raw) == 1 and 1 <= ord(raw) <= 26:
            # Ctrl+letter arrives as the matching control code.
            return KeyEvent.char(chr(ord(raw) + 96), Modifier.CTRL)
        return None
    named = _NAMED_CODES.get(raw)
    if named is not None:
        return KeyEvent.named(named)
    shifted = _SHIFTED_CODES.get(raw)
    if shifted is not None:
        return KeyEvent.named(shifted, Modifier.SHIFT)
    return None


def nearest_curses_colour(rgb: RGB) -> int:
    """Pick the basic curses colour closest to ``rgb``."""

    red, green, blue = rgb
    return min(
        _BASIC_COLOURS,
        key=lambda entry: (entry[1][0] - red) ** 2
        + (entry[1][1] - green) ** 2
        + (entry[1][2] - blue) ** 2,
    )[0]


class DraviConsoleApp:
    """Drive :class:`EditorStateMachine` inside a curses window."""

    def __init__(
        self,
        editor: EditorStateMachine,
        *,
        refresh_interval: float = 0.016,
    ) -> None:
        self.editor = editor
        self.refresh_interval = float(refresh_interval)
        self._colour_pairs: Dict[int, int] = {}
        self._colours_enabled = False
        self._background = -1

    def run(self) -> None:
        """Enter the curses event loop until the editor asks to quit."""

        curses.wrapper(self._run_loop)

    def _run_loop(self, stdscr: "curses.window") -> None:
        self._setup(stdscr)
        while not self.editor.should_quit:
            self.render_frame(stdscr, capture_frame(self.editor))
            try:
                self._poll_input(stdscr)
            except KeyboardInterrupt:
                self.editor.quit()

    def _setup(self, stdscr: "curses.window") -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.set_escdelay(25)
        stdscr.keypad(True)
        stdscr.timeout(max(1, int(self.refresh_interval * 1000)))
        if curses.has_colors():
            curses.start_color()
            try:
                curses.use_default_colors()
            except curses.error:
                self._background = curses.COLOR_BLACK
            self._colours_enabled = True

    def _poll_input(self, stdscr: "curses.window") -> None:
        try:
            raw = stdscr.get_wch()
        except curses.error:
            return
        event = translate_key(raw)
        if event is None:
            return
        mode = self.editor.handle_key(event)
        LOGGER.debug("key %r handled in %s", event.key, mode.name)

    # Rendering -------------------------------------------------------------

    def render_frame(self, stdscr: "curses.window", frame: EditorFrame) -> None:
        """Translate ``frame`` into curses window updates."""

        stdscr.erase()
        canvas_width = self.editor.canvas.width
        canvas_height = len(frame.rows)
        frame_attr = self._attr(_FRAME_RGB)
        self._box(stdscr, 0, 0, canvas_height + 2, canvas_width + 2, frame_attr)
        self._addstr(stdscr, 0, 2, " DraVi - Mathematical Drawing Tool ", frame_attr)

        if frame.show_axes and frame.origin is not None:
            self._paint_axes(stdscr, frame, canvas_width)

        glyph_attr = self._attr(frame.glyph_colour)
        for row_index, row in enumerate(frame.rows):
            for col_index, cell in enumerate(row):
                if cell is not None:
                    self._addstr(stdscr, row_index + 1, col_index + 1, cell.display, glyph_attr)

        overlay_attr = self._attr(_OVERLAY_RGB) | curses.A_BOLD
        for row_index, col_index, char in frame.keyboard_overlay:
            self._addstr(stdscr, row_index + 1, col_index + 1, char, overlay_attr)

        if frame.cursor is not None:
            row_index, col_index = frame.cursor
            cell = frame.rows[row_index][col_index]
            char = cell.display if cell is not None else " "
            attrs = self._attr(frame.cursor_colour) | curses.A_REVERSE
            self._addstr(stdscr, row_index + 1, col_index + 1, char, attrs)

        if frame.settings_lines:
            self._paint_settings(stdscr, frame, canvas_width + 2, canvas_height + 2)

        status_row = canvas_height + 2
        self._box(stdscr, status_row, 0, 3, canvas_width + 2, frame_attr)
        self._addstr(stdscr, status_row + 1, 1, frame.status_text[:canvas_width])
        stdscr.refresh()

    def _paint_axes(self, stdscr: "curses.window", frame: EditorFrame, width: int) -> None:
        assert frame.origin is not None
        origin_row, origin_col = frame.origin
        attrs = self._attr(_AXIS_RGB) | curses.A_DIM
        for col_index in range(width):
            if frame.rows[origin_row][col_index] is None:
                self._addch(stdscr, origin_row + 1, col_index + 1, curses.ACS_HLINE, attrs)
        if 0 <= origin_col < width:
            for row_index, row in enumerate(frame.rows):
                if row[origin_col] is None:
                    self._addch(stdscr, row_index + 1, origin_col + 1, curses.ACS_VLINE, attrs)
            if frame.rows[origin_row][origin_col] is None:
                self._addch(stdscr, origin_row + 1, origin_col + 1, curses.ACS_PLUS, attrs)

    def _paint_settings(
        self, stdscr: "curses.window", frame: EditorFrame, left: int, height: int
    ) -> None:
        frame_attr = self._attr(_FRAME_RGB)
        self._box(stdscr, 0, left, height, _SETTINGS_WIDTH, frame_attr)
        self._addstr(stdscr, 0, left + 2, " Settings ", frame_attr)
        for index, line in enumerate(frame.settings_lines):
            self._addstr(stdscr, index + 1, left + 1, line[: _SETTINGS_WIDTH - 2])

    # Internal helpers ------------------------------------------------------

    def _attr(self, rgb: RGB) -> int:
        if not self._colours_enabled:
            return curses.A_NORMAL
        colour = nearest_curses_colour(rgb)
        pair = self._colour_pairs.get(colour)
        if pair is None:
            pair = len(self._colour_pairs) + 1
            try:
                curses.init_pair(pair, colour, self._background)
            except curses.error:
                return curses.A_NORMAL
            self._colour_pairs[colour] = pair
        return curses.color_pair(pair)

    def _box(
        self,
        stdscr: "curses.window",
        top: int,
        left: int,
        height: int,
        width: int,
        attrs: int,
    ) -> None:
        bottom = top + height - 1
        right = left + width - 1
        for col in range(left + 1, right):
            self._addch(stdscr, top, col, curses.ACS_HLINE, attrs)
            self._addch(stdscr, bottom, col, curses.ACS_HLINE, attrs)
        for row in range(top + 1, bottom):
            self._addch(stdscr, row, left, curses.ACS_VLINE, attrs)
            self._addch(stdscr, row, right, curses.ACS_VLINE, attrs)
        self._addch(stdscr, top, left, curses.ACS_ULCORNER, attrs)
        self._addch(stdscr, top, right, curses.ACS_URCORNER, attrs)
        self._addch(stdscr, bottom, left, curses.ACS_LLCORNER, attrs)
        self._addch(stdscr, bottom, right, curses.ACS_LRCORNER, attrs)

    def _addstr(
        self,
        stdscr: "curses.window",
        row: int,
        col: int,
        text: str,
        attrs: int = curses.A_NORMAL,
    ) -> None:
        # Terminals smaller than the canvas clip instead of failing.
        try:
            stdscr.addstr(row, col, text, attrs)
        except curses.error:
            pass

    def _addch(
        self, stdscr: "curses.window", row: int, col: int, char: int, attrs: int
    ) -> None:
        try:
            stdscr.addch(row, col, char, attrs)
        except curses.error:
            pass
