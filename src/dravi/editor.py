"""Modal key dispatcher that owns the canvas, cursor and tool state."""
from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, Final, Mapping, Optional, Protocol, Tuple, Union

from .canvas import CanvasStore
from .coordinates import SYSTEM_BY_KEY, CoordinateSystem, CoordinateTransform
from .cursor import SCROLL_STEP, CursorController
from .exporter import DEFAULT_TITLE, TypstStyle, export_document
from .glyphs import GLYPH_BY_KEY, POINT, ROTATION_STEPS, Glyph, rotate
from .keys import KeyEvent, Modifier, NamedKey, build_keyboard_grid

LOGGER = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

HOT_PINK: Final[RGB] = (255, 105, 180)
HEX_INPUT_LIMIT: Final[int] = 6
COORDINATE_INPUT_LIMIT: Final[int] = 20
PAIRED_DELIMITERS: Final[Mapping[str, str]] = {
    "(": ")",
    "[": "]",
    "{": "}",
    "$": "$",
    '"': '"',
    "'": "'",
}

_HEX_CHARS: Final[frozenset[str]] = frozenset(string.hexdigits)
_COORDINATE_CHARS: Final[frozenset[str]] = frozenset(string.digits + ".,- ")
# Character chords holding these modifiers are dropped before dispatch.
_COMMAND_MODIFIERS: Final[frozenset[Modifier]] = frozenset({Modifier.CTRL, Modifier.ALT})


class EditorMode(Enum):
    """Mutually exclusive input modes."""

    DRAWING = auto()
    SELECTION = auto()
    COLOR_SELECTION = auto()
    COORDINATE_INPUT = auto()
    TYPST_INPUT = auto()
    SETTINGS = auto()
    PDF_RENDER = auto()


@dataclass
class FieldBuffer:
    """Bounded single-line input restricted to ``charset``."""

    limit: int
    charset: frozenset[str]
    uppercase: bool = False
    text: str = ""

    def push(self, char: str) -> bool:
        if char not in self.charset or len(self.text) >= self.limit:
            return False
        self.text += char.upper() if self.uppercase else char
        return True

    def pop(self) -> None:
        self.text = self.text[:-1]


@dataclass
class TextBuffer:
    """Free text with paired-delimiter completion."""

    text: str = ""

    def insert(self, char: str) -> None:
        self.text += char + PAIRED_DELIMITERS.get(char, "")

    def pop(self) -> None:
        self.text = self.text[:-1]


ModeBuffer = Union[FieldBuffer, TextBuffer, None]

_BUFFER_FACTORIES: Final[Dict[EditorMode, Callable[[], ModeBuffer]]] = {
    EditorMode.COLOR_SELECTION: lambda: FieldBuffer(
        HEX_INPUT_LIMIT, _HEX_CHARS, uppercase=True
    ),
    EditorMode.COORDINATE_INPUT: lambda: FieldBuffer(
        COORDINATE_INPUT_LIMIT, _COORDINATE_CHARS
    ),
    EditorMode.TYPST_INPUT: TextBuffer,
}


class DocumentSink(Protocol):
    """External collaborator that persists exports and opens the viewer."""

    def save(self, document: str) -> None: ...

    def open_viewer(self) -> None: ...


class NullSink:
    """Sink that drops every request; used when no publisher is wired."""

    def save(self, document: str) -> None:
        _ = document

    def open_viewer(self) -> None:
        return None


def parse_hex_color(text: str) -> Optional[RGB]:
    """Parse ``RRGGBB`` into an RGB triple, or ``None`` when malformed."""

    if len(text) != 6 or any(char not in _HEX_CHARS for char in text):
        return None
    return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))


Handler = Callable[[KeyEvent], None]


class EditorStateMachine:
    """Dispatch key events to per-mode handlers.

    Input errors never escape: malformed buffers and unmapped keys leave the
    editor state untouched.
    """

    def __init__(
        self,
        canvas: CanvasStore | None = None,
        *,
        keyboard_grid: Mapping[str, Tuple[int, int]] | None = None,
        sink: DocumentSink | None = None,
        title: str = DEFAULT_TITLE,
    ) -> None:
        self.canvas = canvas or CanvasStore()
        origin_x = self.canvas.width / 2
        origin_y = self.canvas.height / 2
        self.transform = CoordinateTransform(
            origin_x=origin_x,
            origin_y=origin_y,
            width=self.canvas.width,
            limit_y=self.canvas.virtual_height,
        )
        self.cursor = CursorController(self.canvas, origin_x, origin_y, brush=self.brush)
        self.keyboard_grid: Mapping[str, Tuple[int, int]] = (
            keyboard_grid if keyboard_grid is not None else build_keyboard_grid()
        )
        self.sink: DocumentSink = sink or NullSink()
        self.title = title

        self.mode = EditorMode.DRAWING
        self.buffer: ModeBuffer = None
        self.current_glyph: Glyph = POINT
        self.rotation_steps = 0
        self.current_color: RGB = HOT_PINK
        self.show_axes = True
        self.coordinate_system = CoordinateSystem.CARTESIAN
        self.should_quit = False

        self.handlers: Dict[EditorMode, Handler] = {
            EditorMode.DRAWING: self._handle_drawing,
            EditorMode.SELECTION: self._handle_selection,
            EditorMode.COLOR_SELECTION: self._handle_color_selection,
            EditorMode.COORDINATE_INPUT: self._handle_coordinate_input,
            EditorMode.TYPST_INPUT: self._handle_typst_input,
            EditorMode.SETTINGS: self._handle_settings,
            EditorMode.PDF_RENDER: self._handle_pdf_render,
        }
        self._toggle_keys: Dict[str, Callable[[], None]] = {
            "a": self.toggle_axes,
            "n": self.toggle_grid_snap,
            "d": self.toggle_continuous_draw,
        }
        self._drawing_keys: Dict[str, Callable[[], None]] = {
            "q": self.quit,
            "h": lambda: self.cursor.move_by(-1.0, 0.0),
            "j": lambda: self.cursor.move_by(0.0, 1.0),
            "k": lambda: self.cursor.move_by(0.0, -1.0),
            "l": lambda: self.cursor.move_by(1.0, 0.0),
            " ": self.place_glyph,
            "c": self.canvas.clear_all,
            "s": self.save,
            "o": self.set_origin_to_cursor,
            "J": lambda: self.cursor.scroll_by(SCROLL_STEP),
            "K": lambda: self.cursor.scroll_by(-SCROLL_STEP),
            "[": lambda: self.rotate_brush(-1),
            "]": lambda: self.rotate_brush(1),
            "f": lambda: self.enter_mode(EditorMode.SELECTION),
            "x": lambda: self.enter_mode(EditorMode.COLOR_SELECTION),
            "g": lambda: self.enter_mode(EditorMode.COORDINATE_INPUT),
            "i": lambda: self.enter_mode(EditorMode.TYPST_INPUT),
            "?": lambda: self.enter_mode(EditorMode.SETTINGS),
            "r": lambda: self.enter_mode(EditorMode.PDF_RENDER),
        }
        self._arrow_moves: Dict[NamedKey, Tuple[float, float]] = {
            NamedKey.LEFT: (-1.0, 0.0),
            NamedKey.DOWN: (0.0, 1.0),
            NamedKey.UP: (0.0, -1.0),
            NamedKey.RIGHT: (1.0, 0.0),
        }

    # Tool state -------------------------------------------------------------

    @property
    def continuous_draw(self) -> bool:
        return self.cursor.continuous_draw

    @continuous_draw.setter
    def continuous_draw(self, value: bool) -> None:
        self.cursor.continuous_draw = bool(value)

    @property
    def grid_snap(self) -> bool:
        return self.cursor.grid_snap

    @grid_snap.setter
    def grid_snap(self, value: bool) -> None:
        self.cursor.grid_snap = bool(value)

    @property
    def origin(self) -> Tuple[float, float]:
        return self.transform.origin_x, self.transform.origin_y

    @property
    def color_input(self) -> str:
        return self._buffer_text(EditorMode.COLOR_SELECTION)

    @property
    def coordinate_input(self) -> str:
        return self._buffer_text(EditorMode.COORDINATE_INPUT)

    @property
    def text_buffer(self) -> str:
        return self._buffer_text(EditorMode.TYPST_INPUT)

    def brush(self) -> Glyph:
        """The glyph written by placement and continuous drawing."""

        return rotate(self.current_glyph, self.rotation_steps)

    def rotate_brush(self, steps: int) -> None:
        self.rotation_steps = (self.rotation_steps + steps) % ROTATION_STEPS

    def toggle_axes(self) -> None:
        self.show_axes = not self.show_axes

    def toggle_grid_snap(self) -> None:
        self.grid_snap = not self.grid_snap

    def toggle_continuous_draw(self) -> None:
        self.continuous_draw = not self.continuous_draw

    def set_origin_to_cursor(self) -> None:
        self.transform.set_origin(self.cursor.x, self.cursor.y)

    def place_glyph(self) -> None:
        row, col = self.cursor.cell()
        self.canvas.place(row, col, self.brush())

    def quit(self) -> None:
        self.should_quit = True

    def current_coordinates(self) -> str:
        return self.transform.describe(self.cursor.x, self.cursor.y, self.coordinate_system)

    def export(self) -> str:
        style = TypstStyle(title=self.title, text_colour=self.current_color)
        return export_document(self.canvas, style)

    def save(self) -> None:
        self.sink.save(self.export())

    # Dispatch ---------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> EditorMode:
        """Route ``event`` to the active mode's handler and return the new mode."""

        if event.character is not None and event.modifiers & _COMMAND_MODIFIERS:
            modifiers = sorted(modifier.name for modifier in event.modifiers)
            LOGGER.debug("ignoring chord %r with %s", event.key, modifiers)
            return self.mode
        self.handlers[self.mode](event)
        return self.mode

    def enter_mode(self, mode: EditorMode) -> None:
        previous = self.mode
        self.mode = mode
        factory = _BUFFER_FACTORIES.get(mode)
        self.buffer = factory() if factory is not None else None
        LOGGER.debug("mode %s -> %s", previous.name, mode.name)
        if mode is EditorMode.PDF_RENDER and previous is not EditorMode.PDF_RENDER:
            self.sink.open_viewer()

    def _handle_drawing(self, event: KeyEvent) -> None:
        if isinstance(event.key, NamedKey):
            step = self._arrow_moves.get(event.key)
            if step is not None:
                self.cursor.move_by(*step)
            return
        char = event.key
        action = self._drawing_keys.get(char) or self._toggle_keys.get(char)
        if action is not None:
            action()
            return
        glyph = GLYPH_BY_KEY.get(char)
        if glyph is not None:
            self.current_glyph = glyph
            return
        system = SYSTEM_BY_KEY.get(char)
        if system is not None:
            self.coordinate_system = system

    def _handle_selection(self, event: KeyEvent) -> None:
        if event.is_named(NamedKey.ESC):
            self.enter_mode(EditorMode.DRAWING)
            return
        char = event.character
        if char is None or char not in self.keyboard_grid:
            return
        col, row = self.keyboard_grid[char]
        x = min(col, self.canvas.width - 1)
        y = self.cursor.scroll_y + min(row, self.canvas.height - 1)
        self.cursor.jump_to(float(x), float(y))
        self.enter_mode(EditorMode.DRAWING)

    def _handle_color_selection(self, event: KeyEvent) -> None:
        buffer = self._field_buffer()
        if event.is_named(NamedKey.ESC):
            self.enter_mode(EditorMode.DRAWING)
        elif event.is_named(NamedKey.ENTER):
            colour = parse_hex_color(buffer.text)
            if colour is not None:
                self.current_color = colour
            self.enter_mode(EditorMode.DRAWING)
        elif event.is_named(NamedKey.BACKSPACE):
            buffer.pop()
        elif event.character is not None:
            buffer.push(event.character)

    def _handle_coordinate_input(self, event: KeyEvent) -> None:
        buffer = self._field_buffer()
        if event.is_named(NamedKey.ESC):
            self.enter_mode(EditorMode.DRAWING)
        elif event.is_named(NamedKey.ENTER):
            target = self.transform.parse_target(buffer.text, self.coordinate_system)
            if target is not None:
                self.cursor.jump_to(*target)
            self.enter_mode(EditorMode.DRAWING)
        elif event.is_named(NamedKey.BACKSPACE):
            buffer.pop()
        elif event.character is not None:
            buffer.push(event.character)

    def _handle_typst_input(self, event: KeyEvent) -> None:
        buffer = self.buffer
        assert isinstance(buffer, TextBuffer)
        if event.is_named(NamedKey.ESC):
            self.enter_mode(EditorMode.DRAWING)
        elif event.is_named(NamedKey.ENTER):
            self._commit_text(buffer.text)
            self.enter_mode(EditorMode.DRAWING)
        elif event.is_named(NamedKey.BACKSPACE):
            if buffer.text:
                buffer.pop()
            else:
                self._erase_left()
        elif event.character is not None and event.character.isprintable():
            buffer.insert(event.character)

    def _handle_settings(self, event: KeyEvent) -> None:
        if event.is_named(NamedKey.ESC) or event.key == "?":
            self.enter_mode(EditorMode.DRAWING)
            return
        char = event.character
        if char is None:
            return
        toggle = self._toggle_keys.get(char)
        if toggle is not None:
            toggle()
            return
        system = SYSTEM_BY_KEY.get(char)
        if system is not None:
            self.coordinate_system = system

    def _handle_pdf_render(self, event: KeyEvent) -> None:
        if event.is_named(NamedKey.ESC) or event.key == "r":
            self.enter_mode(EditorMode.DRAWING)

    # Internal helpers -------------------------------------------------------

    def _buffer_text(self, mode: EditorMode) -> str:
        if self.mode is not mode or self.buffer is None:
            return ""
        return self.buffer.text

    def _field_buffer(self) -> FieldBuffer:
        buffer = self.buffer
        assert isinstance(buffer, FieldBuffer)
        return buffer

    def _commit_text(self, text: str) -> None:
        row, col = self.cursor.cell()
        last_col = self.canvas.width - 1
        for offset, char in enumerate(text):
            self.canvas.place(row, min(col + offset, last_col), Glyph.text(char))
        self.cursor.jump_to(self.transform.origin_x, self.cursor.y + 1.0)

    def _erase_left(self) -> None:
        # At column 0 the clamped jump stays put and the cell under the cursor is cleared.
        self.cursor.jump_to(self.cursor.x - 1.0, self.cursor.y)
        row, col = self.cursor.cell()
        self.canvas.clear(row, col)


__all__ = [
    "COORDINATE_INPUT_LIMIT",
    "DocumentSink",
    "EditorMode",
    "EditorStateMachine",
    "FieldBuffer",
    "HEX_INPUT_LIMIT",
    "HOT_PINK",
    "ModeBuffer",
    "NullSink",
    "PAIRED_DELIMITERS",
    "TextBuffer",
    "parse_hex_color",
]
