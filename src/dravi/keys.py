"""Key events delivered to the editor and the static keyboard-grid table."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Final, Iterable, Mapping, Union


class NamedKey(Enum):
    """Non-printing keys the editor reacts to."""

    ENTER = auto()
    ESC = auto()
    BACKSPACE = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()


class Modifier(Enum):
    SHIFT = auto()
    CTRL = auto()
    ALT = auto()


@dataclass(frozen=True)
class KeyEvent:
    """One discrete keystroke: a character or a :class:`NamedKey`."""

    key: Union[str, NamedKey]
    modifiers: frozenset[Modifier] = field(default_factory=frozenset)

    @classmethod
    def char(cls, value: str, *modifiers: Modifier) -> "KeyEvent":
        if len(value) != 1:
            raise ValueError("character key events carry exactly one character")
        return cls(value, frozenset(modifiers))

    @classmethod
    def named(cls, key: NamedKey, *modifiers: Modifier) -> "KeyEvent":
        return cls(key, frozenset(modifiers))

    @property
    def character(self) -> str | None:
        """The typed character, or ``None`` for named keys."""

        if isinstance(self.key, str):
            return self.key
        return None

    def is_named(self, key: NamedKey) -> bool:
        return self.key is key


DEFAULT_KEYBOARD_ROWS: Final[tuple[str, ...]] = (
    "qwertyuiop",
    "asdfghjkl;",
    "zxcvbnm,./",
)
DEFAULT_COLUMN_SPACING: Final[int] = 8
DEFAULT_ROW_SPACING: Final[int] = 13


def build_keyboard_grid(
    rows: Iterable[str] = DEFAULT_KEYBOARD_ROWS,
    *,
    column_spacing: int = DEFAULT_COLUMN_SPACING,
    row_spacing: int = DEFAULT_ROW_SPACING,
) -> Mapping[str, tuple[int, int]]:
    """Map each key of ``rows`` to a ``(col, row)`` canvas position."""

    grid: dict[str, tuple[int, int]] = {}
    for row_index, row in enumerate(rows):
        for col_index, char in enumerate(row):
            grid[char] = (col_index * column_spacing, row_index * row_spacing)
    return grid


__all__ = [
    "DEFAULT_COLUMN_SPACING",
    "DEFAULT_KEYBOARD_ROWS",
    "DEFAULT_ROW_SPACING",
    "KeyEvent",
    "Modifier",
    "NamedKey",
    "build_keyboard_grid",
]
