"""Editor configuration loaded from TOML files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Tuple

import tomllib

from .canvas import DEFAULT_HEIGHT, DEFAULT_VIRTUAL_HEIGHT, DEFAULT_WIDTH
from .exporter import DEFAULT_TITLE
from .keys import (
    DEFAULT_COLUMN_SPACING,
    DEFAULT_KEYBOARD_ROWS,
    DEFAULT_ROW_SPACING,
    build_keyboard_grid,
)

DEFAULT_EXPORT_PATH = Path("drawing.typ")
DEFAULT_COMPILER: Tuple[str, ...] = ("typst", "compile")
DEFAULT_VIEWER: Tuple[str, ...] = ("tdf",)
DEFAULT_TERMINALS: Tuple[Tuple[str, ...], ...] = (
    ("alacritty", "-e"),
    ("gnome-terminal", "--"),
    ("xterm", "-e"),
    ("konsole", "-e"),
)


class EditorConfigError(ValueError):
    """Raised when an editor configuration file fails validation."""


@dataclass(frozen=True)
class CanvasConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    virtual_height: int = DEFAULT_VIRTUAL_HEIGHT


@dataclass(frozen=True)
class ExportConfig:
    """Where the Typst source goes and how it is compiled."""

    path: Path = DEFAULT_EXPORT_PATH
    title: str = DEFAULT_TITLE
    compiler: Tuple[str, ...] = DEFAULT_COMPILER

    @property
    def pdf_path(self) -> Path:
        return self.path.with_suffix(".pdf")


@dataclass(frozen=True)
class ViewerConfig:
    command: Tuple[str, ...] = DEFAULT_VIEWER
    terminals: Tuple[Tuple[str, ...], ...] = DEFAULT_TERMINALS


@dataclass(frozen=True)
class KeyboardConfig:
    rows: Tuple[str, ...] = DEFAULT_KEYBOARD_ROWS
    column_spacing: int = DEFAULT_COLUMN_SPACING
    row_spacing: int = DEFAULT_ROW_SPACING

    def grid(self) -> Mapping[str, Tuple[int, int]]:
        return build_keyboard_grid(
            self.rows,
            column_spacing=self.column_spacing,
            row_spacing=self.row_spacing,
        )


@dataclass(frozen=True)
class EditorConfig:
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    keyboard: KeyboardConfig = field(default_factory=KeyboardConfig)


def load_editor_config(config_path: Path) -> EditorConfig:
    """Parse and validate the editor configuration at ``config_path``."""

    try:
        with config_path.open("rb") as stream:
            raw_data = tomllib.load(stream)
    except tomllib.TOMLDecodeError as exc:
        raise EditorConfigError(f"{config_path}: {exc}") from exc

    return EditorConfig(
        canvas=_parse_canvas(_table(raw_data, "canvas")),
        export=_parse_export(_table(raw_data, "export"), base=config_path.parent),
        viewer=_parse_viewer(_table(raw_data, "viewer")),
        keyboard=_parse_keyboard(_table(raw_data, "keyboard")),
    )


def _table(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, Mapping):
        raise EditorConfigError(f"[{name}] section must be a table")
    return table


def _parse_canvas(table: Mapping[str, Any]) -> CanvasConfig:
    width = _positive_int(table, "canvas.width", DEFAULT_WIDTH)
    height = _positive_int(table, "canvas.height", DEFAULT_HEIGHT)
    virtual_height = _positive_int(
        table, "canvas.virtual_height", max(DEFAULT_VIRTUAL_HEIGHT, height)
    )
    if virtual_height < height:
        raise EditorConfigError(
            f"canvas.virtual_height ({virtual_height}) must be at least canvas.height ({height})"
        )
    return CanvasConfig(width=width, height=height, virtual_height=virtual_height)


def _parse_export(table: Mapping[str, Any], *, base: Path) -> ExportConfig:
    raw_path = table.get("path", str(DEFAULT_EXPORT_PATH))
    if not isinstance(raw_path, str) or not raw_path.strip():
        raise EditorConfigError("export.path must be a non-empty string")
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = base / path

    title = table.get("title", DEFAULT_TITLE)
    if not isinstance(title, str):
        raise EditorConfigError("export.title must be a string")

    compiler = _command(table, "export.compiler", DEFAULT_COMPILER)
    return ExportConfig(path=path, title=title, compiler=compiler)


def _parse_viewer(table: Mapping[str, Any]) -> ViewerConfig:
    command = _command(table, "viewer.command", DEFAULT_VIEWER)
    raw_terminals = table.get("terminals")
    if raw_terminals is None:
        return ViewerConfig(command=command)
    if not isinstance(raw_terminals, list):
        raise EditorConfigError("viewer.terminals must be an array of command arrays")
    terminals = []
    for index, entry in enumerate(raw_terminals, start=1):
        if not isinstance(entry, list) or not entry or not all(
            isinstance(part, str) for part in entry
        ):
            raise EditorConfigError(
                f"viewer.terminals entry #{index} must be a non-empty array of strings"
            )
        terminals.append(tuple(entry))
    return ViewerConfig(command=command, terminals=tuple(terminals))


def _parse_keyboard(table: Mapping[str, Any]) -> KeyboardConfig:
    rows = table.get("rows", list(DEFAULT_KEYBOARD_ROWS))
    if not isinstance(rows, list) or not all(isinstance(row, str) for row in rows):
        raise EditorConfigError("keyboard.rows must be an array of strings")
    column_spacing = _positive_int(table, "keyboard.column_spacing", DEFAULT_COLUMN_SPACING)
    row_spacing = _positive_int(table, "keyboard.row_spacing", DEFAULT_ROW_SPACING)
    return KeyboardConfig(
        rows=tuple(rows),
        column_spacing=column_spacing,
        row_spacing=row_spacing,
    )


def _positive_int(table: Mapping[str, Any], label: str, default: int) -> int:
    key = label.rsplit(".", 1)[-1]
    value = table.get(key, default)
    # ``bool`` is an ``int`` subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise EditorConfigError(f"{label} must be an integer")
    if value <= 0:
        raise EditorConfigError(f"{label} must be positive, received {value}")
    return value


def _command(
    table: Mapping[str, Any], label: str, default: Tuple[str, ...]
) -> Tuple[str, ...]:
    raw = table.get(label.rsplit(".", 1)[-1])
    if raw is None:
        return default
    if isinstance(raw, str):
        parts = raw.split()
    elif isinstance(raw, list) and all(isinstance(part, str) for part in raw):
        parts = list(raw)
    else:
        raise EditorConfigError(f"{label} must be a string or an array of strings")
    if not parts:
        raise EditorConfigError(f"{label} must not be empty")
    return tuple(parts)


__all__ = [
    "CanvasConfig",
    "EditorConfig",
    "EditorConfigError",
    "ExportConfig",
    "KeyboardConfig",
    "ViewerConfig",
    "load_editor_config",
]
