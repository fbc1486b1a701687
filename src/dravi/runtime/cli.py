"""Command-line entry point for the DraVi drawing editor."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from ..canvas import CanvasStore
from ..config import EditorConfig, EditorConfigError, load_editor_config
from ..editor import EditorStateMachine
from .publisher import DocumentPublisher

LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments for the editor CLI."""

    parser = argparse.ArgumentParser(
        prog="dravi",
        description="Terminal editor for ASCII-art and mathematical diagrams.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML file with canvas, export, viewer and keyboard settings",
    )
    parser.add_argument(
        "--export-path",
        type=Path,
        default=None,
        help="Where the Typst source is written on save (default: drawing.typ)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=_LOG_LEVELS,
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write log records to this file; without it records are discarded",
    )
    return parser.parse_args(argv)


def configure_logging(level: str, log_file: Path | None) -> None:
    package_logger = logging.getLogger("dravi")
    if log_file is None:
        # The curses screen owns the terminal, so nothing may go to stderr.
        package_logger.addHandler(logging.NullHandler())
        package_logger.setLevel(getattr(logging, level))
        package_logger.propagate = False
        return
    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def resolve_config(args: argparse.Namespace) -> EditorConfig:
    """Load ``--config`` (if any) and apply command-line overrides."""

    config = EditorConfig()
    if args.config is not None:
        config = load_editor_config(args.config)
    if args.export_path is not None:
        config = replace(config, export=replace(config.export, path=args.export_path))
    return config


def build_editor(config: EditorConfig) -> EditorStateMachine:
    canvas = CanvasStore(
        config.canvas.width,
        config.canvas.height,
        config.canvas.virtual_height,
    )
    publisher = DocumentPublisher(config.export, config.viewer)
    return EditorStateMachine(
        canvas,
        keyboard_grid=config.keyboard.grid(),
        sink=publisher,
        title=config.export.title,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the editor CLI."""

    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    try:
        config = resolve_config(args)
    except (EditorConfigError, OSError) as exc:
        print(f"dravi: invalid configuration: {exc}", file=sys.stderr)
        return 2

    editor = build_editor(config)
    LOGGER.info(
        "starting editor on a %dx%d canvas (virtual height %d)",
        config.canvas.width,
        config.canvas.height,
        config.canvas.virtual_height,
    )

    from .console_ui import DraviConsoleApp

    DraviConsoleApp(editor).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())


__all__ = ["build_editor", "configure_logging", "main", "parse_args", "resolve_config"]
