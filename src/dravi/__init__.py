"""DraVi: a modal terminal editor for ASCII-art and mathematical diagrams."""
from __future__ import annotations

from .canvas import CanvasStore
from .coordinates import CoordinateSystem, CoordinateTransform
from .editor import EditorMode, EditorStateMachine
from .exporter import TypstStyle, export_document
from .glyphs import Glyph, GlyphKind
from .keys import KeyEvent, NamedKey

__all__ = [
    "CanvasStore",
    "CoordinateSystem",
    "CoordinateTransform",
    "EditorMode",
    "EditorStateMachine",
    "Glyph",
    "GlyphKind",
    "KeyEvent",
    "NamedKey",
    "TypstStyle",
    "export_document",
]
