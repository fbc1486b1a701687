"""Pytest configuration: make ``src/dravi`` importable and share editor fixtures."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from dravi.canvas import CanvasStore  # noqa: E402
from dravi.editor import EditorStateMachine  # noqa: E402


class RecordingSink:
    """Sink stub that records every save and viewer request."""

    def __init__(self) -> None:
        self.documents: List[str] = []
        self.viewer_requests = 0

    def save(self, document: str) -> None:
        self.documents.append(document)

    def open_viewer(self) -> None:
        self.viewer_requests += 1


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def editor(sink: RecordingSink) -> EditorStateMachine:
    return EditorStateMachine(CanvasStore(80, 40, 200), sink=sink)
