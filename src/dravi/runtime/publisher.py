"""Persist exported documents and launch the external compiler and viewer."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from ..config import ExportConfig, ViewerConfig

LOGGER = logging.getLogger(__name__)

Spawner = Callable[[Sequence[str]], object]


def _spawn_detached(command: Sequence[str]) -> subprocess.Popen:
    return subprocess.Popen(
        list(command),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class DocumentPublisher:
    """Write the Typst source, compile it, and open the PDF viewer.

    Every external step is fire-and-forget: failures are logged and
    otherwise ignored so the editor keeps running.
    """

    def __init__(
        self,
        export: ExportConfig | None = None,
        viewer: ViewerConfig | None = None,
        *,
        spawner: Spawner | None = None,
    ) -> None:
        self.export = export or ExportConfig()
        self.viewer = viewer or ViewerConfig()
        self._spawn = spawner or _spawn_detached

    @property
    def source_path(self) -> Path:
        return self.export.path

    @property
    def pdf_path(self) -> Path:
        return self.export.pdf_path

    def save(self, document: str) -> None:
        if self.write_source(document):
            self.compile()

    def write_source(self, document: str) -> bool:
        try:
            self.source_path.write_text(document, encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("could not write %s: %s", self.source_path, exc)
            return False
        LOGGER.info("wrote %s", self.source_path)
        return True

    def compile(self) -> bool:
        command = (*self.export.compiler, str(self.source_path))
        return self._try_spawn(command)

    def open_viewer(self) -> bool:
        target = (*self.viewer.command, str(self.pdf_path))
        for launcher in self.viewer.terminals:
            if self._try_spawn((*launcher, *target)):
                return True
        LOGGER.warning("no terminal could open %s", self.pdf_path)
        return False

    def _try_spawn(self, command: Sequence[str]) -> bool:
        try:
            self._spawn(command)
        except OSError as exc:
            LOGGER.debug("spawn failed for %s: %s", command[0], exc)
            return False
        LOGGER.debug("spawned %s", " ".join(command))
        return True


__all__ = ["DocumentPublisher", "Spawner"]
