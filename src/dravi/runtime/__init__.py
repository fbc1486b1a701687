"""Terminal-facing pieces of DraVi: the curses UI, the publisher and the CLI."""
from __future__ import annotations

from .publisher import DocumentPublisher

__all__ = ["DocumentPublisher"]
