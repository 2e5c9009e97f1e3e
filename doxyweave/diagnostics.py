"""Injected sink for content-level warnings raised while parsing and rendering."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """One recorded message."""

    level: int
    message: str
    refid: str | None = None


class Diagnostics:
    """Records diagnostics and forwards them to a logger.

    A single instance is passed to the parser, the workspace and the render
    engine so tests can inspect exactly what was reported.
    """

    def __init__(self, log: logging.Logger | None = None) -> None:
        """Initialize an empty sink forwarding to ``log`` (module logger by default)."""
        self.logger = log or logger
        self.entries: list[Diagnostic] = []
        self._lock = threading.Lock()

    def report(
        self, level: int, message: str, *args: object, refid: str | None = None
    ) -> None:
        """Record a message at ``level`` and forward it to the logger."""
        text = message % args if args else message
        with self._lock:
            self.entries.append(Diagnostic(level, text, refid))
        self.logger.log(level, "%s", text)

    def debug(self, message: str, *args: object, refid: str | None = None) -> None:
        """Record a debug message."""
        self.report(logging.DEBUG, message, *args, refid=refid)

    def info(self, message: str, *args: object, refid: str | None = None) -> None:
        """Record an informational message."""
        self.report(logging.INFO, message, *args, refid=refid)

    def warning(self, message: str, *args: object, refid: str | None = None) -> None:
        """Record a warning."""
        self.report(logging.WARNING, message, *args, refid=refid)

    def error(self, message: str, *args: object, refid: str | None = None) -> None:
        """Record a recoverable error."""
        self.report(logging.ERROR, message, *args, refid=refid)

    @property
    def warnings(self) -> list[Diagnostic]:
        """Return the entries recorded at WARNING level."""
        return [d for d in self.entries if d.level == logging.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        """Return the entries recorded at ERROR level or above."""
        return [d for d in self.entries if d.level >= logging.ERROR]
