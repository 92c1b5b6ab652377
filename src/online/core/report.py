"""
Indenting diagnostic report.

Section headers are deferred: a header is only written once something is
printed beneath it, so a section that finds nothing leaves no trace in the
report. Every line is kept in memory and can optionally be mirrored to a
sink (a logger, stderr or stdout) as it is written.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from io import StringIO
from typing import Any

import click

logger = logging.getLogger(__name__)

INDENT = "   "


class ReportLevel(Enum):
    """Where report lines are mirrored to as they are written."""

    SILENT = "silent"  # keep in memory only
    LOG = "log"  # mirror to a logger
    ERR = "err"  # mirror to stderr
    OUT = "out"  # mirror to stdout


class IndentingReport:
    """Hierarchical report with deferred section headers."""

    def __init__(
        self,
        level: ReportLevel = ReportLevel.SILENT,
        log: logging.Logger | None = None,
    ):
        """Initialize report.

        Args:
            level: Sink that lines are mirrored to
            log: Logger used when level is LOG (defaults to this module's logger)
        """
        self.level = level
        self.log = log or logger
        self.size = 0
        self._depth = 0
        self._pending: list[str] = []
        self._buffer = StringIO()

    def start_section(self, title: str) -> None:
        """Start a section. The title is printed only if a line follows it."""
        self._pending.append(title)

    def stop_section(self) -> None:
        """Stop the innermost section."""
        if self._pending:
            self._pending.pop()
        elif self._depth > 0:
            self._depth -= 1

    @contextmanager
    def section(self, title: str) -> Iterator[IndentingReport]:
        """Context manager pairing start_section() with stop_section()."""
        self.start_section(title)
        try:
            yield self
        finally:
            self.stop_section()

    def printf(self, fmt: str, *args: Any) -> None:
        """Write one line, flushing any pending section headers first.

        Args:
            fmt: Line text, %-formatted with args when args are given
            *args: Format arguments
        """
        for title in self._pending:
            self._write(f"{title}:")
            self._depth += 1
        self._pending = []

        self._write(fmt % args if args else fmt)
        self.size += 1

    def _write(self, line: str) -> None:
        line = INDENT * self._depth + line
        self._buffer.write(line + "\n")

        if self.level is ReportLevel.LOG:
            self.log.warning("%s", line)
        elif self.level is ReportLevel.ERR:
            click.echo(line, err=True)
        elif self.level is ReportLevel.OUT:
            click.echo(line)

    def string(self) -> str:
        """Return the full buffered report."""
        return self._buffer.getvalue()

    def __str__(self) -> str:
        return self.string()
