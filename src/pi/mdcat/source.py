"""Line sources: a peek-one cursor over terminator-stripped lines."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, TextIO

from pi.mdcat.config import MAX_LINE_LENGTH

logger = logging.getLogger(__name__)


def strip_terminator(line: str) -> str:
    """Drop one trailing ``\\n`` and a ``\\r`` before it."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class LineCursor:
    """Pull-based cursor with one line of lookahead.

    ``peek()`` reads ahead without consuming; the peeked line is returned
    by the next ``advance()``.  Lines are stripped of their terminator and
    cut to *max_line_length* characters.
    """

    def __init__(self, lines: Iterable[str], *, max_line_length: int = MAX_LINE_LENGTH) -> None:
        self._lines: Iterator[str] = iter(lines)
        self._max_line_length = max_line_length
        self._pending: str | None = None
        self._line_number = 0

    @property
    def line_number(self) -> int:
        """Number of lines consumed so far."""
        return self._line_number

    def _pull(self) -> str | None:
        raw = next(self._lines, None)
        if raw is None:
            return None
        line = strip_terminator(raw)
        if len(line) > self._max_line_length:
            logger.debug(
                "Truncating line %d from %d to %d characters",
                self._line_number + 1,
                len(line),
                self._max_line_length,
            )
            line = line[: self._max_line_length]
        return line

    def peek(self) -> str | None:
        """Return the next line without consuming it, or ``None`` at end."""
        if self._pending is None:
            self._pending = self._pull()
        return self._pending

    def advance(self) -> str | None:
        """Consume and return the next line, or ``None`` at end."""
        line = self.peek()
        self._pending = None
        if line is not None:
            self._line_number += 1
        return line

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = self.advance()
        if line is None:
            raise StopIteration
        return line


def open_source(path: str) -> TextIO:
    """Open *path* for rendering.

    Only ``\\n`` ends a line, and undecodable bytes survive as surrogate
    escapes.  ``OSError`` propagates to the caller.
    """
    return open(path, encoding="utf-8", errors="surrogateescape", newline="\n")
