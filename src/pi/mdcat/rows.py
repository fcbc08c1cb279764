"""Pipe-table row parsing and separator validation."""

from __future__ import annotations

import logging
from enum import Enum

from pi.mdcat.config import MAX_CELL_LENGTH, MAX_COLUMNS

logger = logging.getLogger(__name__)

DELIMITER = "|"
_SEPARATOR_CHARS = frozenset("-:")


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def split_row(
    line: str,
    *,
    max_columns: int = MAX_COLUMNS,
    max_cell_length: int = MAX_CELL_LENGTH,
) -> list[str]:
    """Split a pipe-delimited *line* into space-trimmed cells.

    One leading delimiter is skipped and a trailing one closes the last
    cell.  Escaped pipes are not special.  At most *max_columns* cells are
    returned, each cut to *max_cell_length* characters.
    """
    cells: list[str] = []
    pos = 1 if line.startswith(DELIMITER) else 0
    n = len(line)

    while pos < n and len(cells) < max_columns:
        end = line.find(DELIMITER, pos)
        if end == -1:
            end = n
        cell = line[pos:end].strip(" ")
        if len(cell) > max_cell_length:
            logger.debug("Truncating table cell of %d characters", len(cell))
            cell = cell[:max_cell_length]
        cells.append(cell)
        pos = end + 1

    return cells


def _cell_alignment(cell: str) -> Alignment:
    left = cell.startswith(":")
    right = cell.endswith(":")
    if left and right:
        return Alignment.CENTER
    if right:
        return Alignment.RIGHT
    return Alignment.LEFT


def parse_separator(
    line: str,
    num_columns: int,
    *,
    max_columns: int = MAX_COLUMNS,
    max_cell_length: int = MAX_CELL_LENGTH,
) -> list[Alignment] | None:
    """Return per-column alignments if *line* separates a header of
    *num_columns* cells, else ``None``.

    Every cell must be non-empty and consist only of ``-`` and ``:``.
    """
    cells = split_row(line, max_columns=max_columns, max_cell_length=max_cell_length)
    if not cells or len(cells) != num_columns:
        return None

    alignments: list[Alignment] = []
    for cell in cells:
        if not cell or not set(cell) <= _SEPARATOR_CHARS:
            return None
        alignments.append(_cell_alignment(cell))
    return alignments
