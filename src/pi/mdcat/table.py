"""Table engine: buffer a pipe table, measure its columns, then draw it.

Rendering is strictly two-pass.  Every body row is collected before the
first border is drawn, because column widths depend on all of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pi.mdcat.config import RenderConfig
from pi.mdcat.inline import render_inline
from pi.mdcat.rows import DELIMITER, Alignment, split_row
from pi.mdcat.source import LineCursor
from pi.mdcat.style import BOLD, DIM, RESET, StyleSink
from pi.mdcat.width import visible_len

logger = logging.getLogger(__name__)

_HORIZONTAL = "─"
_VERTICAL = "│"


@dataclass
class Table:
    """One contiguous pipe table."""

    header: list[str]
    alignments: list[Alignment]
    rows: list[list[str]] = field(default_factory=list)

    @property
    def num_columns(self) -> int:
        return len(self.header)

    def cell(self, row: list[str], col: int) -> str:
        """Cell *col* of *row*; missing trailing cells read as empty."""
        return row[col] if col < len(row) else ""

    def column_widths(self, minimum: int) -> list[int]:
        """Widest rendered cell per column, floored at *minimum*."""
        widths: list[int] = []
        for col in range(self.num_columns):
            width = max(minimum, visible_len(self.header[col]))
            for row in self.rows:
                width = max(width, visible_len(self.cell(row, col)))
            widths.append(width)
        return widths


def collect_rows(cursor: LineCursor, table: Table, config: RenderConfig) -> None:
    """Append body rows from *cursor* while the next line starts with a pipe.

    The first line that does not qualify is left in the cursor.
    """
    while len(table.rows) < config.max_rows:
        line = cursor.peek()
        if line is None or not line.startswith(DELIMITER):
            return
        cursor.advance()
        table.rows.append(
            split_row(
                line,
                max_columns=config.max_columns,
                max_cell_length=config.max_cell_length,
            )
        )

    following = cursor.peek()
    if following is not None and following.startswith(DELIMITER):
        logger.warning(
            "Table exceeds %d body rows; remaining rows render as text",
            config.max_rows,
        )


def cell_padding(content_width: int, width: int, alignment: Alignment) -> tuple[int, int]:
    """Spaces to put (left, right) of a cell's content."""
    pad = max(0, width - content_width)
    if alignment is Alignment.CENTER:
        left = pad // 2
        return left, pad - left
    if alignment is Alignment.RIGHT:
        return pad, 0
    return 0, pad


class TableRenderer:
    """Draws a measured :class:`Table` with box-drawing borders."""

    def __init__(self, sink: StyleSink, config: RenderConfig | None = None) -> None:
        self._sink = sink
        self._config = config or RenderConfig()

    def render(self, table: Table) -> None:
        widths = table.column_widths(self._config.min_column_width)

        self._border(widths, "┌", "┬", "┐")
        self._row(table, table.header, widths, header=True)
        self._border(widths, "├", "┼", "┤")
        for row in table.rows:
            self._row(table, row, widths, header=False)
        self._border(widths, "└", "┴", "┘")

    def _border(self, widths: list[int], left: str, junction: str, right: str) -> None:
        sink = self._sink
        segments = [_HORIZONTAL * (w + 2) for w in widths]
        sink.style(DIM)
        sink.write(left + junction.join(segments) + right)
        sink.style(RESET)
        sink.newline()

    def _bar(self) -> None:
        self._sink.style(DIM)
        self._sink.write(_VERTICAL)
        self._sink.style(RESET)

    def _row(self, table: Table, row: list[str], widths: list[int], *, header: bool) -> None:
        sink = self._sink
        theme = self._config.theme

        self._bar()
        for col, width in enumerate(widths):
            text = table.cell(row, col)
            left, right = cell_padding(visible_len(text), width, table.alignments[col])

            sink.write(" ")
            if header:
                sink.style(BOLD, theme.table_header_color)
            sink.write(" " * left)
            render_inline(text, sink, theme)
            sink.write(" " * right)
            if header:
                sink.style(RESET)
            sink.write(" ")
            self._bar()
        sink.newline()


def render_table(
    cursor: LineCursor,
    header: list[str],
    alignments: list[Alignment],
    sink: StyleSink,
    config: RenderConfig | None = None,
) -> Table:
    """Collect body rows from *cursor*, then draw the whole table.

    *header* and *alignments* come from lines the caller already consumed.
    Returns the collected table.
    """
    config = config or RenderConfig()
    table = Table(header=header, alignments=alignments)
    collect_rows(cursor, table, config)
    logger.debug(
        "Rendering table: %d columns, %d body rows",
        table.num_columns,
        len(table.rows),
    )
    TableRenderer(sink, config).render(table)
    return table
