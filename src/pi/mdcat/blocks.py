"""Block classifier: dispatch each Markdown line to its renderer.

Lines are classified one at a time, in priority order:

1. fence delimiter (toggles verbatim mode)
2. blank line
3. horizontal rule (``---``, ``***``, ``===``)
4. table (pipe line followed by a valid separator)
5. heading (``#`` .. ``######``)
6. block quote (``>``)
7. bullet item (``-``, ``*``, ``+``)
8. numbered item (``12.``)
9. paragraph

The only state carried between lines is whether a fence is open and the
cursor's single line of lookahead.  Nothing nests.
"""

from __future__ import annotations

import logging
from typing import Iterable

from pi.mdcat.config import RenderConfig
from pi.mdcat.inline import render_inline
from pi.mdcat.rows import DELIMITER, parse_separator, split_row
from pi.mdcat.source import LineCursor
from pi.mdcat.style import BOLD, DIM, ITALIC, RESET, UNDERLINE, StyleSink
from pi.mdcat.table import render_table
from pi.mdcat.utils import display_width

logger = logging.getLogger(__name__)

FENCE = "```"
_RULE_CHARS = "-*="
_BULLET_CHARS = "-*+"
_MAX_HEADING_LEVEL = 6

_RULE_GLYPH = "─"
_DOUBLE_RULE_GLYPH = "═"
_QUOTE_BAR = "│ "
_BULLET_GLYPH = "• "


# ---------------------------------------------------------------------------
# Line predicates
# ---------------------------------------------------------------------------


def is_fence(line: str) -> bool:
    return line.startswith(FENCE)


def fence_tag(line: str) -> str:
    """Language tag after an opening fence, or ``""``."""
    return line[len(FENCE):].strip()


def is_rule(line: str) -> bool:
    """Three or more copies of one of ``-``, ``*``, ``=`` and nothing else."""
    return len(line) >= 3 and line[0] in _RULE_CHARS and line == line[0] * len(line)


def heading_level(line: str) -> int:
    """Heading level (1-6) of *line*, or 0 if it is not a heading."""
    level = len(line) - len(line.lstrip("#"))
    if 1 <= level <= _MAX_HEADING_LEVEL and line[level:level + 1] == " ":
        return level
    return 0


def quote_text(line: str) -> str | None:
    """Text of a ``>`` quote line, or ``None`` if *line* is not one."""
    if line == ">":
        return ""
    if line.startswith("> "):
        return line[2:]
    return None


def is_bullet(line: str) -> bool:
    return len(line) >= 2 and line[0] in _BULLET_CHARS and line[1] == " "


def ordered_marker(line: str) -> str | None:
    """Digits of a ``N. `` list marker, or ``None``."""
    digits = 0
    while digits < len(line) and line[digits] in "0123456789":
        digits += 1
    if digits and line[digits:digits + 2] == ". ":
        return line[:digits]
    return None


# ---------------------------------------------------------------------------
# MarkdownRenderer
# ---------------------------------------------------------------------------


class MarkdownRenderer:
    """Renders Markdown lines to a :class:`StyleSink`.

    Each :meth:`render` call starts with fresh state, so one renderer can
    process several sources in sequence.
    """

    def __init__(self, sink: StyleSink, config: RenderConfig | None = None) -> None:
        self._sink = sink
        self._config = config or RenderConfig()
        self._theme = self._config.theme

    def render(self, lines: Iterable[str]) -> None:
        """Render every line of *lines* (terminators optional)."""
        sink = self._sink
        cursor = LineCursor(lines, max_line_length=self._config.max_line_length)
        in_fence = False

        for line in cursor:
            if is_fence(line):
                in_fence = not in_fence
                if in_fence:
                    self._open_fence(fence_tag(line))
                else:
                    sink.style(RESET)
                    sink.newline()
                continue

            if in_fence:
                self._render_code_line(line)
                continue

            if not line:
                sink.newline()
                continue

            if is_rule(line):
                self._render_rule()
                continue

            if line.startswith(DELIMITER) and self._try_table(line, cursor):
                continue

            level = heading_level(line)
            if level:
                self._render_heading(line[level + 1:], level)
                continue

            quote = quote_text(line)
            if quote is not None:
                self._render_quote(quote)
                continue

            if is_bullet(line):
                self._render_list_item("", line[2:])
                continue

            digits = ordered_marker(line)
            if digits is not None:
                self._render_list_item(f"{digits}. ", line[len(digits) + 2:])
                continue

            render_inline(line, sink, self._theme)
            sink.newline()

        if in_fence:
            logger.debug("Input ended inside a fenced block at line %d", cursor.line_number)
            sink.style(RESET)

    # -- fence --------------------------------------------------------------

    def _open_fence(self, tag: str) -> None:
        sink = self._sink
        sink.style(DIM)
        if tag:
            sink.style(self._theme.fence_tag_color)
            sink.write(f"[{tag}]")
            sink.newline()
            sink.style(RESET)
        else:
            sink.newline()

    def _render_code_line(self, line: str) -> None:
        sink = self._sink
        sink.style(self._theme.fence_fg)
        sink.write(self._config.code_indent + line)
        sink.newline()
        sink.style(RESET)

    # -- rule ---------------------------------------------------------------

    def _render_rule(self) -> None:
        sink = self._sink
        sink.style(DIM)
        sink.write(_RULE_GLYPH * self._config.rule_width)
        sink.style(RESET)
        sink.newline()

    # -- table --------------------------------------------------------------

    def _try_table(self, line: str, cursor: LineCursor) -> bool:
        """Render a table starting at *line* if the next line separates it.

        The peeked line is consumed only when it is a valid separator.
        """
        following = cursor.peek()
        if following is None or not following.startswith(DELIMITER):
            return False

        config = self._config
        header = split_row(
            line,
            max_columns=config.max_columns,
            max_cell_length=config.max_cell_length,
        )
        alignments = parse_separator(
            following,
            len(header),
            max_columns=config.max_columns,
            max_cell_length=config.max_cell_length,
        )
        if alignments is None:
            return False

        cursor.advance()
        render_table(cursor, header, alignments, self._sink, config)
        return True

    # -- heading ------------------------------------------------------------

    def _render_heading(self, text: str, level: int) -> None:
        sink = self._sink
        theme = self._theme
        sink.newline()

        if level == 1:
            # render into memory first so the underline can match its width
            buffered = sink.fork()
            buffered.style(BOLD, theme.heading_primary, UNDERLINE)
            render_inline(text, buffered, theme)
            buffered.style(RESET)
            rendered = buffered.getvalue()
            sink.write(rendered)
            sink.newline()

            sink.style(theme.heading_primary, DIM)
            sink.write(_DOUBLE_RULE_GLYPH * (display_width(rendered) + 2))
            sink.style(RESET)
            sink.newline()
            return

        color = theme.heading_secondary if level == 2 else theme.heading_tertiary
        sink.style(BOLD, color)
        render_inline(text, sink, theme)
        sink.style(RESET)
        sink.newline()

    # -- quote --------------------------------------------------------------

    def _render_quote(self, text: str) -> None:
        sink = self._sink
        color = self._theme.quote_color
        sink.style(color, DIM)
        sink.write(_QUOTE_BAR)
        sink.style(RESET, ITALIC, color)
        render_inline(text, sink, self._theme)
        sink.style(RESET)
        sink.newline()

    # -- lists --------------------------------------------------------------

    def _render_list_item(self, marker: str, text: str) -> None:
        """Indented item; *marker* is the number prefix or ``""`` for a bullet."""
        sink = self._sink
        sink.write("  ")
        sink.style(self._theme.bullet_color, BOLD)
        sink.write(marker or _BULLET_GLYPH)
        sink.style(RESET)
        render_inline(text, sink, self._theme)
        sink.newline()


def render_markdown(
    lines: Iterable[str],
    sink: StyleSink,
    config: RenderConfig | None = None,
) -> None:
    """Render *lines* to *sink* with a fresh :class:`MarkdownRenderer`."""
    MarkdownRenderer(sink, config).render(lines)
