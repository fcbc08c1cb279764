"""Width calculator: columns a raw inline span occupies once rendered.

Must agree with :func:`pi.mdcat.inline.render_inline` character for
character, otherwise table columns drift.  The two share the lexical
helpers defined here.

Every code point counts as one column.  Input decoded with
``errors="surrogateescape"`` keeps each undecodable byte as its own code
point, so malformed UTF-8 degrades to one column per byte.  Wide and
combining characters are not special-cased.
"""

from __future__ import annotations

CODE_MARKER = "`"
EMPHASIS_MARKERS = "*_"
MAX_MARKER_RUN = 3


def marker_run(text: str, pos: int) -> int:
    """Length (1-3) of the run of ``text[pos]`` starting at *pos*."""
    marker = text[pos]
    run = 1
    while run < MAX_MARKER_RUN and pos + run < len(text) and text[pos + run] == marker:
        run += 1
    return run


def find_code_close(text: str, pos: int) -> int:
    """Index of the backtick closing the one at *pos*, or -1."""
    return text.find(CODE_MARKER, pos + 1)


def visible_len(text: str) -> int:
    """Return the terminal columns *text* occupies after inline rendering.

    * ``*`` / ``_`` runs contribute nothing.
    * A closed code span contributes its content plus two padding columns.
    * An unclosed backtick is a literal column.
    * Everything else is one column per code point.
    """
    width = 0
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == CODE_MARKER:
            close = find_code_close(text, i)
            if close != -1:
                width += 2 + (close - i - 1)
                i = close + 1
                continue
            width += 1
            i += 1
            continue

        if ch in EMPHASIS_MARKERS:
            i += marker_run(text, i)
            continue

        width += 1
        i += 1

    return width
