"""Style sink: writes literal text and, when styling is enabled, SGR tokens.

The sink is the only place that decides whether escape sequences reach the
output.  Every renderer receives one explicitly instead of consulting a
process-wide switch.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import TextIO

# ---------------------------------------------------------------------------
# SGR tokens
# ---------------------------------------------------------------------------

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
ITALIC = "\x1b[3m"
UNDERLINE = "\x1b[4m"

FG_RED = "\x1b[31m"
FG_GREEN = "\x1b[32m"
FG_YELLOW = "\x1b[33m"
FG_BLUE = "\x1b[34m"
FG_MAGENTA = "\x1b[35m"
FG_CYAN = "\x1b[36m"
FG_WHITE = "\x1b[37m"

# 256-colour pair used for inline code: dark grey cell, soft orange text.
BG_CODE = "\x1b[48;5;236m"
FG_CODE = "\x1b[38;5;215m"


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------


@dataclass
class Theme:
    """Colour choices for decorated blocks."""

    heading_primary: str = FG_CYAN
    heading_secondary: str = FG_YELLOW
    heading_tertiary: str = FG_MAGENTA
    quote_color: str = FG_GREEN
    bullet_color: str = FG_YELLOW
    table_header_color: str = FG_CYAN
    fence_tag_color: str = FG_GREEN
    fence_fg: str = FG_CODE
    inline_code_bg: str = BG_CODE
    inline_code_fg: str = FG_CODE


DEFAULT_THEME = Theme()


# ---------------------------------------------------------------------------
# StyleSink
# ---------------------------------------------------------------------------


class StyleSink:
    """Output sink that accepts literal text and abstract style tokens.

    With ``enabled=False`` every :meth:`style` call is a no-op, so only
    text and structural glyphs are written.
    """

    def __init__(self, stream: TextIO, *, enabled: bool = True) -> None:
        self._stream = stream
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def style(self, *tokens: str) -> None:
        """Emit *tokens* verbatim if styling is enabled."""
        if self._enabled:
            for token in tokens:
                if token:
                    self._stream.write(token)

    def write(self, text: str) -> None:
        if text:
            self._stream.write(text)

    def newline(self) -> None:
        self._stream.write("\n")

    def fork(self) -> StyleSink:
        """Return a sink with the same styling switch that writes to memory."""
        return StyleSink(io.StringIO(), enabled=self._enabled)

    def getvalue(self) -> str:
        """Return everything written so far (in-memory sinks only)."""
        if not isinstance(self._stream, io.StringIO):
            raise TypeError("getvalue() is only available on in-memory sinks")
        return self._stream.getvalue()

    def flush(self) -> None:
        self._stream.flush()
