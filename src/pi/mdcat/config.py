"""Render configuration: input bounds, decoration sizes, colour selection."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, TextIO

from pi.mdcat.style import Theme

# Bounds on pathological input.  Oversized input is truncated, never fatal.
MAX_LINE_LENGTH = 4095
MAX_COLUMNS = 16
MAX_CELL_LENGTH = 127
MAX_ROWS = 256

MIN_COLUMN_WIDTH = 3
RULE_WIDTH = 60
CODE_INDENT = "  "


@dataclass
class RenderConfig:
    """Limits and decoration settings shared by every renderer."""

    max_line_length: int = MAX_LINE_LENGTH
    max_columns: int = MAX_COLUMNS
    max_cell_length: int = MAX_CELL_LENGTH
    max_rows: int = MAX_ROWS
    min_column_width: int = MIN_COLUMN_WIDTH
    rule_width: int = RULE_WIDTH
    code_indent: str = CODE_INDENT
    theme: Theme = field(default_factory=Theme)


# ---------------------------------------------------------------------------
# Colour mode
# ---------------------------------------------------------------------------


class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color(
    mode: ColorMode | str,
    stream: TextIO,
    environ: Mapping[str, str] | None = None,
) -> bool:
    """Decide once whether styling is enabled for *stream*.

    ``auto`` follows ``NO_COLOR`` / ``FORCE_COLOR`` when set (non-empty),
    otherwise whether *stream* is an interactive terminal.
    """
    mode = ColorMode(mode)
    if mode is ColorMode.ALWAYS:
        return True
    if mode is ColorMode.NEVER:
        return False

    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    if env.get("FORCE_COLOR"):
        return True

    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False
