"""pi-mdcat: render Markdown to ANSI-styled terminal output."""

# Block classification
from pi.mdcat.blocks import MarkdownRenderer, render_markdown

# Configuration
from pi.mdcat.config import ColorMode, RenderConfig, resolve_color

# Inline spans
from pi.mdcat.inline import SpanState, render_inline

# Tables
from pi.mdcat.rows import Alignment, parse_separator, split_row
from pi.mdcat.table import Table, TableRenderer, render_table

# Line sources
from pi.mdcat.source import LineCursor, open_source

# Styling
from pi.mdcat.style import StyleSink, Theme

# Width measurement
from pi.mdcat.utils import display_width, strip_ansi
from pi.mdcat.width import visible_len

__all__ = [
    "Alignment",
    "ColorMode",
    "LineCursor",
    "MarkdownRenderer",
    "RenderConfig",
    "SpanState",
    "StyleSink",
    "Table",
    "TableRenderer",
    "Theme",
    "display_width",
    "open_source",
    "parse_separator",
    "render_inline",
    "render_markdown",
    "render_table",
    "resolve_color",
    "split_row",
    "strip_ansi",
    "visible_len",
]
