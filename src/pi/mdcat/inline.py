"""Inline span renderer: emphasis and code markers to SGR styling.

A single forward pass with one recorded emphasis state.  Markers toggle
flatly; there is no stack of open spans, so ``*a **b* c**`` switches
between states in source order rather than nesting.
"""

from __future__ import annotations

from enum import Enum

from pi.mdcat.style import BOLD, DEFAULT_THEME, ITALIC, RESET, StyleSink, Theme
from pi.mdcat.width import CODE_MARKER, EMPHASIS_MARKERS, find_code_close, marker_run


class SpanState(Enum):
    NONE = "none"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"


_RUN_STATES = {
    3: SpanState.BOLD_ITALIC,
    2: SpanState.BOLD,
    1: SpanState.ITALIC,
}

_SPAN_TOKENS: dict[SpanState, tuple[str, ...]] = {
    SpanState.NONE: (),
    SpanState.BOLD: (BOLD,),
    SpanState.ITALIC: (ITALIC,),
    SpanState.BOLD_ITALIC: (BOLD, ITALIC),
}


def span_tokens(state: SpanState) -> tuple[str, ...]:
    """SGR tokens that switch *state* on."""
    return _SPAN_TOKENS[state]


def render_inline(text: str, sink: StyleSink, theme: Theme | None = None) -> SpanState:
    """Write *text* to *sink*, resolving emphasis and code markers.

    Returns the emphasis state that was open at the end of the line, after
    it has been closed with a reset.  Callers normally ignore it.
    """
    theme = theme or DEFAULT_THEME
    state = SpanState.NONE
    literal_start = 0
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == CODE_MARKER:
            close = find_code_close(text, i)
            if close != -1:
                sink.write(text[literal_start:i])
                sink.style(theme.inline_code_bg, theme.inline_code_fg)
                sink.write(f" {text[i + 1:close]} ")
                # code styling is layered: restore whatever emphasis was open
                sink.style(RESET, *_SPAN_TOKENS[state])
                i = close + 1
                literal_start = i
                continue
            # unmatched backtick falls through as a literal

        elif ch in EMPHASIS_MARKERS:
            run = marker_run(text, i)
            sink.write(text[literal_start:i])
            target = _RUN_STATES[run]
            if state is target:
                sink.style(RESET)
                state = SpanState.NONE
            else:
                sink.style(*_SPAN_TOKENS[target])
                state = target
            i += run
            literal_start = i
            continue

        i += 1

    sink.write(text[literal_start:])

    if state is not SpanState.NONE:
        sink.style(RESET)
    return state
