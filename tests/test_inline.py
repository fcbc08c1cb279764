"""Tests for pi.mdcat.inline -- emphasis and code span rendering."""

from __future__ import annotations

import io

import pytest

from pi.mdcat.inline import SpanState, render_inline, span_tokens
from pi.mdcat.style import BG_CODE, BOLD, FG_CODE, FG_RED, ITALIC, RESET, StyleSink, Theme
from pi.mdcat.width import visible_len


def _render(text: str, *, enabled: bool = True, theme: Theme | None = None) -> str:
    """Render *text* and return everything written to the sink."""
    sink = StyleSink(io.StringIO(), enabled=enabled)
    render_inline(text, sink, theme)
    return sink.getvalue()


# ---------------------------------------------------------------------------
# Emphasis
# ---------------------------------------------------------------------------


class TestEmphasis:
    """Marker runs of 1, 2 and 3 toggle italic, bold and bold-italic."""

    def test_bold(self) -> None:
        out = _render("**bold**")
        assert out == f"{BOLD}bold{RESET}"
        assert out.count(BOLD) == 1
        assert out.count(RESET) == 1

    def test_bold_with_underscores(self) -> None:
        assert _render("__bold__") == f"{BOLD}bold{RESET}"

    def test_italic(self) -> None:
        assert _render("*it*") == f"{ITALIC}it{RESET}"

    def test_bold_italic(self) -> None:
        assert _render("***both***") == f"{BOLD}{ITALIC}both{RESET}"

    def test_surrounding_text_is_verbatim(self) -> None:
        assert _render("a **b** c") == f"a {BOLD}b{RESET} c"

    def test_unclosed_span_is_reset_at_end_of_line(self) -> None:
        assert _render("**open") == f"{BOLD}open{RESET}"

    def test_returns_state_open_at_end(self) -> None:
        sink = StyleSink(io.StringIO())
        assert render_inline("*dangling", sink) is SpanState.ITALIC
        assert render_inline("*closed*", sink) is SpanState.NONE

    def test_flat_toggling_without_nesting(self) -> None:
        # one recorded state: switching styles never closes the previous one
        out = _render("*a **b* c**")
        assert out == f"{ITALIC}a {BOLD}b{ITALIC} c{BOLD}{RESET}"

    def test_span_tokens(self) -> None:
        assert span_tokens(SpanState.NONE) == ()
        assert span_tokens(SpanState.BOLD_ITALIC) == (BOLD, ITALIC)


# ---------------------------------------------------------------------------
# Code spans
# ---------------------------------------------------------------------------


class TestCodeSpans:
    """Backtick spans are padded and framed by code styling."""

    def test_code_span(self) -> None:
        assert _render("`code`") == f"{BG_CODE}{FG_CODE} code {RESET}"

    def test_code_span_restores_emphasis(self) -> None:
        out = _render("**a `c` b**")
        assert out == f"{BOLD}a {BG_CODE}{FG_CODE} c {RESET}{BOLD} b{RESET}"

    def test_code_span_restores_bold_italic(self) -> None:
        out = _render("***x `c`***")
        assert out == f"{BOLD}{ITALIC}x {BG_CODE}{FG_CODE} c {RESET}{BOLD}{ITALIC}{RESET}"

    def test_markers_inside_code_are_literal(self) -> None:
        assert _render("`**x**`") == f"{BG_CODE}{FG_CODE} **x** {RESET}"

    def test_unmatched_backtick_is_literal(self) -> None:
        assert _render("a ` b") == "a ` b"

    def test_theme_controls_code_colors(self) -> None:
        theme = Theme(inline_code_bg="", inline_code_fg=FG_RED)
        assert _render("`x`", theme=theme) == f"{FG_RED} x {RESET}"


# ---------------------------------------------------------------------------
# Styling disabled
# ---------------------------------------------------------------------------


class TestStylingDisabled:
    """With styling off only literal text is written."""

    def test_markers_removed_without_tokens(self) -> None:
        assert _render("**bold** and `x`", enabled=False) == "bold and  x "

    def test_plain_text_is_unchanged(self) -> None:
        text = "Plain text, 1 < 2 | pipes & ampersands."
        assert _render(text, enabled=False) == text

    def test_rendering_plain_output_again_is_a_no_op(self) -> None:
        once = _render("no markers here", enabled=False)
        assert _render(once, enabled=False) == once


# ---------------------------------------------------------------------------
# Width agreement
# ---------------------------------------------------------------------------


class TestWidthAgreement:
    """visible_len() predicts exactly what render_inline() writes."""

    @pytest.mark.parametrize(
        "text",
        [
            "plain",
            "**bold** text",
            "*italic* and __bold__",
            "***both*** `code`",
            "mix `a*b` of **things**",
            "café **crème**",
            "unclosed `tick",
            "``",
            "",
        ],
    )
    def test_width_matches_rendered_columns(self, text: str) -> None:
        assert visible_len(text) == len(_render(text, enabled=False))
