"""Tests for pi.mdcat.config -- limits and colour resolution."""

from __future__ import annotations

import io

import pytest

from pi.mdcat.config import ColorMode, RenderConfig, resolve_color
from pi.mdcat.style import Theme


class _FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestRenderConfig:
    def test_defaults(self) -> None:
        config = RenderConfig()
        assert config.max_columns == 16
        assert config.max_rows == 256
        assert config.min_column_width == 3
        assert config.rule_width == 60
        assert config.code_indent == "  "
        assert isinstance(config.theme, Theme)

    def test_themes_are_not_shared(self) -> None:
        assert RenderConfig().theme is not RenderConfig().theme


class TestResolveColor:
    """Styling is decided once, from the mode, environment and stream."""

    def test_always(self) -> None:
        assert resolve_color(ColorMode.ALWAYS, io.StringIO(), {}) is True

    def test_never(self) -> None:
        assert resolve_color(ColorMode.NEVER, _FakeTTY(), {}) is False

    def test_auto_on_terminal(self) -> None:
        assert resolve_color("auto", _FakeTTY(), {}) is True

    def test_auto_when_piped(self) -> None:
        assert resolve_color("auto", io.StringIO(), {}) is False

    def test_no_color_wins_in_auto(self) -> None:
        assert resolve_color("auto", _FakeTTY(), {"NO_COLOR": "1"}) is False

    def test_force_color_in_auto(self) -> None:
        assert resolve_color("auto", io.StringIO(), {"FORCE_COLOR": "1"}) is True

    def test_empty_variables_are_ignored(self) -> None:
        env = {"NO_COLOR": "", "FORCE_COLOR": ""}
        assert resolve_color("auto", _FakeTTY(), env) is True

    def test_closed_stream_is_not_a_terminal(self) -> None:
        stream = io.StringIO()
        stream.close()
        assert resolve_color("auto", stream, {}) is False

    def test_unknown_mode(self) -> None:
        with pytest.raises(ValueError):
            resolve_color("sometimes", io.StringIO(), {})
