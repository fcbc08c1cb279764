"""CLI entry point for pi-mdcat. Uses Click for argument parsing."""

from __future__ import annotations

import io
import logging
import sys
from typing import TextIO

import click

from pi.mdcat.blocks import MarkdownRenderer
from pi.mdcat.config import ColorMode, RenderConfig, resolve_color
from pi.mdcat.source import open_source
from pi.mdcat.style import StyleSink

logger = logging.getLogger(__name__)

PROG = "pi-mdcat"


def _passthrough(stream: TextIO, **options: str) -> TextIO:
    """Let undecodable bytes travel through *stream* unchanged."""
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors="surrogateescape", **options)
    return stream


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1)
@click.option(
    "--color",
    type=click.Choice([m.value for m in ColorMode]),
    default=ColorMode.AUTO.value,
    envvar="PI_MDCAT_COLOR",
    show_default=True,
    help="Emit ANSI styling: auto (only on a terminal), always, or never.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
    help="Diagnostics written to stderr.",
)
def main(files: tuple[str, ...], color: str, log_level: str) -> None:
    """Render Markdown FILES (or stdin) to the terminal."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    out = _passthrough(sys.stdout)
    enabled = resolve_color(color, out)
    logger.debug("Styling %s (mode %s)", "enabled" if enabled else "disabled", color)
    sink = StyleSink(out, enabled=enabled)
    renderer = MarkdownRenderer(sink, RenderConfig())

    if not files:
        # lines end only at "\n", as in open_source
        renderer.render(_passthrough(sys.stdin, newline="\n"))
        sink.flush()
        return

    for path in files:
        try:
            with open_source(path) as source:
                renderer.render(source)
        except BrokenPipeError:
            raise
        except OSError as e:
            sink.flush()
            click.echo(f"{PROG}: cannot open '{path}': {e.strerror or e}", err=True)
            sys.exit(1)
        logger.debug("Rendered %s", path)

    sink.flush()


if __name__ == "__main__":
    main()
