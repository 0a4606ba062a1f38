# Command-line interface definition for fexpand.
# This file is responsible only for argument parsing, validation,
# and dispatch into core application logic.
#
# No filesystem access or business logic should live here.

from __future__ import annotations

import logging
from pathlib import Path as FSPath
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from fexpand import __version__
from fexpand.core import run_expand, run_render
from fexpand.models import ExpandOptions, RenderOptions

app = typer.Typer(
    add_completion=False,
    help="Expand files, directories and glob patterns into a flat list of files.",
)
console = Console()
_err = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    # Route library log records through rich on stderr.
    # Only the package logger is touched so embedding applications keep theirs.
    logger = logging.getLogger("fexpand")
    logger.handlers = [RichHandler(console=_err, show_time=False, show_path=False)]
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _parse_assignments(values: List[str]) -> Dict[str, str]:
    # Turn KEY=VALUE pairs into a mapping, keeping command-line order.
    replacements: Dict[str, str] = {}
    for raw in values:
        key, eq, value = raw.partition("=")
        if not eq or not key:
            raise typer.BadParameter(
                f"Expected KEY=VALUE, received: {raw!r}", param_hint="--set"
            )
        replacements[key] = value
    return replacements


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log how each spec is classified and traversed.",
    ),
    version: bool = typer.Option(
        False, "--version",
        help="Show version and exit.",
    ),
):
    # Handle version early and exit cleanly.
    if version:
        console.print(__version__)
        raise typer.Exit(code=0)

    _configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


@app.command(help="Print every regular file named by the given files, directories or globs.")
def expand(
    specs: List[str] = typer.Argument(
        None,
        help="Files, directories, or glob patterns. Defaults to current directory.",
    ),

    # Traversal.
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth",
        min=0,
        help="Do not descend more than this many directory levels.",
        rich_help_panel="Traversal",
    ),
    no_cycle_check: bool = typer.Option(
        False, "--no-cycle-check",
        help="Follow directory links even when they loop back to an ancestor.",
        rich_help_panel="Traversal",
    ),

    # Output.
    null: bool = typer.Option(
        False, "--null", "-0",
        help="Terminate each path with NUL instead of newline.",
        rich_help_panel="Output",
    ),
    count: bool = typer.Option(
        False, "--count",
        help="Print only the number of files.",
        rich_help_panel="Output",
    ),
):
    if null and count:
        raise typer.BadParameter("--null and --count are mutually exclusive")

    if not specs:
        specs = ["."]

    opts = ExpandOptions(
        detect_cycles=not no_cycle_check,
        max_depth=max_depth,
    )

    run_expand(specs=specs, opts=opts, null=null, count=count)


@app.command(help="Copy a template, dropping comment lines and substituting KEY=VALUE pairs.")
def render(
    src: FSPath = typer.Argument(..., help="Template file to read."),
    dst: FSPath = typer.Argument(..., help="File to write."),
    assignments: List[str] = typer.Option(
        [], "--set", "-s",
        help="Replacement as KEY=VALUE; may be repeated.",
    ),
    comment_prefix: str = typer.Option(
        "#", "--comment-prefix",
        help="Lines starting with this prefix are dropped. Empty keeps all lines.",
    ),
):
    opts = RenderOptions(
        src=src,
        dst=dst,
        replacements=_parse_assignments(assignments),
        comment_prefix=comment_prefix,
    )

    if not run_render(opts):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
