# Core orchestration logic for fexpand.
# This file connects the CLI to the expansion and rendering functions
# and owns all user-facing output.
#
# It intentionally contains no CLI parsing and no filesystem traversal logic.

from __future__ import annotations

from typing import Iterable, List

import typer
from rich.console import Console
from rich.markup import escape

from fexpand.expand import expand_all
from fexpand.models import ExpandOptions, RenderOptions
from fexpand.template import file_replace
from fexpand.text import join

console = Console()
_err = Console(stderr=True)


def run_expand(
    specs: Iterable[str],
    opts: ExpandOptions,
    null: bool = False,
    count: bool = False,
) -> List[str]:
    # Expand every spec and print the result.
    # An empty result is a normal outcome, not an error.
    files = expand_all(list(specs), opts)

    if count:
        typer.echo(str(len(files)))
    elif null:
        # NUL-terminated output for xargs -0; every name is terminated.
        typer.echo(join(files, "\0") + ("\0" if files else ""), nl=False)
    elif files:
        # Paths go through echo, not rich, so brackets in names are never
        # read as markup and long names are never wrapped.
        typer.echo(join(files, "\n"))

    return files


def run_render(opts: RenderOptions) -> bool:
    # Render a template; report a missing, undecodable or self-targeting
    # source instead of raising. UnicodeDecodeError is a ValueError.
    try:
        written = file_replace(
            src=opts.src,
            dst=opts.dst,
            replacements=opts.replacements,
            comment_prefix=opts.comment_prefix,
        )
    except (OSError, ValueError) as exc:
        _err.print(f"[red]FAILED:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)
        return False

    console.print(f"Rendered: {opts.src} -> {opts.dst} ({written} lines)", markup=False, highlight=False, soft_wrap=True)
    return True
