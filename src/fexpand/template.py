# Line-based template rendering for fexpand.
# Copies a template to a destination, dropping comment lines and
# substituting placeholder keys.
#
# The source file is never modified.

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping

from fexpand.text import replace_all, starts_with

logger = logging.getLogger(__name__)


def file_replace(
    src: Path,
    dst: Path,
    replacements: Mapping[str, str],
    comment_prefix: str = "#",
) -> int:
    """Render ``src`` into ``dst`` and return the number of lines written.

    Lines starting with ``comment_prefix`` are dropped. Every other line has
    ``replacements`` applied and is written with a single ``\\n`` ending.
    An empty ``comment_prefix`` keeps every line.

    The whole template is read and rendered before ``dst`` is opened, so a
    missing or undecodable template leaves an existing ``dst`` untouched.
    """
    src = Path(src)
    dst = Path(dst)

    if not src.is_file():
        raise FileNotFoundError(f"Template not found: {src}")

    # Rendering a template onto itself would destroy it.
    if dst.exists() and src.resolve() == dst.resolve():
        raise ValueError(f"Template and output are the same file: {src}")

    lines: List[str] = []
    dropped = 0
    with src.open("r", encoding="utf-8") as fin:
        for line in fin:
            line = line.rstrip("\r\n")
            if comment_prefix and starts_with(line, comment_prefix):
                dropped += 1
                continue
            lines.append(replace_all(line, replacements) + "\n")

    dst.parent.mkdir(parents=True, exist_ok=True)
    with dst.open("w", encoding="utf-8", newline="\n") as fout:
        fout.writelines(lines)

    logger.debug("Rendered %s -> %s (%d lines, %d comments dropped)", src, dst, len(lines), dropped)
    return len(lines)
