# String helpers used by fexpand for list handling and template substitution.
# This module is pure logic and must remain side-effect free.

from __future__ import annotations

import re
from typing import Iterable, List, Mapping


def split(s: str, sep: str) -> List[str]:
    # Split on a separator string, dropping empty pieces.
    # "a,,b," -> ["a", "b"]
    if not sep:
        raise ValueError("separator must not be empty")
    return [piece for piece in s.split(sep) if piece]


def split_any(s: str, seps: str) -> List[str]:
    # Split on any single character in seps, dropping empty pieces.
    if not seps:
        raise ValueError("separator set must not be empty")
    return [piece for piece in re.split(f"[{re.escape(seps)}]", s) if piece]


def split_regex(s: str, pattern: str) -> List[str]:
    # Split on a regular expression.
    # Inner empty pieces are kept; only one trailing empty piece is dropped.
    pieces = re.split(pattern, s)
    if pieces and pieces[-1] == "":
        pieces.pop()
    return pieces


def join(items: Iterable[str], sep: str) -> str:
    return sep.join(items)


def starts_with(s: str, key: str) -> bool:
    return s.startswith(key)


def ends_with(s: str, key: str) -> bool:
    return s.endswith(key)


def replace_all(text: str, replacements: Mapping[str, str]) -> str:
    # Apply each replacement in mapping order.
    # Within one key the scan is left to right and never revisits inserted
    # text, so "a" -> "aa" terminates. A later key does see the output of
    # an earlier one.
    for before, after in replacements.items():
        if not before:
            raise ValueError("replacement key must not be empty")
        text = text.replace(before, after)
    return text
