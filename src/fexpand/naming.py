# Directory-name helpers for fexpand.
# This module is pure logic and must remain side-effect free.

from __future__ import annotations

import os
from datetime import date
from typing import Optional


def todir(path: str) -> str:
    # Normalize a directory name so it always ends with a separator.
    # Accepts both separators on platforms that have an altsep.
    seps = (os.sep, os.altsep) if os.altsep else (os.sep,)
    if path.endswith(seps):
        return path
    return path + os.sep


def add_folder_suffix_with_date(folder: str, today: Optional[date] = None) -> str:
    # Build "<folder>YYYYMMDD/" from a folder name.
    # Exactly one trailing separator is stripped before the date is appended.
    # Month and day are zero-padded (20260109), unlike the unpadded 202619
    # some older tools produce, so names sort and parse unambiguously.
    stamp = (today or date.today()).strftime("%Y%m%d")
    seps = (os.sep, os.altsep) if os.altsep else (os.sep,)
    if folder.endswith(seps):
        folder = folder[:-1]
    return folder + stamp + os.sep
