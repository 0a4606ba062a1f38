# Shared data models for fexpand.
# Lives in its own module to avoid circular imports between cli, core and expand.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path as FSPath
from typing import Dict, Optional


class PathKind(str, Enum):
    # Result of a single filesystem probe on a path spec.
    file = "file"
    directory = "directory"
    pattern = "pattern"


@dataclass(frozen=True)
class ExpandOptions:
    detect_cycles: bool = True
    max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")


@dataclass(frozen=True)
class RenderOptions:
    src: FSPath
    dst: FSPath
    replacements: Dict[str, str] = field(default_factory=dict)
    comment_prefix: str = "#"
