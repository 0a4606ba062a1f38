# Filename-pattern expansion for fexpand.
# Turns a file name, a directory name or a glob pattern into the flat list
# of regular files it denotes.
#
# No renaming or mutation is allowed here; every call is a read-only
# inspection of the live filesystem and keeps no state between calls.

from __future__ import annotations

import glob
import logging
import os
import stat
from typing import Iterable, Iterator, List, Optional, Set, Tuple, Union

from fexpand.models import ExpandOptions, PathKind
from fexpand.naming import todir

logger = logging.getLogger(__name__)

PathSpec = Union[str, "os.PathLike[str]"]

# (st_dev, st_ino) of a directory.
_DirId = Tuple[int, int]

_DEFAULT_OPTIONS = ExpandOptions()


def _probe(path: str) -> Tuple[PathKind, Optional[os.stat_result]]:
    # Classify a path with a single stat call.
    # Every stat failure (missing, permission denied, loop, bad name) is
    # folded into "pattern" so the caller falls through to globbing.
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return PathKind.pattern, None

    if stat.S_ISREG(st.st_mode):
        return PathKind.file, st
    if stat.S_ISDIR(st.st_mode):
        return PathKind.directory, st
    return PathKind.pattern, st


def classify(spec: PathSpec) -> PathKind:
    """Return whether ``spec`` is an existing file, directory, or neither."""
    return _probe(os.fspath(spec))[0]


def glob_paths(pattern: PathSpec) -> List[str]:
    """Return every path matching ``pattern``, in the order glob yields them.

    A leading ``~`` or ``~user`` is expanded first. Wildcards never match
    names starting with a dot, and ``**`` has no special meaning.
    """
    return glob.glob(os.path.expanduser(os.fspath(pattern)))


def _children(dirname: str) -> Iterator[str]:
    # List the non-hidden entries of a directory through glob, the same way
    # "dir/*" would be expanded by a shell. The directory part is escaped so
    # brackets or stars in real directory names are taken literally.
    return iter(glob.glob(glob.escape(todir(dirname)) + "*"))


def _walk(root: str, root_stat: os.stat_result, opts: ExpandOptions) -> List[str]:
    # Depth-first expansion with an explicit stack of child iterators.
    # Output order equals the recursive concatenation of each child's
    # contribution in enumeration order.
    files: List[str] = []
    root_id: _DirId = (root_stat.st_dev, root_stat.st_ino)
    stack: List[Tuple[Iterator[str], _DirId]] = [(_children(root), root_id)]
    # Only directories on the current descent path count as a cycle, so two
    # separate links to the same directory are both expanded.
    ancestors: Set[_DirId] = {root_id}

    while stack:
        children, current_id = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            ancestors.discard(current_id)
            continue

        kind, st = _probe(child)
        if kind is PathKind.file:
            files.append(child)
            continue
        if kind is not PathKind.directory:
            # Sockets, pipes, devices and dangling links contribute nothing.
            continue

        depth = len(stack)
        if opts.max_depth is not None and depth > opts.max_depth:
            logger.debug("Depth limit %d reached, not descending: %s", opts.max_depth, child)
            continue

        child_id: _DirId = (st.st_dev, st.st_ino)
        if opts.detect_cycles and child_id in ancestors:
            logger.warning("Directory cycle detected, skipping: %s", child)
            continue

        ancestors.add(child_id)
        stack.append((_children(child), child_id))

    return files


def expand_dir(dirname: PathSpec, options: Optional[ExpandOptions] = None) -> List[str]:
    """Return every regular file below ``dirname``, descending into subdirectories.

    Entries whose names start with a dot are skipped at every level.
    A path that is not a directory yields an empty list.
    """
    root = os.fspath(dirname)
    kind, st = _probe(root)
    if kind is not PathKind.directory:
        return []
    return _walk(root, st, options or _DEFAULT_OPTIONS)


def expand(spec: PathSpec, options: Optional[ExpandOptions] = None) -> List[str]:
    """Expand one path spec into the regular files it names.

    - an existing regular file yields ``[spec]``
    - an existing directory yields every file below it; a leading ``~`` is
      expanded first when the literal name does not exist, so ``~/data``
      behaves like the absolute path it stands for
    - anything else is treated as a glob pattern; only regular files among
      the matches are returned, and no match is simply an empty list
    """
    path = os.fspath(spec)
    kind, st = _probe(path)

    if kind is PathKind.pattern:
        home_path = os.path.expanduser(path)
        if home_path != path:
            home_kind, home_st = _probe(home_path)
            if home_kind is PathKind.directory:
                path, kind, st = home_path, home_kind, home_st

    if kind is PathKind.file:
        logger.debug("Expanding %s as a file", path)
        return [path]

    if kind is PathKind.directory:
        logger.debug("Expanding %s as a directory", path)
        return _walk(path, st, options or _DEFAULT_OPTIONS)

    logger.debug("Expanding %s as a pattern", path)
    return [match for match in glob_paths(path) if classify(match) is PathKind.file]


def expand_all(
    specs: Union[PathSpec, Iterable[PathSpec]],
    options: Optional[ExpandOptions] = None,
) -> List[str]:
    """Expand each spec in order and concatenate the results.

    Files reachable from more than one spec appear once per spec.
    """
    # A single string is one spec, not a sequence of characters.
    if isinstance(specs, (str, os.PathLike)):
        specs = [specs]

    files: List[str] = []
    for spec in specs:
        files.extend(expand(spec, options))
    return files
