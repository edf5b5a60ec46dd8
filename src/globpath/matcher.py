"""
Path matchers: compile a path spec once, then list matching paths on demand.

A spec without glob metacharacters compiles to a `LiteralPath` that never touches
the filesystem. Anything else compiles to a `GlobPath` that walks the tree below
the deepest wildcard-free directory of the spec on every `match()` call.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass

from globpath.pattern import GLOB_CHARS, Glob, compile_glob, has_meta

logger = logging.getLogger(__name__)

# Root derivation also stops at alternations, which only count as glob syntax
# once the spec is already in glob mode.
_ROOT_STOP_CHARS = GLOB_CHARS | {"{"}


@dataclass(frozen=True)
class LiteralPath:
    """A path spec with no wildcards. Matches exactly itself, existing or not."""

    path: str

    def match(self) -> list[str]:
        return [self.path]

    def matches(self, candidate: str) -> bool:
        return candidate == self.path


@dataclass(frozen=True)
class GlobPath:
    """A path spec with wildcards, plus the directory its walks start from."""

    path: str
    glob: Glob
    root: str

    @property
    def separator(self) -> str:
        return self.glob.separator

    def match(self) -> list[str]:
        """
        Walk the tree under `root` and return every path (files and directories)
        the glob matches, in walk order. Never raises; unreadable entries are skipped.
        """
        return [path for path in walk_paths(self.root, self.separator) if self.glob.match(path)]

    def matches(self, candidate: str) -> bool:
        return self.glob.match(candidate)


CompiledPath = LiteralPath | GlobPath


def compile_path(path: str, separator: str = os.sep) -> CompiledPath:
    """
    Compile a path spec into a `LiteralPath` or a `GlobPath`.

    Raises `InvalidPatternError` if the spec has glob metacharacters but malformed
    syntax. No filesystem access happens here.
    """
    if not has_meta(path):
        return LiteralPath(path)

    source = _strip_curdir(path, separator)
    return GlobPath(
        path=path,
        glob=compile_glob(source, separator),
        root=find_root_dir(source, separator),
    )


def find_root_dir(path: str, separator: str = os.sep) -> str:
    """
    Find the deepest wildcard-free directory of a path spec. For example:

      /var/log/*.log        -> /var/log
      /home/**              -> /home
      /home/*/**            -> /home
      /lib/share/*/*/**.txt -> /lib/share
      /*.log                -> /
      logs/*.log            -> logs
      *.log                 -> .

    The final segment is never part of the root, even when it is literal.
    """
    segments = path.split(separator)
    kept: list[str] = []
    for segment in segments[:-1]:
        if not segment:
            continue
        if any(c in _ROOT_STOP_CHARS for c in segment):
            break
        kept.append(segment)

    # Keep the whole leading run of separators, as in a UNC share path.
    leading = len(path) - len(path.lstrip(separator))
    if leading:
        return separator * leading + separator.join(kept)
    return separator.join(kept) or os.curdir


def walk_paths(root: str, separator: str = os.sep) -> Iterator[str]:
    """
    Yield `root` and everything below it, depth-first in pre-order with each
    directory's entries sorted by name.

    Symlinks below the root are yielded but not descended into. Entries that
    cannot be read are logged at debug level and skipped. When `root` is the
    current directory, children are yielded as bare relative names.
    """
    try:
        root_is_dir = stat.S_ISDIR(os.stat(root).st_mode)
    except OSError as e:
        logger.debug("Skipping walk root %s: %s", root, e)
        return

    if root == os.curdir:
        stack = _list_children(root, "")
    else:
        stack = [(root, root_is_dir)]

    while stack:
        path, is_dir = stack.pop()
        yield path
        if is_dir:
            stack.extend(_list_children(path, _child_prefix(path, separator)))


def _list_children(directory: str, prefix: str) -> list[tuple[str, bool]]:
    """
    List `(path, is_dir)` pairs for a directory's entries in reverse name order,
    ready to be pushed onto a walk stack.
    """
    children: list[tuple[str, bool]] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    logger.debug("Skipping %s: %s", entry.path, e)
                    continue
                children.append((entry.name, is_dir))
    except OSError as e:
        logger.debug("Cannot list directory %s: %s", directory, e)
        return []

    children.sort(reverse=True)
    return [(prefix + name, is_dir) for name, is_dir in children]


def _child_prefix(directory: str, separator: str) -> str:
    if directory.endswith(separator):
        return directory
    return directory + separator


def _strip_curdir(path: str, separator: str) -> str:
    """Drop leading `./` segments so walk output and the glob agree."""
    curdir_prefix = os.curdir + separator
    while path.startswith(curdir_prefix):
        path = path[len(curdir_prefix) :]
    return path
