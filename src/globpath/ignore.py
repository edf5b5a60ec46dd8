"""Exclusion pattern handling using pathspec."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)


def _pattern_lines(lines: Iterable[str]) -> list[str]:
    return [line for line in lines if line.strip() and not line.strip().startswith("#")]


def compile_excludes(patterns: Iterable[str]) -> pathspec.PathSpec | None:
    """Compile gitignore-style patterns, or return `None` if there are none."""
    lines = _pattern_lines(patterns)
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def load_ignore_file(path: str | Path) -> pathspec.PathSpec | None:
    """
    Read a gitignore-syntax file and return a compiled `PathSpec`, or `None` if the
    file doesn't exist or holds no patterns.
    """
    ignore_file = Path(path)
    if not ignore_file.is_file():
        logger.debug("Ignore file not found: %s", ignore_file)
        return None
    return compile_excludes(ignore_file.read_text().splitlines())
