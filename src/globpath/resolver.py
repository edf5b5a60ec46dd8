"""
PathResolver: the multi-pattern entry point for configuration-driven callers.

Compiles a list of path specs, expands each one against the filesystem, and applies
gitignore-style exclusions before returning a de-duplicated list of paths.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

import pathspec

from globpath.ignore import compile_excludes, load_ignore_file
from globpath.matcher import CompiledPath, GlobPath, LiteralPath, compile_path
from globpath.types import ResolverConfig

logger = logging.getLogger(__name__)


class PathResolver:
    """
    Expands path specs into concrete paths while honoring exclusions.

    Literal specs pass through unverified, the same as `LiteralPath.match()`; only
    exclusions can remove them. With exclusions configured, a literal is stat'ed once
    so directory patterns such as `logs/` apply to it.
    """

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self._config: ResolverConfig = config or ResolverConfig()
        self._exclude_specs: list[pathspec.PathSpec] = []
        spec = compile_excludes(self._config.exclude)
        if spec is not None:
            self._exclude_specs.append(spec)
        for ignore_file in self._config.exclude_from:
            spec = load_ignore_file(ignore_file)
            if spec is not None:
                self._exclude_specs.append(spec)

    def compile(self, patterns: Sequence[str]) -> list[CompiledPath]:
        """Compile every spec. The first `InvalidPatternError` propagates."""
        return [compile_path(pattern, self._config.separator) for pattern in patterns]

    def resolve(self, patterns: Sequence[str]) -> list[str]:
        """
        Resolve specs into a de-duplicated list of paths, in the order they were
        first found. Raises `InvalidPatternError` before any walking if a spec is
        malformed.
        """
        seen: set[str] = set()
        result: list[str] = []

        for compiled in self.compile(patterns):
            found = 0
            for path in self._expand(compiled):
                found += 1
                if path not in seen:
                    seen.add(path)
                    result.append(path)
            logger.debug("Pattern %r resolved to %d path(s)", compiled.path, found)

        return result

    def _expand(self, compiled: CompiledPath) -> Iterable[str]:
        if isinstance(compiled, LiteralPath):
            # Only stat a literal when a directory pattern like `logs/` could apply.
            is_dir = bool(self._exclude_specs) and os.path.isdir(compiled.path)
            if not self._is_excluded(compiled.path, compiled, is_dir):
                yield compiled.path
            return

        for path in compiled.match():
            is_dir = os.path.isdir(path)
            if is_dir and self._config.files_only:
                continue
            if self._is_excluded(path, compiled, is_dir):
                continue
            yield path

    def _is_excluded(self, path: str, compiled: CompiledPath, is_dir: bool) -> bool:
        """
        Check a path against all exclusions, both as given and (for wildcard
        matches) relative to the walk root, so anchored patterns like `/tmp/`
        work against either form.
        """
        if not self._exclude_specs:
            return False

        keys = [self._spec_key(path, is_dir)]
        if isinstance(compiled, GlobPath):
            relative = _relative_to(path, compiled.root, self._config.separator)
            if relative:
                keys.append(self._spec_key(relative, is_dir))

        return any(spec.match_file(key) for spec in self._exclude_specs for key in keys)

    def _spec_key(self, path: str, is_dir: bool) -> str:
        """Convert a path to the `/`-separated relative form pathspec expects."""
        key = path.replace(self._config.separator, "/").lstrip("/")
        if is_dir:
            key += "/"
        return key


def _relative_to(path: str, root: str, separator: str) -> str | None:
    if root == os.curdir:
        return path
    prefix = root if root.endswith(separator) else root + separator
    if path.startswith(prefix):
        return path[len(prefix) :]
    return None
