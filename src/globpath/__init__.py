"""
Expand filesystem path patterns into the paths currently on disk.

A path spec is compiled once and can then be matched any number of times; each
match walks the filesystem again, starting from the deepest directory of the spec
that contains no wildcards.

Usage::

    from globpath import compile_path

    matcher = compile_path("/var/log/**/*.log")
    files = matcher.match()

For several specs with exclusions::

    from globpath import PathResolver, ResolverConfig

    resolver = PathResolver(ResolverConfig(exclude=["*.gz"], files_only=True))
    files = resolver.resolve(["/var/log/*.log", "/srv/app/logs/**"])
"""

from globpath.matcher import (
    CompiledPath,
    GlobPath,
    LiteralPath,
    compile_path,
    find_root_dir,
    walk_paths,
)
from globpath.pattern import Glob, InvalidPatternError, compile_glob, has_meta
from globpath.resolver import PathResolver
from globpath.types import ResolverConfig

__all__ = [
    "CompiledPath",
    "Glob",
    "GlobPath",
    "InvalidPatternError",
    "LiteralPath",
    "PathResolver",
    "ResolverConfig",
    "compile_glob",
    "compile_path",
    "find_root_dir",
    "has_meta",
    "walk_paths",
]
