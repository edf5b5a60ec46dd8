"""Configuration types for resolving path patterns."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class ResolverConfig:
    """
    Configuration for turning path patterns into concrete paths.

    `exclude` holds gitignore-style patterns; `exclude_from` names files holding more
    of them. `files_only=True` drops directories from wildcard matches (literal paths
    are always kept). `separator` is the path separator used to split and match specs.
    """

    exclude: list[str] = field(default_factory=list)
    exclude_from: list[str] = field(default_factory=list)
    files_only: bool = False
    separator: str = os.sep
