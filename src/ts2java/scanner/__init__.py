"""Source discovery and directory bookkeeping."""

from .paths import SourceRoots, matches_dir
from .sources import SourceScanner, DEFAULT_IGNORED_DIRS

__all__ = ["SourceRoots", "matches_dir", "SourceScanner", "DEFAULT_IGNORED_DIRS"]
