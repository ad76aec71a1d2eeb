"""TypeScript source discovery and pre-model filters."""

import logging
import os
from pathlib import Path
from typing import List

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from ..config import GeneratorConfig
from ..errors import SourceRootError
from ..parser.models import SourceModel
from .paths import SourceRoots, matches_dir

logger = logging.getLogger(__name__)

DEFAULT_IGNORED_DIRS = [
    ".git",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    "dist",
    "build",
    "coverage",
]


class SourceScanner:
    """Finds .ts files below the configured roots."""

    def __init__(self, config: GeneratorConfig, roots: SourceRoots):
        """Initialize scanner.

        Args:
            config: Generator configuration (exclude list, ignore list)
            roots: Resolved source roots
        """
        self.config = config
        self.roots = roots
        self.ignored_dirs = set(DEFAULT_IGNORED_DIRS)

    def scan(self) -> List[Path]:
        """Collect every .ts file (excluding .d.ts) below all roots.

        Returns:
            File paths, sorted per root, in configured root order

        Raises:
            SourceRootError: If a root is missing or unreadable
        """
        files: List[Path] = []
        seen = set()
        for root in self.roots.roots:
            self._check_root(root)
            logger.info("Scanning TypeScript sources in %s", root)
            for path in self._collect_files(root):
                if path not in seen:
                    seen.add(path)
                    files.append(path)
        logger.info("Found %d TypeScript files", len(files))
        return files

    def _check_root(self, root: Path) -> None:
        if not root.is_dir():
            raise SourceRootError(f"Source directory does not exist: {root}")
        if not os.access(root, os.R_OK | os.X_OK):
            raise SourceRootError(f"Source directory is not readable: {root}")

    def _collect_files(self, root: Path) -> List[Path]:
        gitignore_spec = self._load_gitignore(root)
        files: List[Path] = []

        def on_error(error: OSError) -> None:
            raise SourceRootError(f"Cannot read {error.filename}: {error.strerror}") from error

        for current, dirs, filenames in os.walk(root, onerror=on_error):
            current_path = Path(current)
            dirs[:] = sorted(
                d for d in dirs if not self._should_ignore(current_path / d, root, gitignore_spec)
            )
            for filename in sorted(filenames):
                if not filename.endswith(".ts") or filename.endswith(".d.ts"):
                    continue
                file_path = current_path / filename
                if self._should_ignore(file_path, root, gitignore_spec):
                    continue
                files.append(file_path)
        return files

    def _should_ignore(self, path: Path, root: Path, gitignore_spec: PathSpec | None) -> bool:
        rel_path = path.relative_to(root)
        if any(part in self.ignored_dirs for part in rel_path.parts):
            return True
        candidate = rel_path.as_posix() + ("/" if path.is_dir() else "")
        return bool(gitignore_spec and gitignore_spec.match_file(candidate))

    def _load_gitignore(self, root: Path) -> PathSpec | None:
        """Load .gitignore patterns of a root if present."""
        gitignore_path = root / ".gitignore"
        if not gitignore_path.exists():
            return None
        try:
            patterns = gitignore_path.read_text(encoding="utf-8").splitlines()
        except OSError:
            return None
        if not patterns:
            return None
        return PathSpec.from_lines(GitWildMatchPattern, patterns)

    def filter_excluded_dirs(self, model: SourceModel) -> int:
        """Drop files located in directories listed in ``excludeDirSuffixes``.

        Returns:
            Number of files removed
        """
        suffixes = [s for s in self.config.exclude_dir_suffixes if s and s.strip()]
        if not suffixes:
            return 0

        kept = []
        for source_file in model.files:
            path = Path(source_file.path)
            rel_dir = self.roots.relative_dir(path)
            rel_common = self.roots.common_relative_dir(path)
            excluded = any(matches_dir(rel_dir, s) for s in suffixes) or any(
                matches_dir(rel_common, s) for s in suffixes
            )
            if not excluded:
                kept.append(source_file)

        removed = len(model.files) - len(kept)
        model.files = kept
        if removed:
            logger.info("Excluded TS files by excludeDirSuffixes: %d", removed)
        return removed

    def remove_ignored_items(self, model: SourceModel) -> int:
        """Remove declarations named in ``ignoreTsItems``.

        Returns:
            Number of declarations removed
        """
        ignore = set(self.config.ignore_ts_items)
        if not ignore:
            return 0
        removed = sum(f.remove_named(ignore) for f in model.files)
        if removed:
            logger.info("Ignored TS items removed from model: %d", removed)
        else:
            logger.info("No TS items matched ignore list (%d)", len(ignore))
        return removed
