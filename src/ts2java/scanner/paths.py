"""Source-root bookkeeping shared by directory filters and package resolution."""

import os
from pathlib import Path
from typing import Optional


class SourceRoots:
    """The configured TypeScript roots and their deepest common ancestor."""

    def __init__(self, roots: list[Path]):
        self.roots: list[Path] = [Path(r).resolve() for r in roots]
        self.common: Optional[Path] = (
            Path(os.path.commonpath([str(r) for r in self.roots])) if self.roots else None
        )

    def root_for(self, file_path: Path) -> Optional[Path]:
        """Return the first configured root that contains ``file_path``."""
        resolved = Path(file_path).resolve()
        for root in self.roots:
            if resolved == root or root in resolved.parents:
                return root
        return None

    def relative_dir(self, file_path: Path) -> Optional[str]:
        """Directory of ``file_path`` relative to the root containing it.

        Returns:
            POSIX-style relative directory, or None when the file sits directly
            in its root or outside every root
        """
        return _relative_parent(file_path, self.root_for(file_path))

    def common_relative_dir(self, file_path: Path) -> Optional[str]:
        """Directory of ``file_path`` relative to the common ancestor of all roots."""
        return _relative_parent(file_path, self.common)


def _relative_parent(file_path: Path, base: Optional[Path]) -> Optional[str]:
    if base is None:
        return None
    try:
        rel = Path(file_path).resolve().relative_to(base).parent
    except ValueError:
        return None
    posix = rel.as_posix()
    return None if posix in ("", ".") else posix


def matches_dir(rel_dir: Optional[str], suffix: str) -> bool:
    """Check whether a relative directory lies in (or under) a directory suffix."""
    if not rel_dir or not suffix:
        return False
    rel = rel_dir.replace("\\", "/")
    suf = suffix.replace("\\", "/").strip("/")
    if not suf:
        return False
    return (
        rel == suf
        or rel.endswith("/" + suf)
        or rel.startswith(suf + "/")
        or ("/" + suf + "/") in rel
    )
