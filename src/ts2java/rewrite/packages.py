"""Java package placement for every target type."""

import logging
from pathlib import Path
from typing import Optional

from ..config import GeneratorConfig
from ..model.types import TargetModel, TargetType
from ..scanner.paths import SourceRoots

logger = logging.getLogger(__name__)


class PackageResolver:
    """Derives a Java package from the directory a type was declared in.

    Rules are matched against the directory relative to the type's own root
    first and against the directory relative to the common ancestor of all
    roots second. Within each attempt the first rule (in declared order) whose
    ``dirEndsWith`` is a suffix of the directory wins.
    """

    def __init__(self, config: GeneratorConfig, roots: SourceRoots):
        self.config = config
        self.roots = roots

    def resolve(self, target: TargetType) -> Optional[str]:
        base = self.config.base_package
        if not target.source_path:
            return base

        path = Path(target.source_path)
        rel_dir = self.roots.relative_dir(path)
        rel_common = self.roots.common_relative_dir(path)

        for candidate in (rel_dir, rel_common):
            pkg = self._match_rule(candidate)
            if pkg:
                return pkg

        if base is None:
            return None
        rel = rel_dir or rel_common
        if not rel:
            return base
        rel_pkg = rel.replace("/", ".")
        return base + rel_pkg if base.endswith(".") else f"{base}.{rel_pkg}"

    def _match_rule(self, rel_dir: Optional[str]) -> Optional[str]:
        if not rel_dir:
            return None
        for rule in self.config.package_rules:
            suffix = (rule.dir_ends_with or "").replace("\\", "/")
            if not suffix.strip() or not rule.pkg.strip():
                continue
            if rel_dir.endswith(suffix):
                return rule.pkg.strip()
        return None


def resolve_packages(model: TargetModel, config: GeneratorConfig, roots: SourceRoots) -> int:
    """Assign a package to every type.

    Returns:
        Number of types that received a non-empty package
    """
    resolver = PackageResolver(config, roots)
    changed = 0
    for target in model:
        pkg = resolver.resolve(target)
        if pkg and pkg.strip():
            target.package = pkg.strip()
            changed += 1
            logger.debug("Package of %s: %s", target.name, target.package)
    return changed
