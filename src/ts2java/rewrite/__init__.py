"""Configuration-driven rewrites of the linked target model.

Each pass is a total function over the whole model and runs to completion
before the next one starts.
"""

import logging

from ..config import GeneratorConfig
from ..model.types import TargetModel
from ..scanner.paths import SourceRoots
from .enums import apply_enum_interfaces, interface_for_enum
from .inheritance import resolve_inheritance
from .overrides import apply_field_overrides, field_override
from .packages import PackageResolver, resolve_packages
from .substitution import apply_type_mappings, substitute_type

logger = logging.getLogger(__name__)

REWRITE_PASSES = (
    resolve_packages,
    apply_enum_interfaces,
    apply_type_mappings,
    apply_field_overrides,
    resolve_inheritance,
)


def run_rewrites(model: TargetModel, config: GeneratorConfig, roots: SourceRoots) -> dict[str, int]:
    """Run every pass in order.

    Returns:
        Change count per pass name
    """
    counts = {}
    for rewrite in REWRITE_PASSES:
        counts[rewrite.__name__] = rewrite(model, config, roots)
        logger.debug("Rewrite %s: %d changes", rewrite.__name__, counts[rewrite.__name__])
    return counts


__all__ = [
    "REWRITE_PASSES",
    "run_rewrites",
    "PackageResolver",
    "resolve_packages",
    "apply_enum_interfaces",
    "interface_for_enum",
    "apply_type_mappings",
    "substitute_type",
    "apply_field_overrides",
    "field_override",
    "resolve_inheritance",
]
