"""Repair of declared base types and default base class assignment."""

import logging

from ..config import GeneratorConfig
from ..model.naming import base_type
from ..model.types import TargetKind, TargetModel, TargetType
from ..scanner.paths import SourceRoots

logger = logging.getLogger(__name__)

DECLARED_BASE_KINDS = ("interface", "class")
ROOT_OBJECT_NAMES = ("Object", "java.lang.Object")


def is_root_object(type_name: str) -> bool:
    return type_name in ROOT_OBJECT_NAMES or base_type(type_name) in ROOT_OBJECT_NAMES


def _resolve_declared_base(target: TargetType, model: TargetModel, mappings: dict[str, str]) -> bool:
    """Keep, replace or drop the declared base of one type.

    Returns:
        True when the extends relationship changed
    """
    base = target.extends_name
    if not base or not base.strip():
        return False
    if base in model or "." in base:
        return False

    replacement = mappings.get(base)
    if replacement and replacement.strip():
        target.extends_name = replacement.strip()
        target.extends_type = model.get(target.extends_name)
        logger.debug("%s: unknown base %s mapped to %s", target.name, base, target.extends_name)
        return True

    target.unresolved_bases.append(base)
    target.extends_name = None
    target.extends_type = None
    logger.debug("%s: dropped unresolved base %s", target.name, base)
    return True


def resolve_inheritance(model: TargetModel, config: GeneratorConfig, roots: SourceRoots) -> int:
    """Resolve declared bases, then give base-less classes the default base.

    Returns:
        Number of types whose extends relationship changed
    """
    mappings = config.interface_extends_mappings
    default_base = (config.default_base_class or "").strip()
    changed = 0

    for target in model:
        if target.original_kind in DECLARED_BASE_KINDS and not target.is_helper:
            if _resolve_declared_base(target, model, mappings):
                changed += 1

        if target.extends_name and is_root_object(target.extends_name):
            target.extends_name = None
            target.extends_type = None
            changed += 1

        if (
            default_base
            and target.kind == TargetKind.CLASS
            and not target.extends_name
            and not target.is_helper
            and not is_root_object(default_base)
            and base_type(default_base) != target.name
        ):
            target.extends_name = default_base
            target.extends_type = model.get(default_base)
            changed += 1
    return changed
