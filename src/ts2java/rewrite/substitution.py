"""Global simple-name to qualified-name substitution."""

import logging
from typing import Optional

from ..config import GeneratorConfig
from ..model.type_mapper import split_top_level
from ..model.types import TargetModel
from ..scanner.paths import SourceRoots

logger = logging.getLogger(__name__)


def substitute_type(type_expr: Optional[str], mappings: dict[str, str]) -> Optional[str]:
    """Apply ``mappings`` to every simple name in a Java type expression.

    Generic arguments and array elements are rewritten recursively; dotted
    names are left untouched.

    Returns:
        The rewritten expression, or None when nothing changed
    """
    if not type_expr or not type_expr.strip() or not mappings:
        return None
    s = type_expr.strip()

    lt = s.find("<")
    if lt >= 0 and s.endswith(">"):
        raw = s[:lt].strip()
        args = [a.strip() for a in split_top_level(s[lt + 1 : -1], ",")]
        mapped_args = [substitute_type(a, mappings) or a for a in args]
        result = f"{_substitute_simple(raw, mappings) or raw}<{', '.join(mapped_args)}>"
        return result if result != type_expr else None

    if s.endswith("[]"):
        element = s[:-2].strip()
        result = (substitute_type(element, mappings) or element) + "[]"
        return result if result != type_expr else None

    mapped = _substitute_simple(s, mappings)
    return mapped if mapped is not None and mapped != type_expr else None


def _substitute_simple(name: str, mappings: dict[str, str]) -> Optional[str]:
    if not name or "." in name:
        return None
    mapped = mappings.get(name)
    if mapped is None or not mapped.strip():
        return None
    return mapped.strip()


def apply_type_mappings(model: TargetModel, config: GeneratorConfig, roots: SourceRoots) -> int:
    """Rewrite extends, implements, alias targets and property types.

    Returns:
        Number of rewritten references
    """
    mappings = config.type_mappings
    if not mappings:
        return 0

    changed = 0
    for target in model:
        mapped = substitute_type(target.extends_name, mappings)
        if mapped:
            target.extends_name = mapped
            target.extends_type = model.get(mapped)
            changed += 1

        for i, name in enumerate(target.implements_names):
            mapped = substitute_type(name, mappings)
            if mapped:
                target.implements_names[i] = mapped
                changed += 1

        mapped = substitute_type(target.alias_target_name, mappings)
        if mapped:
            target.alias_target_name = mapped
            target.alias_target_type = model.get(mapped)
            changed += 1

        for prop in target.properties:
            mapped = substitute_type(prop.type, mappings)
            if mapped:
                logger.debug("%s.%s: %s -> %s", target.name, prop.name, prop.type, mapped)
                prop.type = mapped
                changed += 1

        target.implements_types = [t for t in (model.get(n) for n in target.implements_names) if t]
    return changed
