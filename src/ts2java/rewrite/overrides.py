"""Per-field type overrides from ``fieldTypeMappings``."""

import logging
from typing import Optional

from ..config import GeneratorConfig
from ..model.types import TargetModel
from ..scanner.paths import SourceRoots

logger = logging.getLogger(__name__)


def field_override(mappings: dict[str, str], package: str, class_name: str, field_name: str) -> Optional[str]:
    """Look up an override for ``[package.]Class.field``.

    Keys are tried as the fully qualified form, then ``Class.field``, then
    any key the fully qualified form ends with.
    """
    simple = f"{class_name}.{field_name}"
    qualified = f"{package}.{simple}" if package else simple

    for key in (qualified, simple):
        value = mappings.get(key)
        if value and value.strip():
            return value.strip()

    for key, value in mappings.items():
        if key and key.strip() and qualified.endswith(key.strip()) and value and value.strip():
            return value.strip()
    return None


def apply_field_overrides(model: TargetModel, config: GeneratorConfig, roots: SourceRoots) -> int:
    """Replace field types that have a configured override.

    Returns:
        Number of fields overridden
    """
    mappings = config.field_type_mappings
    if not mappings:
        return 0
    changed = 0
    for target in model:
        for prop in target.properties:
            override = field_override(mappings, target.package, target.name, prop.name)
            if override is None:
                continue
            logger.debug("Override %s.%s: %s -> %s", target.qualified_name, prop.name, prop.type, override)
            prop.type = override
            changed += 1
    return changed
