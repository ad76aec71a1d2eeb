"""Marker interfaces for generated enums."""

import logging
from typing import Optional

from ..config import GeneratorConfig
from ..model.types import TargetKind, TargetModel, TargetType
from ..scanner.paths import SourceRoots

logger = logging.getLogger(__name__)

WILDCARD = "*"
PACKAGE_WILDCARD_SUFFIX = ".*"


def interface_for_enum(target: TargetType, mapping: dict[str, str]) -> Optional[str]:
    """Pick the interface for an enum: exact name, then ``pkg.*`` prefix, then ``*``."""
    chosen = mapping.get(target.name)
    if chosen is None and target.package:
        for key, value in mapping.items():
            if key.endswith(PACKAGE_WILDCARD_SUFFIX) and target.package.startswith(
                key[: -len(PACKAGE_WILDCARD_SUFFIX)]
            ):
                chosen = value
                break
    if chosen is None:
        chosen = mapping.get(WILDCARD)
    if chosen is None or not chosen.strip():
        return None
    return chosen.strip()


def apply_enum_interfaces(model: TargetModel, config: GeneratorConfig, roots: SourceRoots) -> int:
    """Append the configured interface to every matching enum's implements list.

    Returns:
        Number of enums that gained an interface
    """
    mapping = config.enum_interface_mapping
    if not mapping:
        return 0
    changed = 0
    for target in model:
        if target.kind != TargetKind.ENUM:
            continue
        interface = interface_for_enum(target, mapping)
        if interface is None:
            logger.debug("No interface mapping for enum %s", target.name)
            continue
        target.implements_names.append(interface)
        changed += 1
        logger.debug("Enum %s implements %s", target.name, interface)
    return changed
