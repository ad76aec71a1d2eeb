"""Builds the target model from parsed declarations.

Construction runs in two steps:
1) create one TargetType per declaration, capturing raw reference names
2) link those names against an index of every created type

Forward and mutual references need no ordering of the source files because
nothing is resolved until every type exists.
"""

import logging
from typing import Optional

from ..parser.models import (
    SourceClass,
    SourceEnum,
    SourceInterface,
    SourceModel,
    SourceProperty,
    SourceTypeAlias,
)
from .naming import capitalize, needs_json_property
from .type_mapper import TEXT, map_ts_type
from .types import EnumValue, TargetKind, TargetModel, TargetProperty, TargetType

logger = logging.getLogger(__name__)

# Members of the four-directional inline object, e.g. { n?: X[]; e?: X[]; ... }
DIRECTIONAL_KEYS = frozenset({"n", "e", "s", "w"})

ALIAS_VALUE_FIELD = "value"


def json_property_annotation(field_name: str) -> str:
    return f'@com.fasterxml.jackson.annotation.JsonProperty("{field_name}")'


def is_directional_shape(members: Optional[list[SourceProperty]]) -> bool:
    """True for inline objects whose keys are a non-empty subset of n/e/s/w."""
    if not members:
        return False
    return {m.name for m in members} <= DIRECTIONAL_KEYS


class ModelBuilder:
    """Creates and links target types."""

    def __init__(self):
        self._pending_helpers: list[TargetType] = []

    def build(self, source: SourceModel) -> TargetModel:
        """Create every type, then link references.

        Args:
            source: Parsed (and filtered) source model

        Returns:
            Linked TargetModel
        """
        model = self.create(source)
        self.link(model)
        return model

    def create(self, source: SourceModel) -> TargetModel:
        """Step 1: create types and capture raw reference names."""
        model = TargetModel()
        for source_file in source.files:
            path = source_file.path
            for interface in source_file.interfaces:
                self._add(model, self._from_interface(interface, path, model))
            for enum in source_file.enums:
                self._add(model, self._from_enum(enum, path))
            for cls in source_file.classes:
                self._add(model, self._from_class(cls, path, model))
            for alias in source_file.type_aliases:
                self._add(model, self._from_alias(alias, path, model))
        logger.info("Target model created: types=%d", len(model))
        return model

    def link(self, model: TargetModel) -> int:
        """Step 2: resolve captured names against the model index.

        Names that are not found stay as raw strings for the rewrite passes.

        Returns:
            Number of references resolved
        """
        resolved = 0
        for target in model:
            ref = model.get(target.extends_name)
            if ref is not None:
                target.extends_type = ref
                resolved += 1

            target.implements_types = []
            seen = set()
            for name in target.implements_names:
                if not name or name in seen:
                    continue
                seen.add(name)
                ref = model.get(name)
                if ref is not None:
                    target.implements_types.append(ref)
                    resolved += 1

            ref = model.get(target.alias_target_name)
            if ref is not None:
                target.alias_target_type = ref
                resolved += 1
        logger.debug("Linked %d references", resolved)
        return resolved

    def _add(self, model: TargetModel, target: TargetType) -> None:
        if target.name in model:
            logger.warning("Duplicate type name %s in %s; last one wins", target.name, target.source_path)
        model.add_type(target)
        # Helpers follow their owner in emission order
        for helper in self._pending_helpers:
            model.add_type(helper)
        self._pending_helpers = []

    def _from_interface(self, decl: SourceInterface, path: str, model: TargetModel) -> TargetType:
        # Interfaces carry state on the Java side, so they become classes
        target = TargetType(
            name=decl.name, kind=TargetKind.CLASS, source_path=path, original_kind="interface"
        )
        if decl.extends:
            target.extends_name = decl.extends[0]
            target.original_extends = list(decl.extends)
            if len(decl.extends) > 1:
                logger.debug(
                    "%s extends %s; only %s is kept",
                    decl.name,
                    ", ".join(decl.extends),
                    decl.extends[0],
                )
        self._add_properties(target, decl.properties, model)
        return target

    def _from_class(self, decl: SourceClass, path: str, model: TargetModel) -> TargetType:
        target = TargetType(name=decl.name, kind=TargetKind.CLASS, source_path=path, original_kind="class")
        if decl.extends:
            target.extends_name = decl.extends
            target.original_extends = [decl.extends]
        target.implements_names = [n for n in decl.implements if n]
        self._add_properties(target, decl.properties, model)
        return target

    def _from_enum(self, decl: SourceEnum, path: str) -> TargetType:
        target = TargetType(name=decl.name, kind=TargetKind.ENUM, source_path=path, original_kind="enum")
        target.enum_values = [EnumValue(m.name, m.value) for m in decl.members]
        return target

    def _from_alias(self, decl: SourceTypeAlias, path: str, model: TargetModel) -> TargetType:
        target = TargetType(name=decl.name, kind=TargetKind.CLASS, source_path=path, original_kind="type")
        if decl.properties:
            self._add_properties(target, decl.properties, model)
            return target

        target.alias_target_name = decl.target
        value_type = map_ts_type(decl.target, optional=True) if decl.target else TEXT
        target.properties.append(TargetProperty(ALIAS_VALUE_FIELD, value_type))
        return target

    def _add_properties(self, target: TargetType, properties: list[SourceProperty], model: TargetModel) -> None:
        for prop in properties:
            if prop.members is not None and not prop.type_hint and is_directional_shape(prop.members):
                java_type = self._ensure_helper(target, prop, model)
            else:
                java_type = map_ts_type(prop.type, prop.optional, prop.type_hint)
            target.properties.append(self._property(prop.name, java_type, prop.optional, prop.visibility))

    def _property(self, name: str, java_type: str, optional: bool, visibility: Optional[str]) -> TargetProperty:
        annotations = [json_property_annotation(name)] if needs_json_property(name) else []
        return TargetProperty(name, java_type, optional, visibility, annotations)

    def _ensure_helper(self, owner: TargetType, prop: SourceProperty, model: TargetModel) -> str:
        """Synthesize the helper class for a recognized inline shape once per name."""
        helper_name = owner.name + capitalize(prop.name)
        if helper_name in model or any(h.name == helper_name for h in self._pending_helpers):
            return helper_name

        helper = TargetType(
            name=helper_name,
            kind=TargetKind.CLASS,
            source_path=owner.source_path,
            original_kind="type",
            helper_owner=owner.name,
        )
        for member in prop.members or []:
            java_type = map_ts_type(member.type, member.optional, member.type_hint)
            helper.properties.append(self._property(member.name, java_type, member.optional, None))
        self._pending_helpers.append(helper)
        return helper_name
