"""Target (Java) type model built from parsed declarations."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TargetKind(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"


@dataclass
class TargetProperty:
    """A field (or interface accessor) of an emitted type."""

    name: str
    type: str
    optional: bool = False
    visibility: Optional[str] = None
    annotations: list[str] = field(default_factory=list)


@dataclass
class EnumValue:
    """An enum constant with the raw value captured from the source."""

    name: str
    value: Optional[str] = None


@dataclass(eq=False)
class TargetType:
    """One emitted Java declaration.

    Reference names (extends, implements, alias target) start out as raw
    source names. Linking fills the ``*_type`` slots when the name is found in
    the model; rewrite passes may replace the names with qualified ones.
    """

    name: str
    kind: TargetKind
    source_path: Optional[str] = None
    original_kind: Optional[str] = None  # "interface", "class", "enum", "type"
    package: str = ""

    extends_name: Optional[str] = None
    extends_type: Optional[TargetType] = None
    original_extends: list[str] = field(default_factory=list)
    implements_names: list[str] = field(default_factory=list)
    implements_types: list[TargetType] = field(default_factory=list)
    alias_target_name: Optional[str] = None
    alias_target_type: Optional[TargetType] = None

    properties: list[TargetProperty] = field(default_factory=list)
    enum_values: list[EnumValue] = field(default_factory=list)

    # Base names dropped during inheritance resolution
    unresolved_bases: list[str] = field(default_factory=list)

    # Set on synthesized helper types: name of the owning type
    helper_owner: Optional[str] = None

    @property
    def is_helper(self) -> bool:
        return self.helper_owner is not None

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    def unique_properties(self) -> list[TargetProperty]:
        """Properties in declaration order, first occurrence of each name wins."""
        seen = set()
        result = []
        for prop in self.properties:
            if prop.name in seen:
                continue
            seen.add(prop.name)
            result.append(prop)
        return result

    def __repr__(self) -> str:
        return f"TargetType({self.kind.value} {self.qualified_name})"


class TargetModel:
    """Arena of target types keyed by simple name."""

    def __init__(self):
        self.types: list[TargetType] = []
        self._index: dict[str, TargetType] = {}

    def add_type(self, target: TargetType) -> None:
        """Add a type; a later type with the same name replaces the earlier one."""
        previous = self._index.get(target.name)
        if previous is not None:
            self.types = [t for t in self.types if t is not previous]
        self.types.append(target)
        self._index[target.name] = target

    def get(self, name: Optional[str]) -> Optional[TargetType]:
        if not name:
            return None
        return self._index.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self.types)

    def __iter__(self):
        return iter(self.types)

    @property
    def index(self) -> dict[str, TargetType]:
        return dict(self._index)
