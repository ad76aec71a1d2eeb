"""Data models for parsed TypeScript declarations."""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class SourceProperty:
    """A property of an interface or class body."""

    name: str
    type: str
    optional: bool = False
    visibility: str | None = None  # "public", "protected", "private"
    comment: str | None = None
    type_hint: str | None = None  # explicit javaType pragma
    members: list[SourceProperty] | None = None  # inline object literal members

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "type": self.type,
            "optional": self.optional,
        }
        if self.visibility:
            result["visibility"] = self.visibility
        if self.comment:
            result["comment"] = self.comment
        if self.type_hint:
            result["typeHint"] = self.type_hint
        if self.members is not None:
            result["members"] = [m.to_dict() for m in self.members]
        return result


@dataclass
class SourceInterface:
    name: str
    extends: list[str] = field(default_factory=list)
    properties: list[SourceProperty] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "extends": self.extends,
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass
class SourceClass:
    name: str
    extends: str | None = None
    implements: list[str] = field(default_factory=list)
    properties: list[SourceProperty] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "extends": self.extends,
            "implements": self.implements,
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass
class SourceEnumMember:
    """An enum constant and its raw assigned value, if any."""

    name: str
    value: str | None = None

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass
class SourceEnum:
    name: str
    members: list[SourceEnumMember] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "members": [m.to_dict() for m in self.members]}


@dataclass
class SourceTypeAlias:
    name: str
    target: str | None = None
    properties: list[SourceProperty] | None = None

    def to_dict(self) -> dict:
        result = {"name": self.name, "target": self.target}
        if self.properties is not None:
            result["properties"] = [p.to_dict() for p in self.properties]
        return result


@dataclass
class SourceFile:
    """All declarations found in one .ts file."""

    path: str
    imports: list[str] = field(default_factory=list)
    interfaces: list[SourceInterface] = field(default_factory=list)
    classes: list[SourceClass] = field(default_factory=list)
    enums: list[SourceEnum] = field(default_factory=list)
    type_aliases: list[SourceTypeAlias] = field(default_factory=list)

    def declaration_count(self) -> int:
        return len(self.interfaces) + len(self.classes) + len(self.enums) + len(self.type_aliases)

    def remove_named(self, names: set[str]) -> int:
        """Drop every declaration whose name is in ``names``.

        Returns:
            Number of declarations removed
        """
        before = self.declaration_count()
        self.interfaces = [d for d in self.interfaces if d.name not in names]
        self.classes = [d for d in self.classes if d.name not in names]
        self.enums = [d for d in self.enums if d.name not in names]
        self.type_aliases = [d for d in self.type_aliases if d.name not in names]
        return before - self.declaration_count()

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "imports": self.imports,
            "interfaces": [d.to_dict() for d in self.interfaces],
            "classes": [d.to_dict() for d in self.classes],
            "enums": [d.to_dict() for d in self.enums],
            "typeAliases": [d.to_dict() for d in self.type_aliases],
        }


@dataclass
class SourceModel:
    """Parsed declarations of every discovered source file."""

    files: list[SourceFile] = field(default_factory=list)

    def declaration_count(self) -> int:
        return sum(f.declaration_count() for f in self.files)

    def to_dict(self) -> dict:
        return {"files": [f.to_dict() for f in self.files]}
