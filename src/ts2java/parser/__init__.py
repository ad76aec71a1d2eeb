"""TypeScript declaration parsing."""

from .models import (
    SourceProperty,
    SourceInterface,
    SourceClass,
    SourceEnumMember,
    SourceEnum,
    SourceTypeAlias,
    SourceFile,
    SourceModel,
)
from .ts_parser import TSDeclarationParser, parse_type_hint

__all__ = [
    "SourceProperty",
    "SourceInterface",
    "SourceClass",
    "SourceEnumMember",
    "SourceEnum",
    "SourceTypeAlias",
    "SourceFile",
    "SourceModel",
    "TSDeclarationParser",
    "parse_type_hint",
]
