"""Java identifier rules and small name helpers."""

import re
from typing import Optional

JAVA_KEYWORDS = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
        "class", "const", "continue", "default", "do", "double", "else", "enum",
        "extends", "final", "finally", "float", "for", "goto", "if", "implements",
        "import", "instanceof", "int", "interface", "long", "native", "new",
        "package", "private", "protected", "public", "return", "short", "static",
        "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
        "transient", "try", "void", "volatile", "while", "true", "false", "null",
    }
)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_valid_java_identifier(name: Optional[str]) -> bool:
    """True for names usable as a Java identifier (not reserved)."""
    if not name or not _IDENTIFIER.match(name):
        return False
    return name not in JAVA_KEYWORDS


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def base_type(type_expr: Optional[str]) -> Optional[str]:
    """Simple name of a type expression: generics and package dropped."""
    if type_expr is None:
        return None
    raw = type_expr.split("<", 1)[0].strip()
    return raw.rsplit(".", 1)[-1]


def needs_json_property(field_name: Optional[str]) -> bool:
    """True for camelCase names with an inner capital, e.g. ``cTs`` or ``blockId``."""
    if not field_name or len(field_name) <= 1:
        return False
    if not field_name[0].islower():
        return False
    return any(ch.isupper() for ch in field_name[1:])
