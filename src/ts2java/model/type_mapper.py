"""Mapping of TypeScript type expressions to Java type expressions.

``map_ts_type`` is a pure function. Rules are tried in priority order and the
first one that applies wins; anything without a confident mapping becomes
``Object``. Feeding an already-mapped Java expression back in returns it
unchanged.
"""

import re
from typing import Optional

TEXT = "String"
DECIMAL = "double"
BOOLEAN = "boolean"
OPAQUE = "Object"
STRING_MAP = "java.util.Map<String, Object>"

JAVA_PRIMITIVES = {
    "int": "java.lang.Integer",
    "long": "java.lang.Long",
    "double": "java.lang.Double",
    "float": "java.lang.Float",
    "short": "java.lang.Short",
    "byte": "java.lang.Byte",
    "char": "java.lang.Character",
    "boolean": "java.lang.Boolean",
}

_OPAQUE_KEYWORDS = {"any", "unknown", "null", "undefined", "void", "never"}
_UNWRAPPING_GENERICS = {"Readonly", "Required", "NonNullable", "Awaited", "Promise"}
_SHAPE_GENERICS = {"Pick", "Omit"}
_ARRAY_GENERICS = {"Array", "ReadonlyArray"}
_MAP_GENERICS = {"Map", "Record"}

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*$")
_NUMERIC_LITERAL = re.compile(r"^-?\d+(?:\.\d+)?$")
_GENERIC_PARAM = re.compile(r"^[A-Z]$")

_OPENERS = {"<": ">", "(": ")", "[": "]", "{": "}"}
_CLOSERS = {">", ")", "]", "}"}
_QUOTES = ("'", '"', "`")


def _top_level_positions(s: str):
    """Yield (index, char) for every character outside brackets and quotes."""
    depth = 0
    quote = None
    i = 0
    while i < len(s):
        ch = s[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            if depth == 0:
                yield i, ch
            quote = ch
        elif ch == "=" and i + 1 < len(s) and s[i + 1] == ">":
            if depth == 0:
                yield i, "=>"
            i += 2
            continue
        elif ch in _OPENERS:
            if depth == 0:
                yield i, ch
            depth += 1
        elif ch in _CLOSERS:
            depth = max(0, depth - 1)
            if depth == 0:
                yield i, ch
        elif depth == 0:
            yield i, ch
        i += 1


def split_top_level(s: str, delimiter: str) -> list[str]:
    """Split ``s`` on a single-character delimiter outside brackets and quotes."""
    parts = []
    start = 0
    for i, ch in _top_level_positions(s):
        if ch == delimiter:
            parts.append(s[start:i])
            start = i + 1
    parts.append(s[start:])
    return parts


def _has_top_level(s: str, token: str) -> bool:
    return any(ch == token for _, ch in _top_level_positions(s))


def _closes_at_end(s: str) -> bool:
    """True when the bracket opening ``s`` is closed by its last character."""
    if not s or s[0] not in _OPENERS:
        return False
    positions = [i for i, ch in _top_level_positions(s) if ch in _CLOSERS]
    return bool(positions) and positions[0] == len(s) - 1


def _generic_parts(s: str) -> Optional[tuple[str, list[str]]]:
    """Split ``Base<A, B>`` into ("Base", ["A", "B"]) when the generic spans ``s``."""
    lt = s.find("<")
    if lt <= 0 or not s.endswith(">"):
        return None
    base = s[:lt].strip()
    if not _IDENTIFIER.match(base) or not _closes_at_end(s[lt:]):
        return None
    args = [a.strip() for a in split_top_level(s[lt + 1 : -1], ",")]
    return base, [a for a in args if a]


def box(java_type: str) -> str:
    """Box a Java primitive; any other type is returned unchanged."""
    return JAVA_PRIMITIVES.get(java_type, java_type)


def list_of(element: str) -> str:
    return f"java.util.List<{element}>"


def map_of(key: str, value: str) -> str:
    return f"java.util.Map<{key}, {value}>"


def is_quoted_literal(s: str) -> bool:
    return len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"')


def is_text_like(s: str) -> bool:
    """Union alternatives that still allow the union to be a String."""
    s = _unwrap_parens(s.strip())
    if s in ("string", "null", "undefined"):
        return True
    return len(s) >= 2 and s[0] == s[-1] and s[0] in _QUOTES


def _unwrap_parens(s: str) -> str:
    while s.startswith("(") and _closes_at_end(s):
        s = s[1:-1].strip()
    return s


def _normalize(raw: str) -> str:
    s = " ".join(raw.split())
    # Leading separators of multi-line unions: "| 'a' | 'b'"
    while s[:1] in ("|", "&"):
        s = s[1:].strip()
    return _unwrap_parens(s)


def map_ts_type(raw: Optional[str], optional: bool = False, hint: Optional[str] = None) -> str:
    """Map a TypeScript type expression to a Java type expression.

    Args:
        raw: Raw TypeScript type text
        optional: Whether the property is optional (boxes primitives)
        hint: Explicit ``javaType`` pragma; wins outright when present

    Returns:
        Canonical Java type expression
    """
    if hint and hint.strip():
        return hint.strip()
    if raw is None or not raw.strip():
        return OPAQUE

    s = _normalize(raw)
    if not s:
        return OPAQUE

    # Inline object literal
    if s.startswith("{") and _closes_at_end(s):
        return STRING_MAP

    if s.startswith("readonly "):
        return map_ts_type(s[len("readonly "):], optional)

    generic = _generic_parts(s)
    if generic:
        base, args = generic
        if base == "Partial" and args:
            return map_ts_type(args[0], True)
        if base in _UNWRAPPING_GENERICS and args:
            return map_ts_type(args[0], optional)

    # Template literal type
    if len(s) >= 2 and s[0] == s[-1] == "`":
        return TEXT

    # Function type
    if _has_top_level(s, "=>"):
        return OPAQUE

    # Tuple
    if s.startswith("[") and _closes_at_end(s):
        return list_of(OPAQUE)

    is_union = len(split_top_level(s, "|")) > 1
    is_intersection = len(split_top_level(s, "&")) > 1

    if not is_union and not is_intersection:
        if s.endswith("[]"):
            return list_of(box(map_ts_type(s[:-2], False)))
        if generic:
            base, args = generic
            if base in _ARRAY_GENERICS:
                element = args[0] if args else None
                return list_of(box(map_ts_type(element, False)))
            if base in _MAP_GENERICS:
                key = box(map_ts_type(args[0], True)) if args else TEXT
                value = box(map_ts_type(args[1], True)) if len(args) > 1 else OPAQUE
                return map_of(key, value)
        if is_quoted_literal(s):
            return TEXT

    if is_union:
        parts = split_top_level(s, "|")
        if all(is_text_like(p) for p in parts if p.strip()):
            return TEXT
        return OPAQUE

    if is_intersection:
        return OPAQUE

    if s == "string":
        return TEXT
    if s == "number" or _NUMERIC_LITERAL.match(s):
        return box(DECIMAL) if optional else DECIMAL
    if s in ("boolean", "true", "false"):
        return box(BOOLEAN) if optional else BOOLEAN
    if s in _OPAQUE_KEYWORDS:
        return OPAQUE
    if s == "object":
        return STRING_MAP
    if s in JAVA_PRIMITIVES:
        return box(s) if optional else s
    if _GENERIC_PARAM.match(s):
        return OPAQUE
    if s.startswith("import(") or s.startswith("typeof ") or s.startswith("keyof "):
        return OPAQUE

    if generic:
        base, args = generic
        if base in _SHAPE_GENERICS:
            return STRING_MAP
        mapped_args = ", ".join(box(map_ts_type(a, True)) for a in args)
        return f"{base}<{mapped_args}>"

    if _IDENTIFIER.match(s):
        # Bare name of a sibling declaration, resolved during linking
        return s

    return OPAQUE
