"""TypeScript declaration parser using tree-sitter."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser

from ..errors import SourceRootError
from .models import (
    SourceClass,
    SourceEnum,
    SourceEnumMember,
    SourceFile,
    SourceInterface,
    SourceModel,
    SourceProperty,
    SourceTypeAlias,
)

logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(tsts.language_typescript())

_HINT_PATTERN = re.compile(r"javatype\s*[:=]\s*(.*)", re.IGNORECASE | re.DOTALL)

# Node types that may wrap a declaration at the top level of a file
_WRAPPERS = ("export_statement", "ambient_declaration")
_CLASS_NODES = ("class_declaration", "abstract_class_declaration", "class")
_PROPERTY_NODES = ("property_signature", "public_field_definition")
_SEPARATORS = (";", ",")


def parse_type_hint(comment: str | None) -> str | None:
    """Extract an explicit ``javaType`` pragma from a line comment.

    Accepts ``// javaType: int``, ``//javaType=String``, ``// JAVATYPE : long``
    and hints preceded by other comment text.

    Args:
        comment: Raw comment text including the leading ``//``

    Returns:
        The hinted Java type, or None when the comment carries no hint
    """
    if not comment or not comment.lstrip().startswith("//"):
        return None
    match = _HINT_PATTERN.search(comment)
    if not match:
        return None

    hint = match.group(1)
    nested = hint.find("//")
    if nested != -1:
        hint = hint[:nested]
    hint = hint.strip().rstrip(";").strip()

    # Stop at the first whitespace outside generic brackets
    depth = 0
    for i, ch in enumerate(hint):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif ch.isspace() and depth == 0:
            hint = hint[:i]
            break

    return hint or None


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"', "`"):
        return value[1:-1]
    return value


def _simple_name(text: str) -> str:
    """Drop generic arguments and whitespace from a heritage entry."""
    lt = text.find("<")
    if lt > 0:
        text = text[:lt]
    return "".join(text.split())


class TSDeclarationParser:
    """Parse interface, class, enum and type alias declarations from .ts files."""

    def __init__(self):
        self._parser = Parser(TS_LANGUAGE)

    def parse(self, files: list[Path]) -> SourceModel:
        """Parse every file into a SourceModel.

        Args:
            files: Paths of .ts files, in the order they should be modeled

        Returns:
            SourceModel with one SourceFile per input path; files that are
            not valid UTF-8 are skipped with a warning

        Raises:
            SourceRootError: If a file cannot be read
        """
        model = SourceModel()
        for path in files:
            try:
                source = path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                logger.warning("Skipping %s: not valid UTF-8 (%s)", path, e)
                continue
            except OSError as e:
                raise SourceRootError(f"Cannot read {path}: {e}") from e
            model.files.append(self.parse_source(source, str(path)))
        logger.info(
            "Parsed %d files, %d declarations", len(model.files), model.declaration_count()
        )
        return model

    def parse_source(self, source: str, file_path: str) -> SourceFile:
        """Parse one source text.

        Args:
            source: TypeScript source code
            file_path: Path recorded on the resulting SourceFile

        Returns:
            SourceFile holding imports and declarations
        """
        tree = self._parser.parse(source.encode("utf-8"))
        result = SourceFile(path=file_path)
        self._collect(tree.root_node, result, file_path)
        return result

    def _collect(self, root: Node, out: SourceFile, file_path: str) -> None:
        for node in root.children:
            if node.type == "import_statement":
                self._add_import(node, out)
                continue
            if node.type == "ERROR":
                # Salvage complete declarations swallowed by a broken region
                logger.warning("Syntax error in %s at line %d", file_path, node.start_point[0] + 1)
                self._collect(node, out, file_path)
                continue

            declaration = self._unwrap(node)
            if declaration is None:
                continue
            try:
                self._add_declaration(declaration, out)
            except ValueError as e:
                logger.warning(
                    "Skipping declaration in %s at line %d: %s",
                    file_path,
                    declaration.start_point[0] + 1,
                    e,
                )

    def _unwrap(self, node: Node) -> Node | None:
        while node is not None and node.type in _WRAPPERS:
            inner = node.child_by_field_name("declaration")
            if inner is None:
                inner = next(
                    (c for c in node.named_children if c.type not in ("comment", "decorator")),
                    None,
                )
            node = inner
        return node

    def _add_import(self, node: Node, out: SourceFile) -> None:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            return
        module = _strip_quotes(_text(source_node))
        if module not in out.imports:
            out.imports.append(module)

    def _add_declaration(self, node: Node, out: SourceFile) -> None:
        if node.type == "interface_declaration":
            out.interfaces.append(self._parse_interface(node))
        elif node.type in _CLASS_NODES:
            out.classes.append(self._parse_class(node))
        elif node.type == "enum_declaration":
            out.enums.append(self._parse_enum(node))
        elif node.type == "type_alias_declaration":
            out.type_aliases.append(self._parse_type_alias(node))

    def _declaration_name(self, node: Node) -> str:
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.is_missing or name_node.has_error:
            raise ValueError(f"unnamed {node.type}")
        return _text(name_node)

    def _parse_interface(self, node: Node) -> SourceInterface:
        decl = SourceInterface(name=self._declaration_name(node))
        for child in node.children:
            if child.type in ("extends_type_clause", "extends_clause"):
                decl.extends.extend(self._heritage_names(child))
        body = node.child_by_field_name("body")
        if body is not None:
            decl.properties = self._parse_members(body)
        return decl

    def _parse_class(self, node: Node) -> SourceClass:
        decl = SourceClass(name=self._declaration_name(node))
        for child in node.children:
            if child.type != "class_heritage":
                continue
            for clause in child.named_children:
                names = self._heritage_names(clause)
                if clause.type == "extends_clause" and names:
                    # Java classes take a single base, extra entries are lost
                    decl.extends = names[0]
                elif clause.type == "implements_clause":
                    decl.implements.extend(names)
        body = node.child_by_field_name("body")
        if body is not None:
            decl.properties = self._parse_members(body)
        return decl

    def _heritage_names(self, clause: Node) -> list[str]:
        names = []
        for child in clause.named_children:
            if child.type in ("type_arguments", "comment") or child.has_error:
                continue
            name = _simple_name(_text(child))
            if name and name not in names:
                names.append(name)
        return names

    def _parse_members(self, body: Node) -> list[SourceProperty]:
        """Parse property members of an interface, class or object literal body."""
        properties: list[SourceProperty] = []
        for child in body.named_children:
            if child.type not in _PROPERTY_NODES:
                continue
            if child.has_error:
                logger.debug("Skipping malformed member: %s", _text(child)[:60])
                continue
            prop = self._parse_property(child)
            if prop is not None:
                properties.append(prop)
        return properties

    def _parse_property(self, node: Node) -> SourceProperty | None:
        name_node = node.child_by_field_name("name")
        type_annotation = node.child_by_field_name("type")
        if name_node is None or type_annotation is None:
            return None
        if name_node.type == "computed_property_name":
            return None
        type_node = next(iter(type_annotation.named_children), None)
        if type_node is None:
            return None

        type_text = _text(type_node).strip()
        if "import(" in type_text:
            return None

        visibility = None
        optional = False
        for child in node.children:
            if child.type == "accessibility_modifier":
                visibility = _text(child)
            elif child.type == "?":
                optional = True

        comment = self._trailing_comment(node)
        prop = SourceProperty(
            name=_strip_quotes(_text(name_node)),
            type=type_text,
            optional=optional,
            visibility=visibility,
            comment=comment,
            type_hint=parse_type_hint(comment),
        )
        if type_node.type == "object_type":
            prop.members = self._parse_members(type_node)
        return prop

    def _trailing_comment(self, node: Node) -> str | None:
        """Return a line comment that ends the property's source line."""
        row = node.end_point[0]
        sibling = node.next_sibling
        while sibling is not None and sibling.type in _SEPARATORS:
            sibling = sibling.next_sibling
        if sibling is not None and sibling.type == "comment" and sibling.start_point[0] == row:
            return _text(sibling).strip()
        return None

    def _parse_enum(self, node: Node) -> SourceEnum:
        decl = SourceEnum(name=self._declaration_name(node))
        body = node.child_by_field_name("body")
        if body is None:
            return decl
        for child in body.named_children:
            if child.type == "comment" or child.has_error:
                continue
            if child.type == "enum_assignment":
                name_node = child.child_by_field_name("name")
                value_node = child.child_by_field_name("value")
                if name_node is None:
                    continue
                value = None
                if value_node is not None:
                    raw = _text(value_node).strip()
                    value = _strip_quotes(raw) if value_node.type in ("string", "template_string") else raw
                decl.members.append(SourceEnumMember(name=_strip_quotes(_text(name_node)), value=value))
            elif child.type in ("property_identifier", "identifier", "string"):
                decl.members.append(SourceEnumMember(name=_strip_quotes(_text(child))))
        return decl

    def _parse_type_alias(self, node: Node) -> SourceTypeAlias:
        decl = SourceTypeAlias(name=self._declaration_name(node))
        value = node.child_by_field_name("value")
        if value is None or value.has_error:
            return decl
        decl.target = " ".join(_text(value).split()) or None
        if value.type == "object_type":
            decl.properties = self._parse_members(value)
        return decl
