"""Renders the rewritten target model as Java source files."""

import logging
import re
from pathlib import Path
from typing import Optional

from ..config import GeneratorConfig
from ..errors import OutputError
from ..model.naming import base_type, capitalize, is_valid_java_identifier
from ..model.type_mapper import OPAQUE, split_top_level
from ..model.types import EnumValue, TargetKind, TargetModel, TargetProperty, TargetType
from ..rewrite.inheritance import is_root_object

logger = logging.getLogger(__name__)

INDENT = "    "

CLASS_ANNOTATIONS = (
    "@lombok.Data",
    "@lombok.experimental.SuperBuilder",
    "@lombok.NoArgsConstructor",
)
ALL_ARGS_ANNOTATION = "@lombok.AllArgsConstructor(access = lombok.AccessLevel.PROTECTED)"

JAVA_LANG_TYPES = frozenset(
    {"String", "Integer", "Long", "Double", "Float", "Short", "Byte", "Character", "Boolean", "Object"}
)
JAVA_UTIL_TYPES = frozenset({"List", "Map", "Set"})

_INT_LITERAL = re.compile(r"^[+-]?\d+$")
_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1


def normalize_annotations(raw: list[str]) -> list[str]:
    """Trim configured annotations, prefix a missing ``@`` and drop blanks."""
    result = []
    for entry in raw:
        if entry is None:
            continue
        annotation = entry.strip()
        if not annotation:
            continue
        result.append(annotation if annotation.startswith("@") else "@" + annotation)
    return result


def parse_enum_int(value: Optional[str]) -> Optional[int]:
    """Parse an enum value as a 32-bit integer, or None when it is not one."""
    if value is None or not _INT_LITERAL.match(value.strip()):
        return None
    number = int(value.strip())
    return number if _INT_MIN <= number <= _INT_MAX else None


def java_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class JavaWriter:
    """Writes one ``.java`` file per emitted type.

    Helpers whose owner is in the model are rendered as static nested classes
    of that owner instead of files of their own.
    """

    def __init__(self, model: TargetModel, config: Optional[GeneratorConfig] = None):
        self.model = model
        self.config = config or GeneratorConfig()
        self.nested_owner: dict[str, TargetType] = {}
        self.nested_helpers: dict[str, list[TargetType]] = {}
        for target in model:
            if target.is_helper:
                owner = model.get(target.helper_owner)
                if owner is not None and owner.kind == TargetKind.CLASS:
                    self.nested_owner[target.name] = owner
                    self.nested_helpers.setdefault(owner.name, []).append(target)

        self.class_annotations = normalize_annotations(self.config.additional_class_annotations)
        self.field_annotations = normalize_annotations(self.config.additional_field_annotations)
        self.optional_annotations = normalize_annotations(self.config.additional_optional_field_annotations)
        self.required_annotations = normalize_annotations(
            self.config.additional_non_optional_field_annotations
        )

    def write(self, output_dir: Path) -> list[Path]:
        """Write every emittable type below ``output_dir``.

        Returns:
            Written file paths in emission order

        Raises:
            OutputError: If a directory or file cannot be written
        """
        output_dir = Path(output_dir)
        written = []
        for target in self.model:
            if not is_valid_java_identifier(target.name):
                logger.debug("Skipping type with invalid Java name: %r", target.name)
                continue
            if target.name in self.nested_owner:
                continue
            path = self.path_for(output_dir, target)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(self.render(target), encoding="utf-8", newline="\n")
            except OSError as e:
                raise OutputError(f"Cannot write {path}: {e}") from e
            written.append(path)
        logger.info("Wrote %d Java files into %s", len(written), output_dir)
        return written

    @staticmethod
    def path_for(output_dir: Path, target: TargetType) -> Path:
        package_dir = Path(*target.package.split(".")) if target.package else Path()
        return Path(output_dir) / package_dir / f"{target.name}.java"

    def render(self, target: TargetType) -> str:
        """Render the complete source text of one top-level type."""
        lines = self._header(target)
        if target.package:
            lines.extend([f"package {target.package};", ""])

        if target.kind == TargetKind.ENUM:
            lines.extend(self._render_enum(target))
        elif target.kind == TargetKind.INTERFACE:
            lines.extend(self._render_interface(target))
        else:
            lines.extend(self._render_class(target, target.package, ""))
        return "\n".join(lines) + "\n"

    def _header(self, target: TargetType) -> list[str]:
        kind = target.original_kind or target.kind.value
        lines = ["/*"]
        if target.source_path:
            lines.append(f" * Source TS: {Path(target.source_path).name}")
        lines.append(f" * Original TS: '{kind} {target.name}'")
        if target.unresolved_bases:
            lines.append(f" * NOTE: Unresolved TS extends: {', '.join(target.unresolved_bases)}")
            lines.append(" *       Consider mapping them via configuration 'interfaceExtendsMappings'.")
        lines.append(" */")
        return lines

    # Enums

    def _render_enum(self, target: TargetType) -> list[str]:
        pkg = target.package
        implements = [self.qualify(n, pkg, target.name) for n in target.implements_names if n and n.strip()]
        head = f"public enum {target.name}"
        if implements:
            head += " implements " + ", ".join(implements)
        lines = [head + " {"]

        if target.enum_values:
            constants, text_backed = self._enum_constants(target.enum_values)
            for i, constant in enumerate(constants):
                lines.append(INDENT + constant + ("," if i < len(constants) - 1 else ";"))
            if not constants:
                lines.append(INDENT + ";")
            lines.append("")
            lines.append(INDENT + "@lombok.Getter")
            if text_backed:
                lines.append(INDENT + "private final String tsIndex;")
                lines.append(INDENT + f"{target.name}(String tsIndex) {{ this.tsIndex = tsIndex; }}")
                lines.append(INDENT + "public String tsString() { return this.tsIndex; }")
            else:
                lines.append(INDENT + "private final int tsIndex;")
                lines.append(INDENT + "private final String tsString;")
                lines.append(
                    INDENT
                    + f"{target.name}(int tsIndex) {{ this.tsIndex = tsIndex; "
                    + "this.tsString = String.valueOf(tsIndex); }"
                )
                lines.append(INDENT + "public String tsString() { return this.tsString; }")
        lines.append("}")
        return lines

    def _enum_constants(self, values: list[EnumValue]) -> tuple[list[str], bool]:
        """Classify the values and render one constant per valid name.

        Any captured value that is not an integer makes the whole enum
        text-backed. Values that are missing are numbered from 1.
        """
        text_backed = any(v.value is not None and parse_enum_int(v.value) is None for v in values)
        constants = []
        counter = 0
        for value in values:
            if value.value is None:
                counter += 1
                raw = str(counter)
            else:
                number = parse_enum_int(value.value)
                if number is not None:
                    counter = number
                raw = str(number) if number is not None and not text_backed else value.value
            if not is_valid_java_identifier(value.name):
                logger.debug("Skipping enum constant with invalid Java name: %r", value.name)
                continue
            argument = java_string(raw) if text_backed else raw
            constants.append(f"{value.name}({argument})")
        return constants, text_backed

    # Interfaces

    def _render_interface(self, target: TargetType) -> list[str]:
        pkg = target.package
        bases = []
        for name in [target.extends_name, *target.implements_names]:
            if not name or not name.strip():
                continue
            qualified = self.qualify(name, pkg, target.name)
            if is_valid_java_identifier(base_type(qualified)):
                bases.append(qualified)
        head = f"public interface {target.name}"
        if bases:
            head += " extends " + ", ".join(bases)
        lines = [head + " {"]
        for prop in target.unique_properties():
            method = "get" + capitalize(prop.name)
            if not is_valid_java_identifier(method):
                continue
            lines.append(INDENT + f"{self.qualify(prop.type, pkg, target.name)} {method}();")
        lines.append("}")
        return lines

    # Classes

    def _render_class(self, target: TargetType, pkg: str, indent: str) -> list[str]:
        fields = []
        for prop in target.unique_properties():
            if is_valid_java_identifier(prop.name):
                fields.append(prop)
            else:
                logger.debug("Skipping field with invalid Java name: %s.%s", target.name, prop.name)

        lines = [indent + a for a in self.class_annotations]
        lines.extend(indent + a for a in CLASS_ANNOTATIONS)
        if fields:
            lines.append(indent + ALL_ARGS_ANNOTATION)

        static = "static " if target.is_helper and indent else ""
        head = f"{indent}public {static}class {target.name}"
        extends = self._extends_clause(target, pkg)
        if extends:
            head += " " + extends
        implements = [
            q
            for q in (self.qualify(n, pkg, target.name) for n in target.implements_names if n and n.strip())
            if is_valid_java_identifier(base_type(q))
        ]
        if implements:
            head += " implements " + ", ".join(implements)
        lines.append(head + " {")

        member_indent = indent + INDENT
        for prop in fields:
            for annotation in self._field_annotations(prop):
                lines.append(member_indent + annotation)
            lines.append(f"{member_indent}private {self.qualify(prop.type, pkg, target.name)} {prop.name};")

        for helper in self.nested_helpers.get(target.name, []):
            lines.append("")
            lines.append(f"{member_indent}/* Nested helper for inline '{self._helper_property(target, helper)}' */")
            lines.extend(self._render_class(helper, pkg, member_indent))

        lines.append(indent + "}")
        return lines

    def _extends_clause(self, target: TargetType, pkg: str) -> str:
        if not target.extends_name or not target.extends_name.strip():
            return ""
        qualified = self.qualify(target.extends_name, pkg, target.name)
        if is_root_object(qualified) or not is_valid_java_identifier(base_type(qualified)):
            return ""
        return "extends " + qualified

    def _field_annotations(self, prop: TargetProperty) -> list[str]:
        annotations = list(prop.annotations)
        annotations.extend(self.field_annotations)
        annotations.extend(self.optional_annotations if prop.optional else self.required_annotations)
        return annotations

    @staticmethod
    def _helper_property(owner: TargetType, helper: TargetType) -> str:
        suffix = helper.name[len(owner.name):]
        return suffix[:1].lower() + suffix[1:]

    # Type qualification

    def qualify(self, type_expr: Optional[str], current_pkg: str, current_class: str) -> str:
        """Qualify every simple name in a Java type expression for the given context."""
        if type_expr is None or not type_expr.strip():
            return OPAQUE
        s = type_expr.strip()

        lt = s.find("<")
        if lt >= 0 and s.endswith(">"):
            raw = s[:lt].strip()
            args = [a.strip() for a in split_top_level(s[lt + 1 : -1], ",")]
            qualified_args = ", ".join(self.qualify(a, current_pkg, current_class) for a in args if a)
            return f"{self._qualify_simple(raw, current_pkg, current_class)}<{qualified_args}>"

        if s.endswith("[]"):
            return self.qualify(s[:-2], current_pkg, current_class) + "[]"

        return self._qualify_simple(s, current_pkg, current_class)

    def _qualify_simple(self, name: str, current_pkg: str, current_class: str) -> str:
        if not name:
            return OPAQUE
        if "." in name or name in JAVA_LANG_TYPES:
            return name
        if name in JAVA_UTIL_TYPES:
            return "java.util." + name

        owner = self.nested_owner.get(name)
        if owner is not None:
            if current_class in (owner.name, name):
                return name
            owner_name = owner.name if owner.package in ("", current_pkg) else owner.qualified_name
            return f"{owner_name}.{name}"

        target = self.model.get(name)
        if target is not None and target.package and target.package != current_pkg:
            return target.qualified_name
        return name


__all__ = ["JavaWriter", "normalize_annotations", "parse_enum_int", "java_string"]
