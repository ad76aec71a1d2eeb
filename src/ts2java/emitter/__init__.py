"""Java source emission."""

from .java_writer import JavaWriter, normalize_annotations, parse_enum_int

__all__ = ["JavaWriter", "normalize_annotations", "parse_enum_int"]
