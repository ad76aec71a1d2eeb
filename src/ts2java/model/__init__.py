"""Target model: type mapping, construction and linking."""

from .builder import ModelBuilder, is_directional_shape, json_property_annotation
from .naming import is_valid_java_identifier, base_type, capitalize, needs_json_property
from .type_mapper import map_ts_type, split_top_level
from .types import EnumValue, TargetKind, TargetModel, TargetProperty, TargetType

__all__ = [
    "ModelBuilder",
    "is_directional_shape",
    "json_property_annotation",
    "is_valid_java_identifier",
    "base_type",
    "capitalize",
    "needs_json_property",
    "map_ts_type",
    "split_top_level",
    "EnumValue",
    "TargetKind",
    "TargetModel",
    "TargetProperty",
    "TargetType",
]
