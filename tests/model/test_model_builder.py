"""Tests for target model construction and linking."""

from ts2java.model.builder import ModelBuilder, is_directional_shape
from ts2java.model.types import TargetKind
from ts2java.parser.models import (
    SourceFile,
    SourceInterface,
    SourceModel,
    SourceProperty,
)


def test_interfaces_become_classes(build_model):
    model = build_model("export interface Block { id: string; }")
    block = model.get("Block")
    assert block.kind == TargetKind.CLASS
    assert block.original_kind == "interface"
    assert block.source_path == "types/Sample.ts"


def test_multiple_bases_keep_first(build_model):
    model = build_model("interface A {}\ninterface B {}\ninterface C extends A, B {}")
    c = model.get("C")
    assert c.extends_name == "A"
    assert c.original_extends == ["A", "B"]
    assert c.extends_type is model.get("A")


def test_forward_reference_is_linked(build_model):
    model = build_model("interface Child extends Parent { x: string }\ninterface Parent { y: string }")
    assert model.get("Child").extends_type is model.get("Parent")


def test_unknown_base_stays_raw(build_model):
    model = build_model("interface Child extends Missing {}")
    child = model.get("Child")
    assert child.extends_name == "Missing"
    assert child.extends_type is None


def test_class_implements_deduplicated_on_link(build_model):
    model = build_model("interface Tickable {}\nclass E implements Tickable, Tickable, Other {}")
    entity = model.get("E")
    assert entity.implements_types == [model.get("Tickable")]


def test_enum_values_captured(build_model):
    model = build_model("enum Shape { CUBE = 1, CROSS }")
    shape = model.get("Shape")
    assert shape.kind == TargetKind.ENUM
    assert [(v.name, v.value) for v in shape.enum_values] == [("CUBE", "1"), ("CROSS", None)]


def test_alias_without_properties_gets_value_field(build_model):
    model = build_model("type BlockId = string;\ntype Count = number;\ntype Ref = Block;\ninterface Block {}")
    assert [(p.name, p.type) for p in model.get("BlockId").properties] == [("value", "String")]
    assert model.get("Count").properties[0].type == "java.lang.Double"
    ref = model.get("Ref")
    assert ref.properties[0].type == "Block"
    assert ref.alias_target_type is model.get("Block")


def test_object_alias_gets_properties(build_model):
    model = build_model("type Offsets = { x: number; y?: number };")
    offsets = model.get("Offsets")
    assert [(p.name, p.type) for p in offsets.properties] == [("x", "double"), ("y", "java.lang.Double")]
    assert offsets.alias_target_name is None


def test_camel_case_fields_get_json_property(build_model):
    model = build_model("interface A { blockId: string; name: string; cTs: number }")
    props = {p.name: p for p in model.get("A").properties}
    assert props["blockId"].annotations == ['@com.fasterxml.jackson.annotation.JsonProperty("blockId")']
    assert props["cTs"].annotations
    assert props["name"].annotations == []


def test_directional_shape_creates_one_helper(build_model):
    model = build_model(
        "interface Block { faces?: { n?: number[]; e?: number[]; s?: number[]; w?: number[] }; faces2?: { x: number } }"
    )
    block = model.get("Block")
    helper = model.get("BlockFaces")
    assert helper is not None
    assert helper.helper_owner == "Block"
    assert helper.is_helper
    assert [p.name for p in helper.properties] == ["n", "e", "s", "w"]
    assert helper.properties[0].type == "java.util.List<java.lang.Double>"

    props = {p.name: p for p in block.properties}
    assert props["faces"].type == "BlockFaces"
    assert props["faces2"].type == "java.util.Map<String, Object>"
    assert model.get("BlockFaces2") is None


def test_helper_follows_owner_in_order(build_model):
    model = build_model("interface A { d: { n: string } }\ninterface B { x: string }")
    assert [t.name for t in model] == ["A", "AD", "B"]


def test_duplicate_helper_request_creates_single_type():
    prop = SourceProperty(name="edge", type="{ n: string }", members=[SourceProperty(name="n", type="string")])
    source = SourceModel(
        files=[SourceFile(path="a.ts", interfaces=[SourceInterface(name="Wall", properties=[prop, prop])])]
    )
    model = ModelBuilder().build(source)
    assert [t.name for t in model].count("WallEdge") == 1


def test_hint_disables_helper():
    members = [SourceProperty(name="n", type="string")]
    prop = SourceProperty(name="edge", type="{ n: string }", type_hint="String", members=members)
    source = SourceModel(files=[SourceFile(path="a.ts", interfaces=[SourceInterface(name="Wall", properties=[prop])])])
    model = ModelBuilder().build(source)
    assert model.get("WallEdge") is None
    assert model.get("Wall").properties[0].type == "String"


def test_is_directional_shape():
    assert is_directional_shape([SourceProperty("n", "string"), SourceProperty("w", "string")])
    assert not is_directional_shape([SourceProperty("n", "string"), SourceProperty("up", "string")])
    assert not is_directional_shape([])
    assert not is_directional_shape(None)


def test_duplicate_type_name_last_wins_in_index(build_model):
    model = build_model("interface A { x: string }\ntype A = number;")
    assert len(model) == 1
    assert model.get("A").original_kind == "type"
    assert list(model) == [model.get("A")]


def test_declared_type_replaces_helper_with_same_name(build_model):
    model = build_model("interface Block { faces?: { n?: string; s?: string }; }\ninterface BlockFaces { other: number; }")
    faces = model.get("BlockFaces")
    assert not faces.is_helper
    assert [p.name for p in faces.properties] == ["other"]
    assert not any(t.is_helper for t in model)
    assert [t.name for t in model] == ["Block", "BlockFaces"]
