"""Tests for configuration loading."""

import pytest
from pathlib import Path

from ts2java.config import GeneratorConfig, env_path, load_configuration
from ts2java.errors import ConfigurationError


def test_missing_file_yields_defaults(tmp_path, caplog):
    config = GeneratorConfig.from_yaml(tmp_path / "absent.yaml")
    assert config == GeneratorConfig()
    assert "not found" in caplog.text


def test_camel_case_keys(tmp_path):
    path = tmp_path / "ts-to-java.yaml"
    path.write_text(
        """
ignoreTsItems: [Internal]
excludeDirSuffixes: [legacy]
basePackage: com.example
packageRules:
  - dirEndsWith: types
    pkg: com.example.types
typeMappings:
  Vector3: com.math.Vector3
fieldTypeMappings:
  Block.status: int
interfaceExtendsMappings:
  Base: com.example.BaseDto
defaultBaseClass: com.example.Dto
enumInterfaceMapping:
  "*": com.example.TsEnum
additionalClassAnnotations: ["lombok.ToString"]
additionalOptionalFieldAnnotations: ["@Nullable"]
unknownKey: ignored
""",
        encoding="utf-8",
    )

    config = GeneratorConfig.from_yaml(path)

    assert config.ignore_ts_items == ["Internal"]
    assert config.exclude_dir_suffixes == ["legacy"]
    assert config.base_package == "com.example"
    assert config.package_rules[0].dir_ends_with == "types"
    assert config.package_rules[0].pkg == "com.example.types"
    assert config.type_mappings == {"Vector3": "com.math.Vector3"}
    assert config.field_type_mappings == {"Block.status": "int"}
    assert config.interface_extends_mappings == {"Base": "com.example.BaseDto"}
    assert config.default_base_class == "com.example.Dto"
    assert config.enum_interface_mapping == {"*": "com.example.TsEnum"}
    assert config.additional_class_annotations == ["lombok.ToString"]
    assert config.additional_optional_field_annotations == ["@Nullable"]


def test_null_values_mean_defaults(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("typeMappings:\nbasePackage:\n", encoding="utf-8")
    config = GeneratorConfig.from_yaml(path)
    assert config.type_mappings == {}
    assert config.base_package is None


def test_empty_file_yields_defaults(tmp_path):
    path = tmp_path / "c.yaml"
    path.write_text("", encoding="utf-8")
    assert GeneratorConfig.from_yaml(path) == GeneratorConfig()


@pytest.mark.parametrize(
    "content",
    [
        "typeMappings: [unclosed",
        "- just\n- a list\n",
        "packageRules: not-a-list",
    ],
)
def test_invalid_file_is_fatal(tmp_path, content):
    path = tmp_path / "c.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        GeneratorConfig.from_yaml(path)


def test_config_is_frozen():
    config = GeneratorConfig()
    with pytest.raises(Exception):
        config.base_package = "x"


def test_load_configuration_without_path():
    assert load_configuration(None) == GeneratorConfig()


def test_env_path(monkeypatch):
    monkeypatch.setenv("TS2JAVA_OUTPUT_DIR", "/tmp/out")
    assert env_path("TS2JAVA_OUTPUT_DIR") == Path("/tmp/out")
    monkeypatch.delenv("TS2JAVA_OUTPUT_DIR")
    assert env_path("TS2JAVA_OUTPUT_DIR", "fallback") == Path("fallback")
    assert env_path("TS2JAVA_OUTPUT_DIR") is None
