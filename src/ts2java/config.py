"""Configuration management for the TypeScript to Java generator."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError


load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "ts-to-java.yaml"
DEFAULT_OUTPUT_DIR = "generated-sources/ts-to-java"


class PackageRule(BaseModel):
    """Maps TypeScript source directories ending with a suffix to a Java package."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dir_ends_with: str = Field(default="", alias="dirEndsWith")
    pkg: str = Field(default="")


class GeneratorConfig(BaseModel):
    """Rule tables consulted by every stage of a generator run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    # Pre-model filters
    ignore_ts_items: list[str] = Field(default_factory=list, alias="ignoreTsItems")
    exclude_dir_suffixes: list[str] = Field(default_factory=list, alias="excludeDirSuffixes")

    # Package placement
    base_package: Optional[str] = Field(default=None, alias="basePackage")
    package_rules: list[PackageRule] = Field(default_factory=list, alias="packageRules")

    # Type rewrites
    type_mappings: dict[str, str] = Field(default_factory=dict, alias="typeMappings")
    field_type_mappings: dict[str, str] = Field(default_factory=dict, alias="fieldTypeMappings")
    interface_extends_mappings: dict[str, str] = Field(
        default_factory=dict, alias="interfaceExtendsMappings"
    )
    default_base_class: Optional[str] = Field(default=None, alias="defaultBaseClass")
    enum_interface_mapping: dict[str, str] = Field(
        default_factory=dict, alias="enumInterfaceMapping"
    )

    # Emitted annotations
    additional_class_annotations: list[str] = Field(
        default_factory=list, alias="additionalClassAnnotations"
    )
    additional_field_annotations: list[str] = Field(
        default_factory=list, alias="additionalFieldAnnotations"
    )
    additional_optional_field_annotations: list[str] = Field(
        default_factory=list, alias="additionalOptionalFieldAnnotations"
    )
    additional_non_optional_field_annotations: list[str] = Field(
        default_factory=list, alias="additionalNonOptionalFieldAnnotations"
    )

    @classmethod
    def from_yaml(cls, path: Path) -> "GeneratorConfig":
        """Load configuration from a YAML document.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed configuration; defaults when the file does not exist

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        if not path.exists():
            logger.warning("Config file not found: %s; using defaults", path)
            return cls()

        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config file '{path}': {e}") from e

        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file '{path}' must contain a mapping at top level")

        # YAML nulls mean "not configured"
        raw = {key: value for key, value in raw.items() if value is not None}
        try:
            config = cls.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config file '{path}': {e}") from e

        logger.info(
            "Loaded configuration from %s: ignoreTsItems=%d, packageRules=%d",
            path,
            len(config.ignore_ts_items),
            len(config.package_rules),
        )
        return config


def load_configuration(path: Optional[Path]) -> GeneratorConfig:
    """Load the configuration file, or defaults when no path is configured."""
    if path is None:
        logger.warning("No config file configured; using defaults")
        return GeneratorConfig()
    return GeneratorConfig.from_yaml(Path(path))


def env_path(name: str, fallback: Optional[str] = None) -> Optional[Path]:
    """Read a path-valued environment variable."""
    value = os.getenv(name) or fallback
    return Path(value) if value else None
