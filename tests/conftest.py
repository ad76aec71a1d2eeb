"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

from ts2java.config import GeneratorConfig
from ts2java.model.builder import ModelBuilder
from ts2java.parser.models import SourceModel
from ts2java.parser.ts_parser import TSDeclarationParser


@pytest.fixture
def ts_parser() -> TSDeclarationParser:
    return TSDeclarationParser()


@pytest.fixture
def config() -> GeneratorConfig:
    """Provide an empty configuration."""
    return GeneratorConfig()


@pytest.fixture
def write_ts(tmp_path: Path):
    """Write a TypeScript file below ``tmp_path`` and return its path."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def build_model(ts_parser):
    """Parse TypeScript source text and build the linked target model."""

    def _build(source: str, file_path: str = "types/Sample.ts"):
        source_file = ts_parser.parse_source(source, file_path)
        return ModelBuilder().build(SourceModel(files=[source_file]))

    return _build
