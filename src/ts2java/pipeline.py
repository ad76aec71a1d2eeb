"""End-to-end generator run: parse, build, rewrite and emit."""

import json
import logging
from pathlib import Path
from typing import Optional

from .config import GeneratorConfig
from .emitter.java_writer import JavaWriter
from .errors import OutputError
from .model.builder import ModelBuilder
from .model.types import TargetModel
from .parser.models import SourceModel
from .parser.ts_parser import TSDeclarationParser
from .rewrite import run_rewrites
from .scanner.paths import SourceRoots
from .scanner.sources import SourceScanner

logger = logging.getLogger(__name__)


def write_source_model(model: SourceModel, path: Path) -> Path:
    """Dump the parsed source model as indented JSON.

    Raises:
        OutputError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(model.to_dict(), indent=2) + "\n", encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputError(f"Cannot write model file {path}: {e}") from e
    logger.info("Wrote TS model to %s", path)
    return path


class Ts2JavaPipeline:
    """Runs every stage in order for one set of source roots."""

    def __init__(self, config: GeneratorConfig, roots: list[Path]):
        """Initialize pipeline.

        Args:
            config: Loaded generator configuration
            roots: TypeScript source directories
        """
        self.config = config
        self.roots = SourceRoots(roots)
        self.scanner = SourceScanner(config, self.roots)
        self.parser = TSDeclarationParser()
        self.builder = ModelBuilder()

    def parse(self) -> SourceModel:
        """Scan the roots, parse every file and apply the pre-model filters."""
        files = self.scanner.scan()
        source_model = self.parser.parse(files)
        self.scanner.filter_excluded_dirs(source_model)
        self.scanner.remove_ignored_items(source_model)
        logger.info(
            "Source model ready: files=%d, declarations=%d",
            len(source_model.files),
            source_model.declaration_count(),
        )
        return source_model

    def build(self, source_model: SourceModel) -> TargetModel:
        return self.builder.build(source_model)

    def rewrite(self, target_model: TargetModel) -> dict[str, int]:
        return run_rewrites(target_model, self.config, self.roots)

    def emit(self, target_model: TargetModel, output_dir: Path) -> list[Path]:
        return JavaWriter(target_model, self.config).write(output_dir)

    def run(self, output_dir: Path, model_file: Optional[Path] = None) -> list[Path]:
        """Generate Java sources for every declaration below the roots.

        Args:
            output_dir: Root directory of the generated sources
            model_file: Optional path for a JSON dump of the parsed model

        Returns:
            Written Java files
        """
        source_model = self.parse()
        if model_file is not None:
            write_source_model(source_model, model_file)
        target_model = self.build(source_model)
        self.rewrite(target_model)
        return self.emit(target_model, output_dir)
