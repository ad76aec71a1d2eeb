"""ts2java - Compile TypeScript declarations into Java model classes."""

__version__ = "0.1.0"

from .config import GeneratorConfig, PackageRule, load_configuration
from .errors import Ts2JavaError, ConfigurationError, SourceRootError, OutputError
from .pipeline import Ts2JavaPipeline

__all__ = [
    "GeneratorConfig",
    "PackageRule",
    "load_configuration",
    "Ts2JavaError",
    "ConfigurationError",
    "SourceRootError",
    "OutputError",
    "Ts2JavaPipeline",
]
