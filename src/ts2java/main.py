"""Main CLI entry point for ts2java."""

import logging
from pathlib import Path

import click

from .config import DEFAULT_CONFIG_FILE, DEFAULT_OUTPUT_DIR, env_path, load_configuration
from .errors import Ts2JavaError
from .pipeline import Ts2JavaPipeline, write_source_model


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _config_path(config: str | None) -> Path | None:
    if config:
        return Path(config)
    return env_path("TS2JAVA_CONFIG", DEFAULT_CONFIG_FILE)


@click.group()
def cli():
    """ts2java - Generate Java model classes from TypeScript declarations."""
    pass


@cli.command()
@click.argument("roots", nargs=-1, required=True, type=click.Path(file_okay=False))
@click.option("--output", "-o", type=click.Path(file_okay=False), help="Output directory")
@click.option("--config", "-c", type=click.Path(dir_okay=False), help="YAML configuration file")
@click.option("--model-file", type=click.Path(dir_okay=False), help="Write the parsed TS model as JSON")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def generate(roots: tuple[str, ...], output: str | None, config: str | None, model_file: str | None, debug: bool):
    """Generate Java sources for TypeScript declarations.

    Examples:
        ts2java generate src/types -o target/generated-sources/ts-to-java

        ts2java generate shared/types server/types -c ts-to-java.yaml --debug
    """
    _setup_logging(debug)
    output_dir = Path(output) if output else env_path("TS2JAVA_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)
    model_path = Path(model_file) if model_file else env_path("TS2JAVA_MODEL_FILE")

    try:
        generator_config = load_configuration(_config_path(config))
        pipeline = Ts2JavaPipeline(generator_config, [Path(r) for r in roots])
        written = pipeline.run(output_dir, model_path)
    except Ts2JavaError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {len(written)} files into {output_dir}")


@cli.command("dump-model")
@click.argument("roots", nargs=-1, required=True, type=click.Path(file_okay=False))
@click.option("--output", "-o", required=True, type=click.Path(dir_okay=False), help="JSON file to write")
@click.option("--config", "-c", type=click.Path(dir_okay=False), help="YAML configuration file")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def dump_model(roots: tuple[str, ...], output: str, config: str | None, debug: bool):
    """Parse TypeScript sources and write only the model dump."""
    _setup_logging(debug)
    try:
        generator_config = load_configuration(_config_path(config))
        pipeline = Ts2JavaPipeline(generator_config, [Path(r) for r in roots])
        path = write_source_model(pipeline.parse(), Path(output))
    except Ts2JavaError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Model written to {path}")


if __name__ == "__main__":
    cli()
