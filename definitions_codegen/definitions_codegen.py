import json
import logging

import click

from .errors import DefinitionsError
from .pipeline import CodeGeneratorConfig, PipelineGenerator


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--format/--no-format", "format_", default=None, help="Run the formatter over the generated files")
@click.option("--formatter", "-f", default=None, type=click.Choice(["ruff", "black"]))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Validate variant references and identifiers before generating",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.option("--quiet", "-q", is_flag=True, default=False)
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("output_dir", type=click.Path(file_okay=False, resolve_path=True))
def definitions_codegen(config, format_, formatter, strict, verbose, quiet, input_dir, output_dir):
    """Compile the definition files in INPUT_DIR into a Python package at OUTPUT_DIR."""
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if format_ is not None:
        config.formatter.enabled = format_
    if formatter is not None:
        config.formatter.tool = formatter
    if strict:
        config.validate_references = True
        config.validate_identifiers = True

    try:
        PipelineGenerator(config).compile(input_dir, output_dir)
    except DefinitionsError as e:
        raise click.ClickException(str(e)) from e
