import json
from pathlib import Path

import click

from .cli_utils import generation_comment, reconstruct_command_line
from .errors import GenerationError, OutputValidationError
from .log import configure_logging, get_logger
from .pipeline import CodeGeneratorConfig, OutputMode, PipelineGenerator

logger = get_logger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite OUTPUT if it already exists")
@click.option(
    "--format",
    "format_tool",
    default=None,
    type=click.Choice(["black", "ruff"]),
    help="Format the generated module with black or ruff",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every generation phase")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(dir_okay=False, resolve_path=True))
def record_companion(config, force, format_tool, verbose, path, output):
    """Generate companion field/value types for the records declared in PATH.

    The module is written to OUTPUT, or printed when OUTPUT is omitted.
    """
    configure_logging("DEBUG" if verbose else "INFO")

    with open(path) as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{Path(path).name} is not valid JSON: {e}") from e

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if force:
        config.output.mode = OutputMode.FORCE
    if format_tool is not None:
        config.formatter.enabled = True
        config.formatter.tool = format_tool

    comment = generation_comment(reconstruct_command_line(record_companion))
    codegen = PipelineGenerator(document, config, comment)

    try:
        if output is None:
            click.echo(codegen.generate(), nl=False)
        else:
            codegen.write(Path(output))
            logger.info("Wrote %s", output)
    except (GenerationError, OutputValidationError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e
