import dataclasses
import json
import logging
from pathlib import Path

import click

from .generator import CSharpGenerator
from .parser import SchemaParseError
from .settings import CSharpGeneratorSettings, NullHandling

logger = logging.getLogger(__name__)


@click.command()
@click.option("--name", "-n", default=None, type=str)
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--null-handling",
    default=None,
    type=click.Choice([h.value for h in NullHandling]),
    help="How nullability is derived (overrides config file if set)",
)
@click.option(
    "--no-data-annotations",
    is_flag=True,
    default=False,
    help="Do not render System.ComponentModel.DataAnnotations attributes",
)
@click.option(
    "--facts",
    is_flag=True,
    default=False,
    help="Write the per-property facts as JSON instead of C# code",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def json_schema_cs_properties(name, config, null_handling, no_data_annotations, facts, verbose, path, output):
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    with open(path) as f:
        schema = json.load(f)

    if config is not None:
        with open(config) as f:
            config_dict = json.load(f)
        try:
            settings = CSharpGeneratorSettings.from_dict(config_dict)
        except ValueError as e:
            raise click.ClickException(f"Invalid config {config}: {e}") from e
    else:
        settings = CSharpGeneratorSettings()

    # CLI flags override the config file
    if null_handling is not None:
        settings = dataclasses.replace(settings, null_handling=NullHandling(null_handling))
    if no_data_annotations:
        settings = dataclasses.replace(settings, generate_data_annotations=False)

    if name is None:
        name = Path(path).stem.split(".")[0]

    logger.debug("Generating %s from %s with %s", name, path, settings.to_dict())
    codegen = CSharpGenerator(name, schema, settings)

    try:
        if facts:
            out = json.dumps(codegen.generate_property_facts(), indent=2) + "\n"
        else:
            out = codegen.generate()
    except SchemaParseError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w") as f:
        f.write(out)
