"""CLI entry point for restdoc-params."""

import json
import logging
from pathlib import Path

import click
import yaml

from restdoc_params.errors import ParameterDocumentationError
from restdoc_params.interaction import Interaction
from restdoc_params.loader import load_descriptors, load_interaction
from restdoc_params.openapi import REQUEST_LOCATIONS, descriptors_for_location, parse_operation_parameters
from restdoc_params.snippet import LogOnFailure, ParametersSnippet, path_parameters, request_parameters


def _load_openapi_descriptors(openapi_path: Path, interaction: Interaction, kind: str):
    """Descriptors of the operation matching the interaction's method and path template."""
    if not interaction.path_template:
        raise click.UsageError("--openapi needs an interaction with a path_template")
    descriptors = parse_operation_parameters(openapi_path, interaction.method, interaction.path_template)
    if kind == "path":
        return descriptors_for_location(descriptors, "path")
    return descriptors_for_location(descriptors, *REQUEST_LOCATIONS)


def _build_snippet(descriptors, kind: str, lenient: bool) -> ParametersSnippet:
    if kind == "path":
        handler = LogOnFailure("Path parameters") if lenient else None
        return path_parameters(*descriptors, failure_handler=handler)
    handler = LogOnFailure("Request parameters") if lenient else None
    return request_parameters(*descriptors, failure_handler=handler)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """restdoc-params: verify documented API parameters against captured requests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("interaction_path", type=click.Path(exists=True, path_type=Path))
@click.option("-d", "--descriptors", "descriptors_path", type=click.Path(exists=True, path_type=Path), help="YAML/JSON file of parameter descriptors.")
@click.option("--openapi", "openapi_path", type=click.Path(exists=True, path_type=Path), help="Take descriptors from an OpenAPI/Swagger document.")
@click.option("--kind", default="request", type=click.Choice(["request", "path"]), help="Which parameters to document.")
@click.option("--lenient", is_flag=True, help="Warn about mismatches instead of failing.")
@click.option("--output-format", "output_format", default="json", type=click.Choice(["json", "yaml"]), help="Model output format.")
def check(interaction_path: Path, descriptors_path: Path | None, openapi_path: Path | None, kind: str, lenient: bool, output_format: str):
    """Verify documented parameters against INTERACTION_PATH and print the model."""
    if (descriptors_path is None) == (openapi_path is None):
        raise click.UsageError("Pass exactly one of --descriptors or --openapi")

    try:
        interaction = load_interaction(interaction_path)
        if descriptors_path is not None:
            descriptors = load_descriptors(descriptors_path)
        else:
            descriptors = _load_openapi_descriptors(openapi_path, interaction, kind)

        snippet = _build_snippet(descriptors, kind, lenient)
        model = snippet.document(interaction)
    except ParameterDocumentationError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "yaml":
        click.echo(yaml.safe_dump(model, sort_keys=False, allow_unicode=True), nl=False)
    else:
        click.echo(json.dumps(model, indent=2, ensure_ascii=False))
