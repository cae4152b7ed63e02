"""CLI entry point for api-documentator."""

import logging
from pathlib import Path

import click

from api_documentator.builders.specification import SpecificationBuilder
from api_documentator.config import load_config
from api_documentator.errors import DocumentatorError
from api_documentator.routing.base import Route
from api_documentator.routing.loader import load_routes
from api_documentator.writer import write_document

DEFAULT_ROUTES_FILE = "routes.yaml"


def _progress(route: Route, path: str, methods: list[str]) -> None:
    click.echo(f"  {','.join(m.upper() for m in methods):<18} {path}")


@click.group()
def main():
    """API Documentator: generate OpenAPI documents from route tables."""
    pass


@main.command()
@click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Configuration YAML file.")
@click.option("-r", "--routes", "routes_path", default=DEFAULT_ROUTES_FILE, type=click.Path(path_type=Path), help="Route manifest (YAML or JSON).")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Override output path.")
@click.option("--format", "fmt", default=None, help="Override response format (simple, json-api or a class path).")
@click.option("--output-format", default=None, type=click.Choice(["json", "yaml"]), help="Serialization of the document.")
@click.option("--seed", default=None, type=int, help="Seed for reproducible examples.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def generate(config_path: Path | None, routes_path: Path, output: Path | None, fmt: str | None,
             output_format: str | None, seed: int | None, verbose: bool):
    """Generate the OpenAPI specification."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config_path)
        if fmt:
            config.format = fmt
        if output_format:
            config.output.format = output_format
        if seed is not None:
            config.examples.seed = seed

        routes = load_routes(routes_path)
        builder = SpecificationBuilder(routes, config)
        builder.set_progress_callback(_progress)

        click.echo("Generating OpenAPI specification...")
        spec = builder.build()

        path = output or Path(config.output.path)
        size = write_document(
            spec,
            path,
            fmt=config.output.format,
            pretty=config.output.pretty,
            sanitize=config.sanitize_utf8,
        )
    except DocumentatorError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    components = spec["components"]
    click.echo("")
    click.echo("Generated successfully")
    click.echo(f"  Format:           {builder.format.name()}")
    click.echo(f"  Routes:           {builder.processed_count}")
    click.echo(f"  Endpoints:        {len(spec['paths'])}")
    click.echo(f"  Schemas:          {len(components['schemas'])}")
    click.echo(f"  Responses:        {len(components['responses'])}")
    click.echo(f"  Security schemes: {len(components.get('securitySchemes', {}))}")
    click.echo(f"  Tags:             {len(spec.get('tags', []))}")
    click.echo(f"  Size:             {size / 1024:.2f} KB")
    click.echo(f"  Output:           {path}")
