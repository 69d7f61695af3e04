"""CLI entry point for docswagger."""

import json
from pathlib import Path

import click
import yaml

from docswagger.config import OptionsError, load_document, load_options
from docswagger.generator.swagger import generate as generate_document
from docswagger.generator.swagger import parse_file_fragments
from docswagger.generator.validator import validate_document
from docswagger.log import configure_logging

FORMATS = ["json", "yaml"]


def _dump(data, fmt: str) -> str:
    """Serialize data as JSON or YAML text."""
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr.")
def main(verbose: bool):
    """docswagger: compile @route/@typedef comment annotations into Swagger."""
    configure_logging("DEBUG" if verbose else "WARNING")


@main.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the Swagger document.")
@click.option("--format", "fmt", default="json", type=click.Choice(FORMATS), help="Output format.")
@click.option("--dereference", is_flag=True, default=False, help="Inline local $ref targets.")
def generate(config_path: Path, output: Path, fmt: str, dereference: bool):
    """Generate a Swagger document from the sources listed in CONFIG_PATH."""
    try:
        options = load_options(config_path)
    except OptionsError as e:
        raise click.UsageError(str(e)) from e
    if dereference:
        options.dereference = True

    click.echo(f"Scanning {', '.join(options.files)} in {options.basedir}...")
    doc = generate_document(options)
    click.echo(f"Found {len(doc.get('paths', {}))} paths and {len(doc.get('definitions', {}))} definitions.")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dump(doc, fmt), encoding="utf-8")
    click.echo(f"Swagger document saved to {output}")


@main.command()
@click.argument("source_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="json", type=click.Choice(FORMATS), help="Output format.")
def parse(source_path: Path, fmt: str):
    """Print the fragments assembled from one annotated source file."""
    fragments = parse_file_fragments(source_path)
    click.echo(_dump(fragments, fmt), nl=False)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(doc_path: Path):
    """Check a Swagger document for unresolved references."""
    try:
        doc = load_document(doc_path)
    except OptionsError as e:
        raise click.UsageError(str(e)) from e
    if not isinstance(doc, dict):
        raise click.UsageError(f"{doc_path}: expected a Swagger document")

    errors = validate_document(doc)
    for pointer, message in errors.items():
        click.echo(f"  {pointer}: {message}")
    if errors:
        raise click.ClickException(f"{len(errors)} problem(s) found in {doc_path}")
    click.echo(f"{doc_path} is valid.")
