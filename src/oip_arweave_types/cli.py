"""Command-line utilities for the oip_arweave_types package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import ujson as json
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import get_version
from .api import (
    add_template,
    analyze_types,
    extract_file,
    generate_types,
    read_blob,
    render_templates_file,
    split_file,
)
from .client import TemplatesApiError
from .config import CONFIG_FILENAMES, create_sample_config, load_config
from .jsdoc import load_schema_data

app = typer.Typer(help="Generate TypeScript declarations from OIP Arweave templates")
config_app = typer.Typer(help="Manage OIP CLI configuration")
app.add_typer(config_app, name="config")
console = Console()


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Install the rich log handler before any command runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False, show_time=False)],
        force=True,
    )


@app.command()
def version() -> None:
    """Print the installed package version."""
    typer.echo(get_version())


@app.command()
def generate(
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output directory or file path.")
    ] = None,
    single_file: Annotated[
        bool, typer.Option("--single-file", help="Write one file instead of one per type.")
    ] = False,
    jsdoc: Annotated[bool, typer.Option(help="Annotate declarations with JSDoc.")] = True,
    schema: Annotated[
        Path | None,
        typer.Option(exists=True, readable=True, help="JSON/YAML file of JSDoc descriptions."),
    ] = None,
) -> None:
    """Generate TypeScript types from every API template."""
    try:
        schema_data = load_schema_data(schema) if schema else None
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--schema") from exc
    try:
        report = generate_types(
            output=output,
            single_file=single_file or None,
            include_jsdoc=jsdoc,
            schema_data=schema_data,
        )
    except TemplatesApiError as exc:
        console.print("[yellow]Please check your internet connection and try again.[/]")
        raise typer.Exit(code=1) from exc
    if report.single_file:
        console.print(f"[bold green]Types written:[/] {report.output_path}")
    else:
        console.print(f"[bold green]Output directory:[/] {report.output_dir}")
        console.print(f"[bold]Files:[/] {report.file_count} + {report.output_path.name}")
    console.print(f"[bold]Declarations:[/] {report.declaration_count}")


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Name of the template to fetch and add.")],
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing file without prompting.")
    ] = False,
) -> None:
    """Add a single template with the declarations it references."""

    def confirm(path: Path) -> bool:
        console.print(f"[yellow]File already exists:[/] {path}")
        return typer.confirm("Do you want to overwrite it?", default=False)

    written = add_template(name, force=force or None, confirm=confirm)
    if written is None:
        raise typer.Exit(code=1)
    console.print(f"[bold green]Template schema added:[/] {written}")


@app.command()
def extract(
    blob: Annotated[Path, typer.Argument(exists=True, readable=True)],
    name: Annotated[str, typer.Argument(help="Declaration to extract.")],
    out: Annotated[Path | None, typer.Option(help="Destination file.")] = None,
) -> None:
    """Extract one declaration and its direct dependencies from a local blob."""
    destination = out or Path(f"{name}.ts")
    try:
        written = extract_file(blob, name, destination)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="BLOB") from exc
    if written is None:
        console.print(f"[red]Declaration {name} not found in {blob}[/]")
        raise typer.Exit(code=1)
    console.print(f"[bold green]Extracted:[/] {written}")


@app.command()
def split(
    blob: Annotated[Path, typer.Argument(exists=True, readable=True)],
    out_dir: Annotated[Path, typer.Option(help="Directory for the split files.")] = Path("oip"),
) -> None:
    """Split a local blob into one file per declaration plus index.ts."""
    try:
        result = split_file(blob, out_dir)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="BLOB") from exc
    console.print(f"[bold green]Wrote:[/] {len(result.files)} files + index.ts to {out_dir}")


@app.command()
def render(
    templates: Annotated[Path, typer.Argument(exists=True, readable=True)],
    out: Annotated[Path, typer.Option()] = Path("types/generated-types.ts"),
    keep_versions: Annotated[
        bool, typer.Option(help="Keep every distinct shape of a template as V2, V3...")
    ] = False,
) -> None:
    """Render a local templates payload (JSON/YAML) into one declaration file."""
    try:
        written = render_templates_file(templates, out, keep_versions=keep_versions)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(f"[bold green]Types written:[/] {written}")


@app.command()
def inspect(blob: Annotated[Path, typer.Argument(exists=True, readable=True)]) -> None:
    """List the declarations found in a local blob."""
    try:
        analysis = analyze_types(read_blob(blob))
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="BLOB") from exc
    table = Table(title=f"Declarations ({blob})")
    table.add_column("#")
    table.add_column("Name")
    for idx, name in enumerate(analysis.names, start=1):
        table.add_row(str(idx), name)
    console.print(table)


@config_app.command("init")
def config_init(
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing file.")] = False,
) -> None:
    """Create a sample oip.config.json."""
    path = Path(CONFIG_FILENAMES[0])
    if path.exists() and not force:
        console.print(f"[yellow]Configuration file already exists:[/] {path}")
        console.print("Use --force to overwrite, or edit the existing file")
        return
    create_sample_config(path)
    console.print(f"[bold green]Sample config created:[/] {path}")


@config_app.command("show")
def config_show() -> None:
    """Display the resolved configuration."""
    typer.echo(json.dumps(load_config().dump(), indent=2))


def main() -> None:
    """Entry point for `python -m oip_arweave_types.cli`."""
    app()


if __name__ == "__main__":
    main()
