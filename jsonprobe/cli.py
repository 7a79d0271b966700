#!/usr/bin/env python3
"""
jsonprobe CLI - Inspect and check JSON response fixtures

Usage:
    jsonprobe validate <fixture.yaml>
    jsonprobe get <fixture.yaml> <path> [--default VALUE]
    jsonprobe only <fixture.yaml> <path>...
    jsonprobe structure <fixture.yaml> <structure.yaml>
    jsonprobe dump <fixture.yaml>
    jsonprobe --version
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import DEFAULT_CONFIG, ProbeConfig, load_config
from .errors import JsonProbeError
from .fixtures import JsonFixture, load_fixture, load_structure
from .formatting import Dumper

app = typer.Typer(
    name="jsonprobe",
    help="🔎 jsonprobe - Inspect and check JSON response fixtures",
    add_completion=False,
)
console = Console()

# Options loaded by the --config callback, shared by all commands
state: dict[str, ProbeConfig] = {"config": DEFAULT_CONFIG}


def version_callback(value: bool):
    if value:
        console.print(f"🔎 jsonprobe v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="YAML file with jsonprobe options (delimiter, wildcard, ...)"
    ),
):
    """
    🔎 jsonprobe - Inspect and check JSON response fixtures

    Read values by dot path and check structures of fixture files.
    """
    state["config"] = DEFAULT_CONFIG
    if config is None:
        return

    loaded, validation = load_config(config)
    if not validation.is_valid:
        console.print("\n[red]❌ Invalid options file:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)
    state["config"] = loaded


def _load(fixture_file: Path) -> JsonFixture:
    """Load a fixture or exit with the validation errors."""
    fixture, validation = load_fixture(fixture_file, state["config"])
    if not validation.is_valid:
        console.print("\n[red]❌ Validation failed:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)
    return fixture


@app.command()
def validate(
    fixture_file: Path = typer.Argument(
        ...,
        help="Path to the fixture YAML or JSON file",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
):
    """
    Validate a fixture file.

    Check the layout and the body JSON and report any errors.
    """
    console.print(f"\n📄 Validating: {fixture_file}")

    fixture = _load(fixture_file)
    document = fixture.json()

    console.print(f"\n[green]✅ Valid fixture:[/green] {fixture.status} {fixture.reason}")

    table = Table(title="Fixture")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("status", str(fixture.status))
    table.add_row("version", fixture.version)
    table.add_row("headers", ", ".join(fixture.headers) or "(none)")
    table.add_row("body", type(document).__name__)
    if isinstance(document, dict):
        table.add_row("keys", ", ".join(map(str, document)) or "(empty)")
    elif isinstance(document, list):
        table.add_row("items", str(len(document)))

    console.print()
    console.print(table)


@app.command()
def get(
    fixture_file: Path = typer.Argument(
        ..., help="Path to the fixture file", exists=True, dir_okay=False, readable=True,
    ),
    path: str = typer.Argument(..., help="Dot-delimited key path, e.g. data.0.id"),
    default: Optional[str] = typer.Option(
        None, "--default", "-d",
        help="Value to print when the path does not exist"
    ),
):
    """
    Print the value at a key path.
    """
    fixture = _load(fixture_file)

    try:
        found = fixture.has(path)
    except JsonProbeError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    if not found:
        if default is None:
            console.print(f"[red]❌ Path not found:[/red] {path}")
            raise typer.Exit(code=1)
        console.print(default, markup=False, highlight=False)
        return

    console.print_json(data=fixture.get(path))


@app.command()
def only(
    fixture_file: Path = typer.Argument(
        ..., help="Path to the fixture file", exists=True, dir_okay=False, readable=True,
    ),
    paths: List[str] = typer.Argument(..., help="Key paths to keep"),
):
    """
    Print the body reduced to the given key paths.
    """
    fixture = _load(fixture_file)

    try:
        projected = fixture.only(paths)
    except JsonProbeError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1)

    console.print_json(data=projected)


@app.command()
def structure(
    fixture_file: Path = typer.Argument(
        ..., help="Path to the fixture file", exists=True, dir_okay=False, readable=True,
    ),
    structure_file: Path = typer.Argument(
        ..., help="Path to the structure YAML or JSON file", exists=True, dir_okay=False, readable=True,
    ),
):
    """
    Check the fixture body against a structure file.

    Keys listed in the structure must be present; "*" applies the nested
    structure to every element of a list.
    """
    fixture = _load(fixture_file)

    expected, validation = load_structure(structure_file)
    if not validation.is_valid:
        console.print("\n[red]❌ Invalid structure file:[/red]")
        console.print(str(validation))
        raise typer.Exit(code=1)

    result = fixture.engine.json_structure(fixture.json(), expected)
    console.print(str(result), markup=False)

    if not result.passed:
        raise typer.Exit(code=1)


@app.command()
def dump(
    fixture_file: Path = typer.Argument(
        ..., help="Path to the fixture file", exists=True, dir_okay=False, readable=True,
    ),
):
    """
    Print the fixture body as formatted JSON.
    """
    fixture = _load(fixture_file)
    fixture.dump(Dumper(console, indent=state["config"].indent))


@app.command()
def info():
    """
    Show information about jsonprobe.
    """
    console.print(f"""
🔎 [bold]jsonprobe[/bold] v{__version__}

Assertion helpers for JSON response payloads

[bold]Features:[/bold]
  • Dot-path access to JSON bodies (get, set, forget, only)
  • Structure checks with "*" wildcards over lists
  • Subset, exact and fragment JSON assertions
  • YAML and JSON fixture files

[bold]Quick Start:[/bold]
  jsonprobe validate fixtures/users.yaml
  jsonprobe get fixtures/users.yaml data.0.id
  jsonprobe structure fixtures/users.yaml fixtures/users.structure.yaml
""")


if __name__ == "__main__":
    app()
