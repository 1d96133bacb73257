"""
Parse command.

Commands:
- parse: Parse an object source file and print its symbol tree
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from aldesign.cli.render import print_diagnostics, print_symbol
from aldesign.cli.utils import check_format, resolve_project
from aldesign.core.errors import SourceReadError
from aldesign.core.parser import ObjectParser


def parse_command(
    file: Annotated[Path, typer.Argument(help="Object source file (.al)")],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: tree (default) or json"),
    ] = "tree",
    manifest: Annotated[
        str | None,
        typer.Option("--manifest", "-m", help="Path to aldesign.toml"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 if the parse reported anomalies"),
    ] = False,
) -> None:
    """Parse an object source file into its symbol tree.

    Examples:
        aldesign parse src/Customer.Table.al
        aldesign parse src/CustomerCard.Page.al --format json
    """
    check_format(format, ("tree", "json"))

    _, project = resolve_project(manifest, start=file.parent)
    parser = ObjectParser(project.parser)

    try:
        result = parser.parse_file(file)
    except SourceReadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if format == "json":
        typer.echo(result.model_dump_json(indent=2))
    else:
        print_symbol(result.symbol)
        print_diagnostics(result.diagnostics)

    if strict and result.diagnostics:
        raise typer.Exit(code=1)
