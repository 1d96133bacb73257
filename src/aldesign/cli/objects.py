"""
Object discovery commands.

Commands:
- objects: List objects found in project sources and symbol packages
- show: Print the symbol tree of one object, by type and id
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from aldesign.cli.render import print_diagnostics, print_objects, print_symbol
from aldesign.cli.utils import check_format, resolve_project
from aldesign.core.collector import ObjectCollector
from aldesign.core.errors import ALDesignError
from aldesign.core.parser import ObjectParser

ManifestOption = Annotated[
    str | None,
    typer.Option("--manifest", "-m", help="Path to aldesign.toml"),
]


def objects_command(
    manifest: ManifestOption = None,
    type: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Only list objects of this type (e.g. table)"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table (default) or json"),
    ] = "table",
) -> None:
    """List the objects of the current project.

    Examples:
        aldesign objects
        aldesign objects --type page --format json
    """
    check_format(format, ("table", "json"))
    root, project = resolve_project(manifest)
    items = ObjectCollector(root, project).discover()
    if type:
        items = [i for i in items if i.type == type.lower()]

    if format == "json":
        typer.echo(json.dumps([i.model_dump(mode="json") for i in items], indent=2))
    else:
        print_objects(items)


def show_command(
    object_type: Annotated[str, typer.Argument(help="Object type, e.g. table or page")],
    object_id: Annotated[int, typer.Argument(help="Object id")],
    manifest: ManifestOption = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: tree (default) or json"),
    ] = "tree",
) -> None:
    """Show the symbol tree of one object.

    Objects defined in project sources are parsed from their file; other
    objects are resolved from symbol packages.

    Examples:
        aldesign show table 50100
        aldesign show page 21 --format json
    """
    check_format(format, ("tree", "json"))
    root, project = resolve_project(manifest)
    collector = ObjectCollector(root, project)
    parser = ObjectParser(project.parser, collector)

    item = collector.find(object_type, object_id)
    if item is None:
        typer.echo(f"{object_type} {object_id} not found", err=True)
        raise typer.Exit(code=1)

    diagnostics = []
    try:
        if item.from_source:
            result = parser.parse_file(Path(item.path))
            symbol, diagnostics = result.symbol, result.diagnostics
        else:
            symbol = parser.parse_symbol(item)
    except ALDesignError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if symbol is None:
        typer.echo(f"No symbol metadata for {object_type} {object_id}", err=True)
        raise typer.Exit(code=1)

    if format == "json":
        typer.echo(symbol.model_dump_json(indent=2))
    else:
        print_symbol(symbol)
        print_diagnostics(diagnostics)
