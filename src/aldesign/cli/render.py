"""Rich rendering of symbols, diagnostics and object listings."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from aldesign.core.collector import CollectorItem
from aldesign.core.diagnostics import Diagnostic
from aldesign.core.ir import ObjectSymbol, PageControl, PageSymbol, TableSymbol
from aldesign.core.symbol_builder import layout_columns


def symbol_tree(symbol: ObjectSymbol) -> Tree:
    """Build a rich Tree for a symbol."""
    title = symbol.type if symbol.is_parsed else "unparsed"
    tree = Tree(f"[bold]{title}[/bold] {symbol.id} [cyan]{escape(symbol.name)}[/cyan]")

    if isinstance(symbol, TableSymbol):
        fields = tree.add(f"fields ({len(symbol.fields)})")
        for f in symbol.fields:
            data_type = f" [dim]{escape(f.data_type)}[/dim]" if f.data_type else ""
            fields.add(f"{f.id} {escape(f.name)}{data_type}  [green]{escape(f.caption)}[/green]")
        keys = tree.add(f"keys ({len(symbol.keys)})")
        for k in symbol.keys:
            keys.add(f"{escape(k.name)}: {escape(', '.join(k.field_names))}")
    elif isinstance(symbol, PageSymbol):
        count = sum(1 for _ in symbol.iter_controls())
        _add_controls(tree.add(f"controls ({count})"), symbol.controls)
        _add_controls(tree.add("actions"), symbol.actions)

    return tree


def _add_controls(branch: Tree, controls: list[PageControl]) -> None:
    left, right = layout_columns(controls)
    for column, marker in ((left, ""), (right, " [magenta]|[/magenta]")):
        for control in column:
            expression = f" = {escape(control.source_expression)}" if control.source_expression else ""
            node = branch.add(
                f"{control.control_type} [cyan]{escape(control.caption)}[/cyan]{expression}{marker}"
            )
            _add_controls(node, control.controls)


def print_symbol(symbol: ObjectSymbol) -> None:
    Console().print(symbol_tree(symbol))


def print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    console = Console(stderr=True)
    for diagnostic in diagnostics:
        console.print(f"[yellow]warning[/yellow] {escape(str(diagnostic))}")


def print_objects(items: list[CollectorItem]) -> None:
    table = Table(title="Objects")
    table.add_column("Type")
    table.add_column("Id", justify="right")
    table.add_column("Name")
    table.add_column("Origin")

    for item in items:
        if item.from_source:
            origin = item.path
        else:
            origin = item.symbol_data.package if item.symbol_data else ""
        table.add_row(item.type, str(item.id), escape(item.name), escape(origin))

    Console().print(table)
