"""
aldesign CLI package.

- parse.py: parse a single object source file
- objects.py: project object listing and lookup
- render.py: rich output
- utils.py: shared utilities
"""

import typer

from aldesign.cli.objects import objects_command, show_command
from aldesign.cli.parse import parse_command
from aldesign.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="""aldesign – object definition parser

Commands:
  • parse: print the symbol tree of a source file
  • objects: list objects of the current project
  • show: print the symbol tree of one object
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """aldesign CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="parse")(parse_command)
app.command(name="objects")(objects_command)
app.command(name="show")(show_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv)


__all__ = [
    "app",
    "main",
    "version_callback",
]
