"""
aldesign CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer

from aldesign._version import get_version
from aldesign.core.manifest import ProjectManifest, default_manifest, find_manifest, load_manifest


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"aldesign version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route parser logging to stderr; debug output with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def resolve_project(manifest: str | None, start: Path | None = None) -> tuple[Path, ProjectManifest]:
    """Resolve the project root and manifest.

    An explicit ``--manifest`` must exist; otherwise aldesign.toml is
    searched upwards from ``start`` and defaults are used when none is found.
    """
    if manifest:
        manifest_path = Path(manifest).resolve()
        if not manifest_path.exists():
            typer.echo(f"No manifest found at {manifest_path}", err=True)
            raise typer.Exit(code=1)
    else:
        manifest_path = find_manifest(start or Path.cwd())
        if manifest_path is None:
            root = (start or Path.cwd()).resolve()
            return root, default_manifest(root)

    try:
        return manifest_path.parent, load_manifest(manifest_path)
    except (OSError, ValueError) as e:
        typer.echo(f"Invalid manifest {manifest_path}: {e}", err=True)
        raise typer.Exit(code=1)


def check_format(format: str, choices: tuple[str, ...]) -> None:
    """Exit with code 2 unless ``format`` is one of ``choices``."""
    if format not in choices:
        typer.echo(f"Unknown format: {format} (expected {' or '.join(choices)})", err=True)
        raise typer.Exit(code=2)
