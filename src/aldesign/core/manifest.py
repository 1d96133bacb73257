import tomllib
from dataclasses import dataclass, field
from pathlib import Path

MANIFEST_NAME = "aldesign.toml"


@dataclass
class ParserConfig:
    """Parser limits and source decoding.

    Examples in aldesign.toml:

        [parser]
        max_depth = 32
        encoding = "utf-8-sig"
    """

    max_depth: int = 64  # deepest region nesting kept in the tree
    encoding: str = "utf-8-sig"  # tolerate a BOM, common in exported sources


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from aldesign.toml.

    Contains the project name, where object sources and compiled symbol
    packages live, and parser settings.
    """

    name: str
    project_root: str
    source_paths: list[str] = field(default_factory=lambda: ["."])
    symbol_paths: list[str] = field(default_factory=lambda: [".alpackages"])
    parser: ParserConfig = field(default_factory=ParserConfig)


def default_manifest(root: Path) -> ProjectManifest:
    """Manifest used when a project has no aldesign.toml."""
    return ProjectManifest(name=root.name, project_root=str(root))


def load_manifest(path: Path) -> ProjectManifest:
    data = tomllib.loads(path.read_text(encoding="utf-8"))

    project = data.get("project", {})
    sources = data.get("sources", {})
    symbols = data.get("symbols", {})
    parser_data = data.get("parser", {})

    parser_config = ParserConfig(
        max_depth=parser_data.get("max_depth", 64),
        encoding=parser_data.get("encoding", "utf-8-sig"),
    )
    if parser_config.max_depth < 1:
        raise ValueError(f"parser.max_depth must be positive, got {parser_config.max_depth}")

    return ProjectManifest(
        name=project.get("name", path.parent.name),
        project_root=str(path.parent.resolve()),
        source_paths=sources.get("paths", ["."]),
        symbol_paths=symbols.get("paths", [".alpackages"]),
        parser=parser_config,
    )


def find_manifest(start: Path) -> Path | None:
    """Walk up from ``start`` looking for aldesign.toml."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for candidate in (current, *current.parents):
        manifest_path = candidate / MANIFEST_NAME
        if manifest_path.exists():
            return manifest_path
    return None
