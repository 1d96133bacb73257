"""Shared pytest fixtures for aldesign tests."""

import shutil
from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def al_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to object source fixtures."""
    return fixtures_dir / "al"


@pytest.fixture
def table_source(al_fixtures_dir: Path) -> str:
    """Source text of the demo table."""
    return (al_fixtures_dir / "DemoCustomer.Table.al").read_text(encoding="utf-8")


@pytest.fixture
def page_source(al_fixtures_dir: Path) -> str:
    """Source text of the demo card page."""
    return (al_fixtures_dir / "DemoCustomerCard.Page.al").read_text(encoding="utf-8")


@pytest.fixture
def symbol_reference_file(fixtures_dir: Path) -> Path:
    """Return path to the extracted SymbolReference.json fixture."""
    return fixtures_dir / "symbols" / "SymbolReference.json"


@pytest.fixture
def al_project(tmp_path: Path, al_fixtures_dir: Path, symbol_reference_file: Path) -> Path:
    """Create a project with sources under src/ and symbols under .alpackages/."""
    src = tmp_path / "src"
    src.mkdir()
    for source in al_fixtures_dir.glob("*.al"):
        shutil.copy(source, src / source.name)

    packages = tmp_path / ".alpackages"
    packages.mkdir()
    shutil.copy(symbol_reference_file, packages / "SymbolReference.json")

    (tmp_path / "aldesign.toml").write_text(
        """
[project]
name = "demo"

[sources]
paths = ["src/"]

[symbols]
paths = [".alpackages"]
""",
        encoding="utf-8",
    )
    return tmp_path
