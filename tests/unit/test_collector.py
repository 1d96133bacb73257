"""Tests for object discovery."""

import json
import logging
from pathlib import Path

from aldesign.core.collector import ObjectCollector
from aldesign.core.fileset import discover_source_files, discover_symbol_packages
from aldesign.core.ir import PageSymbol
from aldesign.core.manifest import default_manifest, load_manifest


class TestFileset:
    def test_source_files(self, al_project: Path) -> None:
        manifest = load_manifest(al_project / "aldesign.toml")
        files = discover_source_files(al_project, manifest)
        assert [f.name for f in files] == [
            "DemoCustomer.Table.al",
            "DemoCustomerCard.Page.al",
            "DemoMgt.Codeunit.al",
        ]

    def test_symbol_packages(self, al_project: Path) -> None:
        (al_project / ".alpackages" / "notes.json").write_text("{}", encoding="utf-8")
        files = discover_symbol_packages(al_project, default_manifest(al_project))
        assert [f.name for f in files] == ["SymbolReference.json"]

    def test_missing_paths_are_skipped(self, tmp_path: Path) -> None:
        manifest = default_manifest(tmp_path)
        assert discover_symbol_packages(tmp_path, manifest) == []


class TestObjectCollector:
    def test_discover(self, al_project: Path) -> None:
        manifest = load_manifest(al_project / "aldesign.toml")
        items = ObjectCollector(al_project, manifest).discover()
        found = {(i.type, i.id) for i in items}
        assert found == {
            ("table", 50100),
            ("page", 50101),
            ("codeunit", 50102),
            ("table", 18),
            ("codeunit", 80),
            ("page", 21),
        }

    def test_source_items(self, al_project: Path) -> None:
        collector = ObjectCollector(al_project, load_manifest(al_project / "aldesign.toml"))
        page = collector.find("page", 50101)
        assert page is not None
        assert page.from_source
        assert page.sub_type == "Card"
        assert page.symbol_data is None
        assert page.path.endswith("DemoCustomerCard.Page.al")

    def test_symbol_items(self, al_project: Path) -> None:
        collector = ObjectCollector(al_project, load_manifest(al_project / "aldesign.toml"))
        item = collector.find("PAGE", 21)
        assert item is not None
        assert not item.from_source
        assert item.symbol_data.type == "page"
        symbol = collector.get_symbol_reference(item.symbol_data)
        assert isinstance(symbol, PageSymbol)
        assert symbol.name == "Customer Card"

    def test_find_unknown(self, al_project: Path) -> None:
        assert ObjectCollector(al_project).find("table", 1) is None

    def test_broken_package_is_skipped(self, al_project: Path, caplog) -> None:
        (al_project / ".alpackages" / "Broken.app").write_bytes(b"not a zip")
        with caplog.at_level(logging.WARNING, logger="aldesign.core.collector"):
            items = ObjectCollector(al_project).discover()
        assert any(i.id == 18 for i in items)
        assert "Broken.app" in caplog.text

    def test_source_without_declaration_is_skipped(self, al_project: Path) -> None:
        (al_project / "src" / "Notes.al").write_text("// nothing", encoding="utf-8")
        items = ObjectCollector(al_project).discover()
        assert not any(i.path and i.path.endswith("Notes.al") for i in items)

    def test_malformed_entries_are_skipped(self, tmp_path: Path, caplog) -> None:
        packages = tmp_path / ".alpackages"
        packages.mkdir()
        (packages / "SymbolReference.json").write_text(
            json.dumps(
                {
                    "Tables": [
                        {"Id": "abc", "Name": "Bad Id"},
                        {"Id": 7, "Name": ["not", "a", "name"]},
                        "not an entry",
                        {"Id": 8, "Name": "Good"},
                    ],
                    "Pages": 5,
                    "Namespaces": ["nope"],
                }
            ),
            encoding="utf-8",
        )
        with caplog.at_level(logging.WARNING, logger="aldesign.core.collector"):
            items = ObjectCollector(tmp_path).discover()
        assert [(i.type, i.id, i.name) for i in items] == [("table", 8, "Good")]
        assert "'abc'" in caplog.text
        assert caplog.text.count("Skipping") == 3
