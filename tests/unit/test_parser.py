"""Tests for the ObjectParser facade."""

from pathlib import Path

import pytest

from aldesign.core.collector import CollectorItem, ObjectCollector
from aldesign.core.diagnostics import DiagnosticKind
from aldesign.core.errors import ParseError, SourceReadError
from aldesign.core.ir import PageSymbol, SymbolObject, TableSymbol
from aldesign.core.manifest import load_manifest
from aldesign.core.parser import ObjectParser, ParseMode, parse_file, parse_text


class TestParseText:
    def test_table(self, table_source: str) -> None:
        result = parse_text(table_source)
        assert isinstance(result.symbol, TableSymbol)
        assert (result.symbol.id, result.symbol.name, result.symbol.type) == (
            50100,
            "Demo Customer",
            "table",
        )
        assert result.ok
        assert result.diagnostics == []

    def test_page(self, page_source: str) -> None:
        result = parse_text(page_source)
        assert isinstance(result.symbol, PageSymbol)
        assert result.symbol.get_property("PageType").value == "Card"

    def test_empty_text(self) -> None:
        result = parse_text("")
        assert type(result.symbol) is SymbolObject
        assert result.symbol.type == ""
        assert result.diagnostics == []

    def test_unbalanced_text_does_not_raise(self, table_source: str) -> None:
        result = parse_text(table_source.rstrip()[:-1])
        assert result.symbol.type == ""
        kinds = {d.kind for d in result.diagnostics}
        assert DiagnosticKind.STRUCTURAL in kinds
        assert DiagnosticKind.UNSUPPORTED_TYPE in kinds
        assert not result.ok

    def test_unsupported_type(self, al_fixtures_dir: Path) -> None:
        result = parse_file(al_fixtures_dir / "DemoMgt.Codeunit.al")
        assert type(result.symbol) is SymbolObject
        assert result.symbol.type == "codeunit"
        assert result.symbol.get_property("Access").value == "Public"
        assert [d.kind for d in result.diagnostics] == [DiagnosticKind.UNSUPPORTED_TYPE]

    def test_only_first_object_is_built(self) -> None:
        text = 'codeunit 1 "A"\n{\n}\ntable 2 "B"\n{\n}\n'
        assert parse_text(text).symbol.name == "A"

    def test_result_serializes(self, table_source: str) -> None:
        data = parse_text(table_source).model_dump()
        assert data["symbol"]["fields"][0]["name"] == "No."
        assert data["symbol"]["keys"][1]["field_names"] == ["Name", "Credit Limit"]


class TestParseFile:
    def test_reads_file(self, al_fixtures_dir: Path) -> None:
        result = parse_file(al_fixtures_dir / "DemoCustomer.Table.al")
        assert result.symbol.name == "Demo Customer"

    def test_bom_is_tolerated(self, tmp_path: Path, table_source: str) -> None:
        path = tmp_path / "Bom.Table.al"
        path.write_bytes(b"\xef\xbb\xbf" + table_source.encode("utf-8"))
        assert parse_file(path).symbol.type == "table"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError) as exc:
            parse_file(tmp_path / "Missing.Table.al")
        assert "Missing.Table.al" in str(exc.value)

    def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Bad.Table.al"
        path.write_bytes(b"table 1 \"\xff\xfe\"\n{\n}")
        with pytest.raises(SourceReadError):
            parse_file(path)


class TestParseModes:
    def test_text_mode(self, table_source: str) -> None:
        result = ObjectParser().parse(table_source, ParseMode.TEXT)
        assert result.symbol.type == "table"

    def test_file_mode(self, al_fixtures_dir: Path) -> None:
        result = ObjectParser().parse(str(al_fixtures_dir / "DemoCustomerCard.Page.al"), ParseMode.FILE)
        assert result.symbol.type == "page"

    def test_symbol_mode(self, al_project: Path) -> None:
        manifest = load_manifest(al_project / "aldesign.toml")
        parser = ObjectParser(manifest.parser, ObjectCollector(al_project, manifest))
        result = parser.parse(CollectorItem(id=18, type="Table", name="Customer"), ParseMode.SYMBOL)
        assert isinstance(result.symbol, TableSymbol)
        assert result.symbol.name == "Customer"

    def test_symbol_mode_unknown_object(self, al_project: Path) -> None:
        parser = ObjectParser(collector=ObjectCollector(al_project))
        item = CollectorItem(id=99999, type="table", name="Nope")
        assert parser.parse(item, ParseMode.SYMBOL) is None

    def test_symbol_mode_ignores_source_only_objects(self, al_project: Path) -> None:
        manifest = load_manifest(al_project / "aldesign.toml")
        parser = ObjectParser(collector=ObjectCollector(al_project, manifest))
        item = CollectorItem(id=50100, type="table", name="Demo Customer")
        assert parser.parse_symbol(item) is None

    def test_symbol_mode_requires_collector(self) -> None:
        with pytest.raises(ParseError):
            ObjectParser().parse_symbol(CollectorItem(id=18, type="table", name="Customer"))
