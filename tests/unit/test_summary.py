"""Tests for the quick object summary."""

from pathlib import Path

from aldesign.core.summary import summarize_source


def test_table_summary(table_source: str) -> None:
    summary = summarize_source(table_source)
    assert summary is not None
    assert summary.type == "table"
    assert summary.id == 50100
    assert summary.name == "Demo Customer"
    assert summary.sub_type == ""
    assert summary.fields == ["No.", "Name", "Credit Limit"]
    assert summary.path is None


def test_page_summary(page_source: str) -> None:
    summary = summarize_source(page_source, Path("DemoCustomerCard.Page.al"))
    assert summary is not None
    assert summary.type == "page"
    assert summary.sub_type == "Card"
    assert summary.fields == ["No.", "Name", "Balance"]
    assert summary.path == "DemoCustomerCard.Page.al"


def test_other_objects_list_no_fields() -> None:
    summary = summarize_source('Codeunit 50102 "Demo Mgt"\n{\n    field(1; x)\n}')
    assert summary is not None
    assert summary.type == "codeunit"
    assert summary.fields == []


def test_brace_on_declaration_line() -> None:
    summary = summarize_source('table 7 "Inline" {\n}')
    assert summary is not None
    assert summary.name == "Inline"


def test_no_declaration() -> None:
    assert summarize_source("// nothing to see") is None
    assert summarize_source("") is None
