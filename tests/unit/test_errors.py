"""Tests for error types and diagnostics."""

from pathlib import Path

from aldesign.core.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from aldesign.core.errors import (
    ALDesignError,
    ErrorContext,
    ObjectNotFoundError,
    SourceReadError,
    SymbolResolutionError,
    make_read_error,
)


class TestErrorContext:
    def test_location(self) -> None:
        context = ErrorContext(file=Path("Customer.Table.al"), line=10, column=5)
        assert context.format() == "Customer.Table.al:10:5"

    def test_snippet_marker(self) -> None:
        context = ErrorContext(
            file=Path("Customer.Table.al"),
            line=3,
            column=5,
            snippet="table 1 X\n{\n    fields",
        )
        lines = context.format().split("\n")
        assert lines[0] == "Customer.Table.al:3:5"
        assert lines[1] == "   1 | table 1 X"
        assert lines[3] == "   3 |     fields"
        assert lines[4] == " " * 11 + "^^^"

    def test_message_includes_context(self) -> None:
        context = ErrorContext(file=Path("a.al"), line=1, column=1)
        error = ALDesignError("broken", context)
        assert str(error) == "a.al:1:1\nbroken"
        assert error.message == "broken"


class TestErrors:
    def test_make_read_error(self, tmp_path: Path) -> None:
        error = make_read_error(tmp_path / "Missing.al", "no such file")
        assert isinstance(error, SourceReadError)
        assert error.context.file == tmp_path / "Missing.al"
        assert "Cannot read object source: no such file" in str(error)

    def test_object_not_found(self) -> None:
        error = ObjectNotFoundError("page", 21, package="Base.app")
        assert isinstance(error, SymbolResolutionError)
        assert str(error) == "page 21 not found in Base.app"
        assert (error.object_type, error.object_id) == ("page", 21)

    def test_object_not_found_without_package(self) -> None:
        assert str(ObjectNotFoundError("table", 1)) == "table 1 not found"


class TestDiagnostics:
    def test_str(self) -> None:
        diagnostic = Diagnostic(kind=DiagnosticKind.HEADER, message="odd", line=4)
        assert str(diagnostic) == "line 4: header: odd"
        assert str(Diagnostic(kind=DiagnosticKind.STRUCTURAL, message="x")) == "structural: x"

    def test_sink(self) -> None:
        sink = DiagnosticSink()
        assert not sink
        sink.report(DiagnosticKind.STRUCTURAL, "unclosed", line=2)
        sink.report(DiagnosticKind.HEADER, "odd")
        assert len(sink) == 2
        assert [d.message for d in sink.of_kind(DiagnosticKind.HEADER)] == ["odd"]
        sink.items.clear()
        assert len(sink) == 2
