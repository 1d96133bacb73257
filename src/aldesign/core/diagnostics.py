"""
Non-fatal parse diagnostics.

The parser absorbs malformed input instead of failing: unbalanced braces
truncate a branch, unrecognised headers produce placeholder regions and
unsupported object types produce bare symbols. Each of those events is
recorded here so callers can surface them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class DiagnosticKind(StrEnum):
    """Categories of parse anomalies."""

    STRUCTURAL = "structural"  # unbalanced braces, depth limit
    HEADER = "header"  # header line matched neither header form
    UNSUPPORTED_TYPE = "unsupported_type"  # root type is neither table nor page


class Diagnostic(BaseModel):
    """
    A single parse anomaly.

    Attributes:
        kind: Anomaly category
        message: Human-readable description
        line: 1-indexed source line, when known
    """

    kind: DiagnosticKind
    message: str
    line: int | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        where = f"line {self.line}: " if self.line else ""
        return f"{where}{self.kind.value}: {self.message}"


class DiagnosticSink:
    """Collects diagnostics emitted during one parse call."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def report(self, kind: DiagnosticKind, message: str, line: int | None = None) -> None:
        self._items.append(Diagnostic(kind=kind, message=message, line=line))

    @property
    def items(self) -> list[Diagnostic]:
        return list(self._items)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self._items if d.kind == kind]

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
