"""
Error types for aldesign parsing and symbol resolution.

Only boundary failures (reading source text, resolving symbol metadata)
are raised. Anomalies inside the parser itself are reported as
diagnostics, see :mod:`aldesign.core.diagnostics`.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class ALDesignError(Exception):
    """Base exception for all aldesign errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(ALDesignError):
    """
    Raised when a parse request cannot be served at all.

    Examples:
    - Unknown parse mode
    - Missing options for the requested mode
    """

    pass


class SourceReadError(ALDesignError):
    """
    Raised when object source text cannot be read.

    Examples:
    - File does not exist
    - Permission denied
    - Undecodable bytes for the configured encoding
    """

    pass


class SymbolResolutionError(ALDesignError):
    """Raised when an object cannot be resolved from symbol metadata."""

    pass


class ObjectNotFoundError(SymbolResolutionError):
    """
    Raised when symbol metadata does not contain the requested object.

    Attributes:
        object_type: Object type that was looked up (e.g. "table")
        object_id: Object id that was looked up
    """

    def __init__(self, object_type: str, object_id: int, package: str | None = None):
        self.object_type = object_type
        self.object_id = object_id
        self.package = package
        where = f" in {package}" if package else ""
        super().__init__(f"{object_type} {object_id} not found{where}")


class SymbolMetadataError(SymbolResolutionError):
    """
    Raised when symbol metadata is malformed.

    Examples:
    - Invalid JSON
    - Package archive without SymbolReference.json
    - Object entries missing required keys
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error in a source or metadata file.

    Attributes:
        file: File the error was found in
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Source lines ending with the offending line, if available
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format the location, followed by the numbered snippet if any.

        Returns:
            e.g. "SymbolReference.json:12:7"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if not self.snippet:
            return location
        return f"{location}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        lines = self.snippet.splitlines() if self.snippet else []
        first = self.line - len(lines) + 1
        rendered = [f"{number:4d} | {text}" for number, text in enumerate(lines, start=first)]
        gutter = len(f"{self.line:4d} | ")
        rendered.append(" " * (gutter + self.column - 1) + "^^^")
        return "\n".join(rendered)


def make_read_error(path: Path, reason: str) -> SourceReadError:
    """
    Helper to create a SourceReadError pointing at a file.

    Args:
        path: File that could not be read
        reason: Underlying failure description

    Returns:
        SourceReadError with context attached
    """
    context = ErrorContext(file=path, line=1, column=1)
    return SourceReadError(f"Cannot read object source: {reason}", context)
