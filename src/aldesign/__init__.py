"""
aldesign - structural parser for business-object definition sources.

Turns table and page definitions into typed symbol trees that design
surfaces and tooling can consume.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import ALDesignError, ParseError, SourceReadError, SymbolResolutionError
from .core.parser import ObjectParser, ParseMode, ParseResult, parse_file, parse_text

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "ALDesignError",
    "ParseError",
    "SourceReadError",
    "SymbolResolutionError",
    "ObjectParser",
    "ParseMode",
    "ParseResult",
    "parse_file",
    "parse_text",
]
