"""Core aldesign functionality: IR, region matching, symbol building, object discovery."""

from . import ir
from .collector import CollectorItem, ObjectCollector
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink
from .errors import (
    ALDesignError,
    ErrorContext,
    ObjectNotFoundError,
    ParseError,
    SourceReadError,
    SymbolMetadataError,
    SymbolResolutionError,
)
from .headers import RegionHeader, classify_header
from .manifest import ParserConfig, ProjectManifest, find_manifest, load_manifest
from .parser import ObjectParser, ParseMode, ParseResult, parse_file, parse_text
from .region_matcher import match_regions
from .summary import ObjectSummary, summarize_source
from .symbol_builder import build_symbol
from .symbol_reference import SymbolData, resolve_symbol

__all__ = [
    "ir",
    # Errors
    "ALDesignError",
    "ErrorContext",
    "ParseError",
    "SourceReadError",
    "SymbolResolutionError",
    "ObjectNotFoundError",
    "SymbolMetadataError",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSink",
    # Parsing
    "RegionHeader",
    "classify_header",
    "match_regions",
    "build_symbol",
    "ObjectParser",
    "ParseMode",
    "ParseResult",
    "parse_text",
    "parse_file",
    # Discovery
    "CollectorItem",
    "ObjectCollector",
    "ObjectSummary",
    "summarize_source",
    "SymbolData",
    "resolve_symbol",
    # Configuration
    "ParserConfig",
    "ProjectManifest",
    "find_manifest",
    "load_manifest",
]
