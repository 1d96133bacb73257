"""
Object parser facade.

Wires the region matcher and the symbol builder together and provides the
three ways of obtaining a symbol: from a source file, from source text, or
from compiled symbol metadata found by the object collector.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .collector import CollectorItem, ObjectCollector
from .diagnostics import Diagnostic, DiagnosticSink
from .errors import ParseError, make_read_error
from .ir import ObjectSymbol, SymbolObject
from .manifest import ParserConfig
from .region_matcher import RegionMatcher
from .symbol_builder import SymbolBuilder

logger = logging.getLogger(__name__)


class ParseMode(StrEnum):
    """Where the object definition comes from."""

    FILE = "file"
    TEXT = "text"
    SYMBOL = "symbol"


class ParseResult(BaseModel):
    """
    Symbol produced by one parse call plus the anomalies it absorbed.

    Attributes:
        symbol: Typed object symbol; ``symbol.type == ""`` if no object
            declaration was recognised
        diagnostics: Structural, header and unsupported-type anomalies
    """

    symbol: ObjectSymbol
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class ObjectParser:
    """Parses object definitions into typed symbols."""

    def __init__(
        self,
        config: ParserConfig | None = None,
        collector: ObjectCollector | None = None,
    ):
        self.config = config or ParserConfig()
        self.collector = collector

    def parse(self, source: Any, mode: ParseMode) -> ParseResult | None:
        """
        Parse ``source`` according to ``mode``.

        Args:
            source: Path for FILE, text for TEXT, CollectorItem for SYMBOL
            mode: Origin of the definition

        Returns:
            ParseResult; None in SYMBOL mode when the object is unknown
        """
        if mode == ParseMode.FILE:
            return self.parse_file(Path(source))
        if mode == ParseMode.TEXT:
            return self.parse_text(source)
        if mode == ParseMode.SYMBOL:
            symbol = self.parse_symbol(source)
            return ParseResult(symbol=symbol) if symbol is not None else None
        raise ParseError(f"Unknown parse mode: {mode}")

    def parse_file(self, path: Path) -> ParseResult:
        """
        Read and parse an object source file.

        Raises:
            SourceReadError: If the file cannot be read or decoded
        """
        try:
            text = path.read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise make_read_error(path, str(e)) from e

        result = self.parse_text(text)
        for diagnostic in result.diagnostics:
            logger.warning("%s: %s", path, diagnostic)
        return result

    def parse_text(self, text: str) -> ParseResult:
        """Parse the first object declared in ``text``."""
        sink = DiagnosticSink()
        regions = RegionMatcher(self.config, sink).match(text)

        if not regions:
            logger.debug("No balanced region found; returning empty object")
            return ParseResult(symbol=SymbolObject(), diagnostics=sink.items)

        if len(regions) > 1:
            logger.debug("Ignoring %d trailing top-level regions", len(regions) - 1)

        symbol = SymbolBuilder(sink).build(regions[0])
        return ParseResult(symbol=symbol, diagnostics=sink.items)

    def parse_symbol(self, item: CollectorItem) -> ObjectSymbol | None:
        """
        Resolve an object from compiled symbol metadata.

        The collector is asked to rediscover the object by id and type, so
        a stale item still resolves against the current packages.

        Raises:
            ParseError: If the parser has no collector
            SymbolResolutionError: If the metadata is missing or malformed
        """
        if self.collector is None:
            raise ParseError("Symbol parsing requires an object collector")

        for found in self.collector.discover():
            if found.matches(item.type, item.id) and found.symbol_data is not None:
                return self.collector.get_symbol_reference(found.symbol_data)

        logger.debug("No symbol metadata for %s %s", item.type, item.id)
        return None


def parse_text(text: str, config: ParserConfig | None = None) -> ParseResult:
    """Parse object source text into a typed symbol."""
    return ObjectParser(config).parse_text(text)


def parse_file(path: Path | str, config: ParserConfig | None = None) -> ParseResult:
    """Read and parse an object source file into a typed symbol."""
    return ObjectParser(config).parse_file(Path(path))
