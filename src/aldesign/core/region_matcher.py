"""
Region matcher: recovers brace-delimited regions from object source text.

The matcher does not tokenize the language. It locates balanced ``{ ... }``
blocks, takes the last non-empty line in front of each opening brace as
the region header, and recursively partitions each block body into nested
regions. Malformed input never raises: an opening brace that is never
closed is skipped, so a source missing its final ``}`` yields the
innermost regions that do balance.

Entry point:
    ``match_regions(text, config=None, diagnostics=None) -> list[ObjectRegion]``
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from .diagnostics import DiagnosticKind, DiagnosticSink
from .headers import classify_header, is_header_recognized, parse_properties
from .ir import ObjectRegion
from .manifest import ParserConfig

logger = logging.getLogger(__name__)

# Regions whose whole body is a flat list of property lines
FIELD_LIKE_REGIONS = frozenset({"field"})

_BRACES = re.compile(r"[{}]")


@dataclass(frozen=True)
class BalancedMatch:
    """
    First balanced block found in a text.

    Attributes:
        start: Index of the opening brace
        end: Index of the matching closing brace
        pre: Text before the opening brace
        body: Text between the braces
        post: Text after the closing brace
    """

    start: int
    end: int
    pre: str
    body: str
    post: str


def find_balanced(
    text: str,
    on_unclosed: Callable[[list[int]], None] | None = None,
) -> BalancedMatch | None:
    """
    Find the first balanced ``{ ... }`` block in ``text``.

    Nested braces inside the block do not terminate it. Opening braces in
    front of the block that are never closed are skipped; their indexes
    are passed to ``on_unclosed`` in one call. Single pass over ``text``.

    Returns:
        BalancedMatch, or None when no balanced block exists
    """
    openers: list[int] = []
    best: tuple[int, int] | None = None

    for brace in _BRACES.finditer(text):
        pos = brace.start()
        if brace.group() == "{":
            openers.append(pos)
            continue
        if not openers:
            continue  # stray closer
        start = openers.pop()
        if best is None or start < best[0]:
            best = (start, pos)
        if not openers:
            break

    skipped = [p for p in openers if best is None or p < best[0]]
    if skipped and on_unclosed is not None:
        on_unclosed(skipped)
    if best is None:
        return None

    start, end = best
    return BalancedMatch(
        start=start,
        end=end,
        pre=text[:start],
        body=text[start + 1 : end],
        post=text[end + 1 :],
    )


def header_line(pre: str) -> str:
    """Return the last non-empty line of ``pre``, trimmed."""
    for line in reversed(pre.splitlines()):
        if line.strip():
            return line.strip()
    return ""


class RegionMatcher:
    """Partitions object source text into a tree of ObjectRegion nodes."""

    def __init__(
        self,
        config: ParserConfig | None = None,
        diagnostics: DiagnosticSink | None = None,
    ):
        self.config = config or ParserConfig()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()

    def match(self, text: str) -> list[ObjectRegion]:
        """Match all top-level regions of ``text``."""
        return self._match_siblings(text, first_line=1, depth=1)

    def _match_siblings(self, text: str, first_line: int, depth: int) -> list[ObjectRegion]:
        # Siblings are consumed in a loop; only nesting recurses.
        regions: list[ObjectRegion] = []
        remaining = text
        line = first_line

        while True:
            match = find_balanced(remaining, self._unclosed_reporter(remaining, line))
            if match is None:
                break

            header_line_no = line + match.pre.rstrip().count("\n")
            body_line_no = line + match.pre.count("\n")

            region = self._match_region(match, header_line_no, body_line_no, depth)
            if region is not None:
                regions.append(region)

            line = body_line_no + match.body.count("\n")
            remaining = match.post

        return regions

    def _match_region(
        self,
        match: BalancedMatch,
        header_line_no: int,
        body_line_no: int,
        depth: int,
    ) -> ObjectRegion | None:
        source = header_line(match.pre)

        if depth > self.config.max_depth:
            self._report(
                DiagnosticKind.STRUCTURAL,
                f"Region '{source}' exceeds maximum nesting depth {self.config.max_depth}",
                header_line_no,
            )
            return None

        header = classify_header(source)
        if not is_header_recognized(source):
            self._report(
                DiagnosticKind.HEADER,
                f"Unrecognized region header '{source}'",
                header_line_no,
            )

        nested = find_balanced(match.body)
        is_field_like = header.region.lower() in FIELD_LIKE_REGIONS

        if nested is None or is_field_like:
            properties = parse_properties(match.body)
        else:
            properties = parse_properties(nested.pre)

        children: list[ObjectRegion] = []
        if nested is not None:
            children = self._match_siblings(match.body, body_line_no, depth + 1)

        return ObjectRegion(
            region=header.region,
            id=header.id,
            name=header.name,
            args=header.args,
            type=header.type,
            source=source,
            line=header_line_no,
            properties=properties,
            children=children,
        )

    def _unclosed_reporter(self, text: str, first_line: int) -> Callable[[list[int]], None]:
        def report(positions: list[int]) -> None:
            if len(positions) == 1:
                message = "Opening brace is never closed; region skipped"
            else:
                message = f"{len(positions)} opening braces are never closed; regions skipped"
            self._report(
                DiagnosticKind.STRUCTURAL,
                message,
                first_line + text.count("\n", 0, positions[0]),
            )

        return report

    def _report(self, kind: DiagnosticKind, message: str, line: int) -> None:
        logger.debug("%s at line %d: %s", kind.value, line, message)
        self.diagnostics.report(kind, message, line)


def match_regions(
    text: str,
    config: ParserConfig | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> list[ObjectRegion]:
    """
    Partition ``text`` into top-level regions with nested children.

    Args:
        text: Object source text
        config: Parser limits (max nesting depth)
        diagnostics: Optional sink receiving structural and header anomalies

    Returns:
        Top-level regions in source order; empty if no balanced block exists
    """
    return RegionMatcher(config, diagnostics).match(text)
