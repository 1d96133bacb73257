"""
Header classification and property-line utilities.

A region header is the single line in front of an opening brace. The
definition language uses two header vocabularies:

    table 50100 "Customer Ledger"      typed object declaration
    group(General)                     keyword with arguments
    field(1; "No."; Code[20])

Bare keywords such as ``fields`` or ``actions`` match neither form and are
classified by the fallback rule, which keeps the trimmed line as the
region keyword.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from .ir import Property

# ``<keyword> <integer> <rest>``
_TYPED_HEADER = re.compile(r"^([A-Za-z]+)\s+([0-9]+)\s+(.*)$")
# ``<keyword>(<args>)``; greedy so the last ``)`` on the line closes the args
_ARGS_HEADER = re.compile(r"^([A-Za-z]+)\s*\((.*)\)")
# property names are plain identifiers; ``Rec."No." = x`` is code
_PROPERTY_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# leading quoted literal of a property value, '' escapes a quote
_QUOTED_LITERAL = re.compile(r"^'((?:[^']|'')*)'")

# Bare region keywords of the language that legitimately have no arguments
KNOWN_BARE_REGIONS = frozenset(
    {
        "fields",
        "keys",
        "fieldgroups",
        "layout",
        "actions",
        "views",
        "elements",
        "dataset",
        "requestpage",
        "schema",
        "labels",
        "rendering",
    }
)


class RegionHeader(NamedTuple):
    """Result of classifying a header line."""

    region: str
    id: int
    name: str
    type: str
    args: str = ""


def classify_header(line: str) -> RegionHeader:
    """
    Classify a region header line.

    Args:
        line: The line immediately preceding an opening brace

    Returns:
        RegionHeader; unrecognised lines keep the trimmed text as region
    """
    line = line.strip()

    match = _TYPED_HEADER.match(line)
    if match:
        keyword = match.group(1).lower()
        return RegionHeader(
            region=keyword,
            id=int(match.group(2)),
            name=match.group(3).replace('"', "").strip(),
            type=keyword,
        )

    match = _ARGS_HEADER.match(line)
    if match:
        return RegionHeader(
            region=match.group(1),
            id=0,
            name=match.group(2).replace('"', "").strip(),
            type="",
            args=match.group(2).strip(),
        )

    return RegionHeader(region=line, id=0, name="", type="")


def is_header_recognized(line: str) -> bool:
    """Check if a header matches either header form or is a known bare keyword."""
    line = line.strip()
    if _TYPED_HEADER.match(line) or _ARGS_HEADER.match(line):
        return True
    return line.lower() in KNOWN_BARE_REGIONS


def parse_property_line(line: str) -> Property | None:
    """
    Parse a ``Name = Value;`` line.

    Returns:
        Property, or None for comments, blank lines, code statements and
        lines without an assignment
    """
    line = line.strip()
    if not line or line.startswith("//"):
        return None

    name, sep, value = line.partition("=")
    if not sep or name.endswith(":"):
        return None
    name = name.strip()
    if not _PROPERTY_NAME.match(name):
        return None

    value = value.strip()
    if value.endswith(";"):
        value = value[:-1].rstrip()
    return Property(name=name, value=value)


def parse_properties(text: str) -> list[Property]:
    """Parse every property line of a block of text, in order."""
    props = []
    for line in text.splitlines():
        prop = parse_property_line(line)
        if prop is not None:
            props.append(prop)
    return props


def upper_first(value: str) -> str:
    """Capitalise the first character, leaving the rest untouched."""
    if not value:
        return value
    return value[0].upper() + value[1:]


def strip_quotes(value: str) -> str:
    """Remove double quotes and apostrophes and trim."""
    return value.replace('"', "").replace("'", "").strip()


def caption_value(value: str) -> str:
    """
    Extract the display text of a Caption property value.

    ``'Customer No.', Comment = 'Shown on cards'`` gives ``Customer No.``.
    Values without a leading literal have their quotes stripped.
    """
    value = value.strip()
    match = _QUOTED_LITERAL.match(value)
    if match:
        return match.group(1).replace("''", "'").strip()
    return strip_quotes(value)
