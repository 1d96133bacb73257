"""
Quick object summary from source text.

Reads only the object declaration, the ``PageType`` property and the
``field(...)`` headers, without building a region tree. Used to list the
objects of a project cheaply.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .ir import ObjectKind

_DECLARATION = re.compile(r"^\s*([A-Za-z]+)\s+([0-9]+)\s+(.*)$", re.MULTILINE)
_FIELD_HEADER = re.compile(r"^\s*field\s*\((.*)\)", re.MULTILINE)
_PAGE_TYPE = re.compile(r"^\s*PageType\s*=\s*(.*?);", re.MULTILINE)

_FIELD_LISTING_KINDS = frozenset({ObjectKind.TABLE, ObjectKind.PAGE})


class ObjectSummary(BaseModel):
    """
    Header-level description of an object source file.

    Attributes:
        type: Object type keyword, lower-cased
        id: Object id
        name: Object name without quotes
        sub_type: PageType of pages ("Card", "List", ...), "" otherwise
        fields: Field names declared by tables and pages, in source order
        path: Source file, when summarised from disk
    """

    type: str
    id: int
    name: str
    sub_type: str = ""
    fields: list[str] = Field(default_factory=list)
    path: str | None = None

    model_config = ConfigDict(frozen=True)


def summarize_source(text: str, path: Path | None = None) -> ObjectSummary | None:
    """
    Summarise the first object declared in ``text``.

    Returns:
        ObjectSummary, or None if the text declares no object
    """
    match = _DECLARATION.search(text)
    if match is None:
        return None

    object_type = match.group(1).lower()
    summary: dict = {
        "type": object_type,
        "id": int(match.group(2)),
        "name": match.group(3).split("{")[0].replace('"', "").strip(),
        "path": str(path) if path else None,
    }

    if ObjectKind.from_type(object_type) in _FIELD_LISTING_KINDS:
        page_type = _PAGE_TYPE.search(text)
        summary["sub_type"] = page_type.group(1).strip() if page_type else ""
        summary["fields"] = [_field_name(m.group(1)) for m in _FIELD_HEADER.finditer(text)]

    return ObjectSummary(**summary)


def _field_name(args: str) -> str:
    # table: field(1; "No."; Code[20])   page: field("No."; Rec."No.")
    parts = [p.replace('"', "").strip() for p in args.split(";")]
    if len(parts) > 1 and parts[0].isdigit():
        return parts[1]
    return parts[0]
