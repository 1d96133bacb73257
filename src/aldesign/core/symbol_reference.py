"""
Symbol metadata resolver.

Compiled symbol packages (``.app`` archives) carry a ``SymbolReference.json``
describing every object they define. This module loads that metadata and
maps table and page entries onto the same symbol types the source parser
produces, so callers can treat both origins alike.
"""

from __future__ import annotations

import json
import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import ErrorContext, ObjectNotFoundError, SymbolMetadataError, make_read_error
from .ir import (
    ObjectKind,
    ObjectSymbol,
    PageControl,
    PageSymbol,
    ParentSnapshot,
    Property,
    SymbolObject,
    TableField,
    TableKey,
    TableSymbol,
)
from .symbol_builder import resolve_caption, separator_flags

logger = logging.getLogger(__name__)

SYMBOL_REFERENCE_NAME = "SymbolReference.json"

# Collection key of each object kind in SymbolReference.json
COLLECTION_KEYS: dict[ObjectKind, str] = {
    ObjectKind.TABLE: "Tables",
    ObjectKind.PAGE: "Pages",
    ObjectKind.REPORT: "Reports",
    ObjectKind.CODEUNIT: "Codeunits",
    ObjectKind.QUERY: "Queries",
    ObjectKind.XMLPORT: "XmlPorts",
    ObjectKind.PROFILE: "Profiles",
    ObjectKind.PAGE_EXTENSION: "PageExtensions",
    ObjectKind.PAGE_CUSTOMIZATION: "PageCustomizations",
    ObjectKind.TABLE_EXTENSION: "TableExtensions",
    ObjectKind.CONTROL_ADDIN: "ControlAddIns",
    ObjectKind.ENUM: "EnumTypes",
    ObjectKind.DOTNET_PACKAGE: "DotNetPackages",
}

# Numeric ``Kind`` values of page controls and actions
CONTROL_KINDS = (
    "area",
    "group",
    "cuegroup",
    "repeater",
    "fixed",
    "grid",
    "part",
    "systempart",
    "field",
    "label",
    "usercontrol",
    "chartpart",
)
ACTION_KINDS = ("area", "group", "action", "separator")


class SymbolData(BaseModel):
    """
    Pointer to an object inside a symbol package.

    Attributes:
        package: Path of the .app archive or SymbolReference.json file
        type: Object type keyword, lower-cased
        id: Object id
    """

    package: str
    type: str
    id: int

    model_config = ConfigDict(frozen=True)


def load_symbol_reference(path: Path) -> dict[str, Any]:
    """
    Load the SymbolReference.json payload of a package.

    Args:
        path: A .app archive or an extracted SymbolReference.json

    Returns:
        Decoded JSON document

    Raises:
        SourceReadError: If the file cannot be read
        SymbolMetadataError: If the archive or JSON is malformed
    """
    try:
        if path.suffix.lower() == ".app":
            raw = _read_from_archive(path)
        else:
            raw = path.read_bytes()
    except OSError as e:
        raise make_read_error(path, str(e)) from e

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SymbolMetadataError(f"Invalid symbol metadata in {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise _json_error(path, text, e) from e

    if not isinstance(data, dict):
        raise SymbolMetadataError(f"Symbol metadata in {path} is not a JSON object")
    return data


def _json_error(path: Path, text: str, error: json.JSONDecodeError) -> SymbolMetadataError:
    # up to two lines of lead-in before the offending line
    lines = text.splitlines()
    first = max(1, error.lineno - 2)
    context = ErrorContext(
        file=path,
        line=error.lineno,
        column=error.colno,
        snippet="\n".join(lines[first - 1 : error.lineno]),
    )
    return SymbolMetadataError(f"Invalid symbol metadata: {error.msg}", context)


def _read_from_archive(path: Path) -> bytes:
    # .app files prefix the zip payload with their own header; zipfile
    # locates the central directory from the end of the file.
    try:
        with zipfile.ZipFile(path) as archive:
            for name in archive.namelist():
                if name.lower() == SYMBOL_REFERENCE_NAME.lower():
                    return archive.read(name)
    except zipfile.BadZipFile as e:
        raise SymbolMetadataError(f"{path} is not a valid symbol package: {e}") from e
    raise SymbolMetadataError(f"{path} contains no {SYMBOL_REFERENCE_NAME}")


class SymbolPackage:
    """Objects defined by one symbol package."""

    def __init__(self, path: Path, data: dict[str, Any]):
        self.path = path
        self.data = data

    @classmethod
    def load(cls, path: Path) -> SymbolPackage:
        return cls(path, load_symbol_reference(path))

    def entries(self) -> Iterator[tuple[ObjectKind, dict[str, Any]]]:
        """Yield (kind, entry) for every object, including namespaced ones."""
        yield from _walk_namespace(self.data)

    def find(self, object_type: str, object_id: int) -> dict[str, Any]:
        kind = ObjectKind.from_type(object_type)
        for entry_kind, entry in self.entries():
            if entry_kind == kind and isinstance(entry, dict) and entry.get("Id") == object_id:
                return entry
        raise ObjectNotFoundError(object_type, object_id, str(self.path))

    def resolve(self, object_type: str, object_id: int) -> ObjectSymbol:
        kind = ObjectKind.from_type(object_type)
        entry = self.find(object_type, object_id)
        try:
            return symbol_from_entry(kind, entry)
        except (KeyError, TypeError, ValueError) as e:
            raise SymbolMetadataError(
                f"Malformed {object_type} {object_id} in {self.path}: {e}"
            ) from e


def _walk_namespace(node: dict[str, Any]) -> Iterator[tuple[ObjectKind, dict[str, Any]]]:
    for kind, key in COLLECTION_KEYS.items():
        entries = node.get(key)
        if isinstance(entries, list):
            for entry in entries:
                yield kind, entry
    namespaces = node.get("Namespaces")
    if isinstance(namespaces, list):
        for child in namespaces:
            if isinstance(child, dict):
                yield from _walk_namespace(child)


def resolve_symbol(data: SymbolData, packages: dict[str, SymbolPackage] | None = None) -> ObjectSymbol:
    """
    Resolve the object a SymbolData points to.

    Args:
        data: Package path, type and id of the object
        packages: Optional cache of already loaded packages, keyed by path

    Raises:
        ObjectNotFoundError: If the package does not define the object
        SymbolMetadataError: If the package metadata is malformed
    """
    package = packages.get(data.package) if packages is not None else None
    if package is None:
        logger.debug("Loading symbol package %s", data.package)
        package = SymbolPackage.load(Path(data.package))
        if packages is not None:
            packages[data.package] = package
    return package.resolve(data.type, data.id)


# -- Mapping to IR ------------------------------------------------------------


def symbol_from_entry(kind: ObjectKind | None, entry: dict[str, Any]) -> ObjectSymbol:
    """Map a SymbolReference.json object entry to a symbol."""
    base = {
        "id": int(entry["Id"]),
        "name": entry["Name"],
        "type": kind.value if kind else "",
        "properties": _properties(entry),
    }

    if kind == ObjectKind.TABLE:
        return TableSymbol(
            **base,
            fields=[_table_field(f) for f in entry.get("Fields") or []],
            keys=[_table_key(k) for k in entry.get("Keys") or []],
        )
    if kind == ObjectKind.PAGE:
        return PageSymbol(
            **base,
            controls=_page_controls(entry.get("Controls") or [], CONTROL_KINDS, "Controls", None),
            actions=_page_controls(entry.get("Actions") or [], ACTION_KINDS, "Actions", None),
        )
    return SymbolObject(**base)


def _properties(entry: dict[str, Any]) -> list[Property]:
    return [
        Property(name=p["Name"], value=str(p.get("Value", "")))
        for p in entry.get("Properties") or []
    ]


def _table_field(entry: dict[str, Any]) -> TableField:
    properties = _properties(entry)
    type_definition = entry.get("TypeDefinition") or {}
    return TableField(
        control_type="field",
        id=str(entry["Id"]),
        name=entry["Name"],
        data_type=type_definition.get("Name", ""),
        caption=resolve_caption(properties, entry["Name"]),
        properties=properties,
    )


def _table_key(entry: dict[str, Any]) -> TableKey:
    properties = _properties(entry)
    return TableKey(
        control_type="key",
        name=entry["Name"],
        field_names=list(entry.get("FieldNames") or []),
        caption=resolve_caption(properties, entry["Name"]),
        properties=properties,
    )


def _control_type(kind: Any, kinds: tuple[str, ...]) -> str:
    if isinstance(kind, int) and 0 <= kind < len(kinds):
        return kinds[kind]
    if isinstance(kind, str):
        return kind.lower()
    return ""


def _page_controls(
    entries: list[dict[str, Any]],
    kinds: tuple[str, ...],
    nested_key: str,
    parent: ParentSnapshot | None,
) -> list[PageControl]:
    inherited = parent.separator if parent is not None else False
    result = []

    for entry, starts_column in zip(entries, separator_flags(len(entries))):
        name = entry.get("Name", "")
        properties = _properties(entry)
        control = PageControl(
            control_type=_control_type(entry.get("Kind"), kinds),
            name=name,
            caption=resolve_caption(properties, name),
            source_expression=entry.get("SourceExpression", ""),
            properties=properties,
            separator=starts_column or inherited,
            parent=parent,
        )
        nested = _page_controls(entry.get(nested_key) or [], kinds, nested_key, control.snapshot())
        result.append(control.model_copy(update={"controls": nested}))

    return result
