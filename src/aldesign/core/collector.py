"""
Object discovery over a project's sources and symbol packages.

Source files are summarised by their declaration line; symbol packages
contribute every object they define together with a SymbolData pointer
that ``resolve_symbol`` can turn into a full symbol.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from .errors import ALDesignError
from .fileset import discover_source_files, discover_symbol_packages
from .ir import ObjectKind, ObjectSymbol
from .manifest import ProjectManifest, default_manifest
from .summary import summarize_source
from .symbol_reference import SymbolData, SymbolPackage, resolve_symbol

logger = logging.getLogger(__name__)


class CollectorItem(BaseModel):
    """
    A discovered object.

    Attributes:
        id: Object id
        type: Object type keyword, lower-cased
        name: Object name
        path: Source file for objects discovered in sources
        sub_type: PageType of pages found in sources
        symbol_data: Package pointer for objects discovered in symbols
    """

    id: int
    type: str
    name: str
    path: str | None = None
    sub_type: str = ""
    symbol_data: SymbolData | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def from_source(self) -> bool:
        return self.path is not None

    def matches(self, object_type: str, object_id: int) -> bool:
        return self.id == object_id and self.type == object_type.lower()


class ObjectCollector:
    """Discovers objects of a project and resolves their symbols."""

    def __init__(self, root: Path, manifest: ProjectManifest | None = None):
        self.root = root
        self.manifest = manifest or default_manifest(root)
        self._packages: dict[str, SymbolPackage] = {}

    def discover(self) -> list[CollectorItem]:
        """
        List every object found in source files and symbol packages.

        Unreadable or malformed files are skipped with a warning so one
        broken package does not hide the rest of the project.
        """
        items = self._discover_sources() + self._discover_symbols()
        logger.debug("Discovered %d objects under %s", len(items), self.root)
        return items

    def find(self, object_type: str, object_id: int) -> CollectorItem | None:
        for item in self.discover():
            if item.matches(object_type, object_id):
                return item
        return None

    def get_symbol_reference(self, data: SymbolData) -> ObjectSymbol:
        """Resolve an object from its symbol package (packages are cached)."""
        return resolve_symbol(data, self._packages)

    def _discover_sources(self) -> list[CollectorItem]:
        encoding = self.manifest.parser.encoding
        items = []
        for path in discover_source_files(self.root, self.manifest):
            try:
                text = path.read_text(encoding=encoding)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable source %s: %s", path, e)
                continue

            summary = summarize_source(text, path)
            if summary is None:
                logger.debug("No object declaration in %s", path)
                continue

            items.append(
                CollectorItem(
                    id=summary.id,
                    type=summary.type,
                    name=summary.name,
                    path=str(path),
                    sub_type=summary.sub_type,
                )
            )
        return items

    def _discover_symbols(self) -> list[CollectorItem]:
        items = []
        for path in discover_symbol_packages(self.root, self.manifest):
            try:
                package = self._packages.get(str(path)) or SymbolPackage.load(path)
            except ALDesignError as e:
                logger.warning("Skipping symbol package %s: %s", path, e)
                continue
            self._packages[str(path)] = package

            for kind, entry in package.entries():
                item = self._symbol_item(path, kind, entry)
                if item is not None:
                    items.append(item)
        return items

    def _symbol_item(self, path: Path, kind: ObjectKind, entry: Any) -> CollectorItem | None:
        if not isinstance(entry, dict) or "Id" not in entry or "Name" not in entry:
            logger.warning("Skipping %s entry without Id and Name in %s", kind.value, path)
            return None
        try:
            object_id = int(entry["Id"])
            return CollectorItem(
                id=object_id,
                type=kind.value,
                name=entry["Name"],
                symbol_data=SymbolData(package=str(path), type=kind.value, id=object_id),
            )
        except (TypeError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.warning(
                "Skipping malformed %s entry %r in %s: %s", kind.value, entry["Id"], path, e
            )
            return None
