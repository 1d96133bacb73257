"""
aldesign Intermediate Representation (IR) types.

Regions are the transient parse nodes, symbols the typed parser output.
All types are re-exported from this package.
"""

from .regions import (
    ObjectRegion,
    Property,
)
from .symbols import (
    Control,
    ObjectKind,
    ObjectSymbol,
    PageControl,
    PageSymbol,
    ParentSnapshot,
    SymbolObject,
    TableField,
    TableKey,
    TableSymbol,
)

__all__ = [
    # Regions
    "ObjectRegion",
    "Property",
    # Symbols
    "ObjectKind",
    "ObjectSymbol",
    "SymbolObject",
    "TableSymbol",
    "PageSymbol",
    # Controls
    "Control",
    "TableField",
    "TableKey",
    "PageControl",
    "ParentSnapshot",
]
