"""
Symbol types for aldesign IR.

This module contains the typed output of the parser: object symbols
(tables, pages and the bare base object for every other kind) and the
controls nested inside them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .regions import Property


class ObjectKind(StrEnum):
    """Object types of the definition language."""

    TABLE = "table"
    PAGE = "page"
    REPORT = "report"
    CODEUNIT = "codeunit"
    QUERY = "query"
    XMLPORT = "xmlport"
    PROFILE = "profile"
    PAGE_EXTENSION = "pageextension"
    PAGE_CUSTOMIZATION = "pagecustomization"
    TABLE_EXTENSION = "tableextension"
    CONTROL_ADDIN = "controladdin"
    ENUM = "enum"
    DOTNET_PACKAGE = "dotnetpackage"

    @classmethod
    def from_type(cls, value: str) -> ObjectKind | None:
        """Map a type keyword to a kind, case-insensitively."""
        try:
            return cls(value.lower())
        except ValueError:
            return None


class ParentSnapshot(BaseModel):
    """
    Value copy of the control enclosing a page control.

    Carries only what children need to know about their parent, so a
    control never holds a reference back into the tree.
    """

    control_type: str
    name: str
    caption: str = ""
    separator: bool = False

    model_config = ConfigDict(frozen=True)


class Control(BaseModel):
    """
    Structural node derived from a region (page control, table field, key).

    Attributes:
        control_type: Region keyword ("field", "part", "group", "key", ...)
        name: Control name
        caption: Display caption (Caption property or name)
        source_expression: Source expression of page field/part controls
        source_anchor: Verbatim header line the control was parsed from
        properties: Property lines of the region
    """

    control_type: str
    name: str = ""
    caption: str = ""
    source_expression: str = ""
    source_anchor: str = ""
    properties: list[Property] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_property(self, name: str) -> Property | None:
        """Get the first property with the given name (case-sensitive)."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


class TableField(Control):
    """
    Field declared in a table's ``fields`` region.

    Attributes:
        id: Field number as written in the header (e.g. "1")
        data_type: Declared data type (e.g. "Code[20]"), "" if absent
    """

    id: str = ""
    data_type: str = ""


class TableKey(Control):
    """
    Key declared in a table's ``keys`` region.

    Attributes:
        field_names: Names of the fields making up the key, in order
    """

    field_names: list[str] = Field(default_factory=list)


class PageControl(Control):
    """
    Control in a page's layout or actions tree.

    Attributes:
        separator: Marks the start of the second visual column
        parent: Snapshot of the enclosing control, None at the root
        controls: Nested controls in source order
    """

    separator: bool = False
    parent: ParentSnapshot | None = None
    controls: list[PageControl] = Field(default_factory=list)

    def snapshot(self) -> ParentSnapshot:
        """Value copy of this control for use as a child's parent."""
        return ParentSnapshot(
            control_type=self.control_type,
            name=self.name,
            caption=self.caption,
            separator=self.separator,
        )

    def walk(self):
        """Yield this control and all nested controls depth-first."""
        yield self
        for child in self.controls:
            yield from child.walk()


class SymbolObject(BaseModel):
    """
    Base object symbol.

    Returned as-is for object types without a typed variant. An empty
    ``type`` means the root header could not be recognised.
    """

    id: int = 0
    name: str = ""
    type: str = ""
    properties: list[Property] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_parsed(self) -> bool:
        """Check if the object header was recognised."""
        return self.type != ""

    def get_property(self, name: str) -> Property | None:
        """Get the first property with the given name (case-sensitive)."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


class TableSymbol(SymbolObject):
    """Table object with its fields and keys."""

    fields: list[TableField] = Field(default_factory=list)
    keys: list[TableKey] = Field(default_factory=list)
    field_groups: list[Control] = Field(default_factory=list)


class PageSymbol(SymbolObject):
    """Page object with its layout controls and actions."""

    controls: list[PageControl] = Field(default_factory=list)
    actions: list[PageControl] = Field(default_factory=list)

    def iter_controls(self):
        """Yield every layout control depth-first."""
        for control in self.controls:
            yield from control.walk()


ObjectSymbol = TableSymbol | PageSymbol | SymbolObject
