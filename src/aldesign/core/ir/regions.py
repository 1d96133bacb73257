"""
Region types for aldesign IR.

Regions are the transient, untyped parse nodes produced by the region
matcher. They only live for the duration of one parse call and are turned
into typed symbols by the symbol builder.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Property(BaseModel):
    """
    A single ``Name = Value;`` declaration.

    Attributes:
        name: Property name (e.g. "Caption")
        value: Raw value text with the trailing semicolon removed
    """

    name: str
    value: str

    model_config = ConfigDict(frozen=True)


class ObjectRegion(BaseModel):
    """
    A brace-delimited region and its nested regions.

    Attributes:
        region: Region keyword ("table", "fields", "field", "group", ...)
        id: Numeric id for typed object headers, 0 otherwise
        name: Header name with double quotes removed
        args: Verbatim argument text of a ``keyword(args)`` header
        type: Object type keyword for typed headers, "" for sub-regions
        source: Verbatim header line
        line: 1-indexed line of the header in the parsed text
        properties: Property lines declared directly in the region
        children: Nested regions in source order
    """

    region: str
    id: int = 0
    name: str = ""
    args: str = ""
    type: str = ""
    source: str = ""
    line: int = 0
    properties: list[Property] = Field(default_factory=list)
    children: list[ObjectRegion] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get_property(self, name: str) -> Property | None:
        """Get the first property with the given name (case-sensitive)."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None
