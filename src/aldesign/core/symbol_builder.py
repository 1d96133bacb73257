"""
Symbol builder: turns a matched region tree into a typed object symbol.

The root region's declared type selects the symbol variant:

- ``table``: the ``fields`` and ``keys`` regions become TableField and
  TableKey lists.
- ``page``: the ``actions`` region becomes the action tree, every other
  region (normally ``layout``) contributes to the control tree. Page
  controls are laid out in two visual columns; see ``separator_flags``.
- anything else: a bare SymbolObject.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from .diagnostics import DiagnosticKind, DiagnosticSink
from .headers import caption_value, upper_first
from .ir import (
    ObjectKind,
    ObjectRegion,
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

logger = logging.getLogger(__name__)

PAGE_SPLIT_CONTROLS = frozenset({"field", "part"})


def separator_flags(count: int) -> list[bool]:
    """
    Column-break flags for ``count`` sibling page controls.

    With ``mid = ceil(count / 2)``, the 1-based sibling ``i`` starts or
    continues the second column when ``i >= mid`` for an even count and
    ``i >= mid + 1`` for an odd count. Siblings without the flag inherit
    their parent's.
    """
    mid = math.ceil(count / 2)
    if mid == 0:
        mid = count

    flags = []
    for i in range(1, count + 1):
        if count % 2 == 0:
            flags.append(i >= mid)
        else:
            flags.append(i >= mid + 1)
    return flags


def layout_columns(controls: list[PageControl]) -> tuple[list[PageControl], list[PageControl]]:
    """Split sibling controls into the left and right column at the first separator."""
    for i, control in enumerate(controls):
        if control.separator:
            return controls[:i], controls[i:]
    return list(controls), []


def split_name(name: str) -> tuple[str, str]:
    """Split a header name on its first semicolon into trimmed halves."""
    left, _, right = name.partition(";")
    return left.strip(), right.strip()


def resolve_caption(properties: list[Property], name: str) -> str:
    """Caption property text, or the name without double quotes."""
    for prop in properties:
        if prop.name == "Caption":
            return caption_value(prop.value)
    return name.replace('"', "").strip()


class SymbolBuilder:
    """Builds one typed object symbol from a root region."""

    def __init__(self, diagnostics: DiagnosticSink | None = None):
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticSink()
        self._builders: dict[ObjectKind, Callable[[ObjectRegion], ObjectSymbol]] = {
            ObjectKind.TABLE: self._build_table,
            ObjectKind.PAGE: self._build_page,
        }

    def build(self, region: ObjectRegion) -> ObjectSymbol:
        kind = ObjectKind.from_type(region.type)
        builder = self._builders.get(kind) if kind else None
        if builder is not None:
            return builder(region)

        if region.type:
            message = f"Object type '{region.type}' has no typed symbol; returning base object"
        else:
            message = f"Root region '{region.source}' is not an object declaration"
        logger.debug(message)
        self.diagnostics.report(DiagnosticKind.UNSUPPORTED_TYPE, message, region.line or None)
        return SymbolObject(**self._base_fields(region))

    # -- Tables ----------------------------------------------------------

    def _build_table(self, region: ObjectRegion) -> TableSymbol:
        fields: list[TableField] = []
        keys: list[TableKey] = []

        for child in region.children:
            if child.region.lower() == "fields":
                fields.extend(self._table_field(c) for c in child.children)
            elif child.region.lower() == "keys":
                keys.extend(self._table_key(c) for c in child.children)
            else:
                logger.debug("Ignoring table region '%s'", child.region)

        return TableSymbol(**self._base_fields(region), fields=fields, keys=keys)

    def _table_field(self, region: ObjectRegion) -> TableField:
        field_id = ""
        data_type = ""
        if region.region.lower() == "field":
            parts = [p.replace('"', "").strip() for p in region.name.split(";")]
            field_id = parts[0]
            name = parts[1] if len(parts) > 1 else ""
            data_type = parts[2] if len(parts) > 2 else ""
        else:
            name = upper_first(region.name)

        return TableField(
            control_type=region.region,
            id=field_id,
            name=name,
            data_type=data_type,
            caption=resolve_caption(region.properties, name),
            source_anchor=region.source,
            properties=region.properties,
        )

    def _table_key(self, region: ObjectRegion) -> TableKey:
        field_names: list[str] = []
        if region.region.lower() == "key":
            name, rest = split_name(region.name.replace('"', ""))
            field_names = [f.strip() for f in rest.split(",") if f.strip()]
        else:
            name = upper_first(region.name)

        return TableKey(
            control_type=region.region,
            name=name,
            field_names=field_names,
            caption=resolve_caption(region.properties, name),
            source_anchor=region.source,
            properties=region.properties,
        )

    # -- Pages -----------------------------------------------------------

    def _build_page(self, region: ObjectRegion) -> PageSymbol:
        controls: list[PageControl] = []
        actions: list[PageControl] = []

        for child in region.children:
            target = actions if child.region.lower() == "actions" else controls
            target.extend(self._page_controls(child.children, parent=None))

        return PageSymbol(**self._base_fields(region), controls=controls, actions=actions)

    def _page_controls(
        self,
        regions: list[ObjectRegion],
        parent: ParentSnapshot | None,
    ) -> list[PageControl]:
        inherited = parent.separator if parent is not None else False
        result = []

        for child, starts_column in zip(regions, separator_flags(len(regions))):
            if child.region.lower() in PAGE_SPLIT_CONTROLS:
                # raw args keep the quotes of the expression
                name = split_name(child.name)[0]
                source_expression = split_name(child.args or child.name)[1]
            else:
                name, source_expression = upper_first(child.name), ""

            control = PageControl(
                control_type=child.region,
                name=name,
                caption=resolve_caption(child.properties, name),
                source_expression=source_expression,
                source_anchor=child.source,
                properties=child.properties,
                separator=starts_column or inherited,
                parent=parent,
            )
            nested = self._page_controls(child.children, parent=control.snapshot())
            result.append(control.model_copy(update={"controls": nested}))

        return result

    @staticmethod
    def _base_fields(region: ObjectRegion) -> dict:
        return {
            "id": region.id,
            "name": region.name,
            "type": region.type,
            "properties": region.properties,
        }


def build_symbol(
    region: ObjectRegion,
    diagnostics: DiagnosticSink | None = None,
) -> ObjectSymbol:
    """
    Build the typed symbol for a root region.

    Args:
        region: Root region as produced by the region matcher
        diagnostics: Optional sink receiving unsupported-type anomalies

    Returns:
        TableSymbol, PageSymbol, or a bare SymbolObject for other types
    """
    return SymbolBuilder(diagnostics).build(region)
