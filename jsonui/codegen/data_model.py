"""Type-declaration module: ``<Name>Data`` interface and its factory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..naming import change_handler_name
from ..schema import DataSchemaEntry, format_default
from ..tree import ComponentNode
from .emitters.controls import two_way_property
from .templates import render_template


@dataclass(frozen=True)
class DataField:
    name: str
    ts_type: str
    optional: bool = True
    default: str = "undefined"


@dataclass(frozen=True)
class ChangeHandler:
    """Default change handler for a two-way bound property."""
    name: str
    prop: str
    ts_type: str


def collect_two_way_bindings(root: ComponentNode) -> List[ChangeHandler]:
    """Two-way bound inputs without an explicit handler, in document order."""
    handlers: List[ChangeHandler] = []
    seen = set()
    for node in root.walk():
        if node.is_marker:
            continue
        two_way = two_way_property(node)
        if two_way is None:
            continue
        prop, field = two_way
        if prop in seen:
            continue
        seen.add(prop)
        handlers.append(ChangeHandler(name=change_handler_name(prop), prop=prop, ts_type=field.ts_type))
    return handlers


def schema_field(entry: DataSchemaEntry) -> DataField:
    # View-model handles are runtime objects with no generated type.
    ts_type = "any" if entry.is_view_model_handle else entry.ts_type
    return DataField(
        name=entry.name,
        ts_type=ts_type,
        optional=entry.nullable,
        default=format_default(entry),
    )


def data_fields(entries: Sequence[DataSchemaEntry], handlers: Sequence[ChangeHandler]) -> List[DataField]:
    fields = [schema_field(entry) for entry in entries]
    declared = {entry.name for entry in entries}
    for handler in handlers:
        if handler.name in declared:
            continue
        fields.append(DataField(
            name=handler.name,
            ts_type=f"((value: {handler.ts_type}) => void) | undefined",
        ))
    return fields


def render_data_model(
    name: str,
    entries: Sequence[DataSchemaEntry],
    handlers: Sequence[ChangeHandler],
    *,
    typescript: bool = True,
    source: Optional[str] = None,
) -> str:
    return render_template(
        "data_model",
        name=name,
        fields=data_fields(entries, handlers),
        typescript=typescript,
        source=source or f"{name}.json",
    )
