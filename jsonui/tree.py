"""In-memory component tree for one parsed layout document."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import LayoutParseError
from .schema import DataSchemaEntry, entry_from_declaration

logger = logging.getLogger(__name__)

# Keys with structural meaning; everything else on a node is an attribute.
STRUCTURAL_KEYS = frozenset({"type", "style", "child", "children", "include"})


@dataclass(frozen=True)
class ComponentNode:
    """One widget node.

    ``attributes`` holds every non-structural key from the document.  A
    marker node (``{"data": [...]}`` with no other key) only contributes
    ``declarations`` and is never rendered.  ``location`` is a JSON-path
    style pointer such as ``$.child[0]`` used in diagnostics.
    """

    type: Optional[str] = None
    attributes: Mapping[str, Any] = field(default_factory=dict)
    style: Optional[str] = None
    children: Tuple["ComponentNode", ...] = ()
    declarations: Tuple[DataSchemaEntry, ...] = ()
    include: Optional[str] = None
    is_marker: bool = False
    location: str = "$"

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attributes

    @property
    def is_include(self) -> bool:
        return self.include is not None

    def with_changes(self, **changes: Any) -> "ComponentNode":
        return replace(self, **changes)

    def walk(self) -> Iterator["ComponentNode"]:
        """Pre-order traversal over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()


def is_marker_document(document: Any) -> bool:
    return (
        isinstance(document, Mapping)
        and list(document.keys()) == ["data"]
        and isinstance(document["data"], list)
    )


def _child_documents(document: Mapping[str, Any]) -> List[Any]:
    raw = document.get("children", document.get("child"))
    if raw is None:
        return []
    if isinstance(raw, Mapping):
        return [raw]
    if isinstance(raw, list):
        return list(raw)
    logger.warning("Ignoring non-container child value of type %s", type(raw).__name__)
    return []


def _declarations(items: Any) -> Tuple[DataSchemaEntry, ...]:
    entries = []
    for item in items or []:
        if isinstance(item, Mapping):
            entry = entry_from_declaration(item)
            if entry is not None:
                entries.append(entry)
    return tuple(entries)


def parse_node(document: Mapping[str, Any], location: str = "$") -> ComponentNode:
    """Build a node (and its subtree) from a decoded JSON object."""
    if is_marker_document(document):
        return ComponentNode(
            declarations=_declarations(document["data"]),
            is_marker=True,
            location=location,
        )

    attributes: Dict[str, Any] = {}
    declarations: Tuple[DataSchemaEntry, ...] = ()
    for key, value in document.items():
        if key in STRUCTURAL_KEYS:
            continue
        if key == "data" and isinstance(value, list):
            declarations = _declarations(value)
            continue
        attributes[key] = value

    child_key = "children" if "children" in document else "child"
    children = []
    for index, child in enumerate(_child_documents(document)):
        if not isinstance(child, Mapping):
            logger.warning("Skipping non-object child at %s.%s[%d]", location, child_key, index)
            continue
        children.append(parse_node(child, f"{location}.{child_key}[{index}]"))

    style = document.get("style")
    include = document.get("include")
    return ComponentNode(
        type=document.get("type"),
        attributes=attributes,
        style=style if isinstance(style, str) else None,
        children=tuple(children),
        declarations=declarations,
        include=include if isinstance(include, str) else None,
        location=location,
    )


def parse_document(source: str, *, path: Optional[str] = None) -> ComponentNode:
    """Parse layout JSON text; invalid JSON or a non-object root is fatal for the document."""
    try:
        document = json.loads(source)
    except json.JSONDecodeError as exc:
        raise LayoutParseError(
            f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            path=path,
            hint="Fix the JSON syntax of the layout document",
        ) from exc
    if not isinstance(document, Mapping):
        raise LayoutParseError(
            "Layout root must be a JSON object",
            path=path,
            pointer="$",
        )
    return parse_node(document)


def collect_declarations(root: ComponentNode) -> List[DataSchemaEntry]:
    """All schema entries in document order, first declaration of a name wins."""
    seen = set()
    entries = []
    for node in root.walk():
        for entry in node.declarations:
            if entry.name in seen:
                continue
            seen.add(entry.name)
            entries.append(entry)
    return entries
