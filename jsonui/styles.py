"""Named style catalog and style inheritance resolution."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import Diagnostic, StyleResolutionError
from .tree import ComponentNode, parse_node

logger = logging.getLogger(__name__)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` onto ``base`` without mutating either.

    Nested mappings merge key by key; lists and scalars on the override
    side replace the base value wholesale.
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class StyleCatalog:
    """Read-only set of named style definitions.

    Malformed style files are kept as per-name errors so a lookup reports
    why the style is unusable instead of treating it as missing.
    """

    def __init__(
        self,
        definitions: Optional[Mapping[str, Mapping[str, Any]]] = None,
        errors: Optional[Mapping[str, str]] = None,
        source: Optional[Path] = None,
    ) -> None:
        self._definitions: Dict[str, Mapping[str, Any]] = dict(definitions or {})
        self._errors: Dict[str, str] = dict(errors or {})
        self.source = source

    @classmethod
    def from_directory(cls, directory: Path) -> "StyleCatalog":
        """Load every ``*.json`` file below ``directory``, keyed by its relative stem."""
        definitions: Dict[str, Mapping[str, Any]] = {}
        errors: Dict[str, str] = {}
        if not directory.is_dir():
            logger.debug("Style directory %s does not exist; catalog is empty", directory)
            return cls(source=directory)
        for path in sorted(directory.rglob("*.json")):
            name = path.relative_to(directory).with_suffix("").as_posix()
            try:
                document = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
                errors[name] = f"{path}: {exc}"
                continue
            if not isinstance(document, Mapping):
                errors[name] = f"{path}: style root must be a JSON object"
                continue
            definitions[name] = document
        logger.debug("Loaded %d styles from %s", len(definitions), directory)
        return cls(definitions, errors, source=directory)

    @classmethod
    def from_search_paths(cls, candidates: Sequence[Path]) -> "StyleCatalog":
        for candidate in candidates:
            if candidate.is_dir():
                return cls.from_directory(candidate)
        return cls()

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def names(self) -> List[str]:
        return sorted(self._definitions)

    def get(self, name: str) -> Mapping[str, Any]:
        if name in self._errors:
            raise StyleResolutionError(
                f"Style '{name}' is malformed: {self._errors[name]}",
                code="style-malformed",
            )
        try:
            return self._definitions[name]
        except KeyError:
            raise StyleResolutionError(
                f"Style '{name}' not found",
                code="style-not-found",
                hint=f"Add {name}.json to the styles directory",
            ) from None


def _record(diagnostics: Optional[List[Diagnostic]], code: str, message: str, location: str) -> None:
    logger.warning("%s (%s)", message, location)
    if diagnostics is not None:
        diagnostics.append(Diagnostic(code=code, message=message, location=location))


def apply_style(
    node: ComponentNode,
    catalog: StyleCatalog,
    diagnostics: Optional[List[Diagnostic]] = None,
    chain: Tuple[str, ...] = (),
) -> ComponentNode:
    """Merge the node's named style into it; the node's own values win."""
    name = node.style
    if name is None:
        return node
    if name in chain:
        _record(
            diagnostics,
            "style-cycle",
            f"Style cycle detected: {' -> '.join(chain + (name,))}",
            node.location,
        )
        return node.with_changes(style=None)
    try:
        definition = catalog.get(name)
    except StyleResolutionError as exc:
        _record(diagnostics, exc.code or "style-resolution", exc.message, node.location)
        return node.with_changes(style=None)

    base = parse_node(definition, location=f"{node.location}@{name}")
    base = apply_style(base, catalog, diagnostics, chain + (name,))
    return node.with_changes(
        type=node.type or base.type,
        attributes=deep_merge(base.attributes, node.attributes),
        style=None,
        children=node.children or base.children,
        declarations=node.declarations or base.declarations,
        include=node.include if node.include is not None else base.include,
    )


def resolve_styles(
    node: ComponentNode,
    catalog: StyleCatalog,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> ComponentNode:
    """Resolve style references depth-first, pre-order, returning a new tree."""
    resolved = apply_style(node, catalog, diagnostics)
    if not resolved.children:
        return resolved
    children = tuple(resolve_styles(child, catalog, diagnostics) for child in resolved.children)
    return resolved.with_changes(children=children)


def apply_type_defaults(
    node: ComponentNode,
    defaults: Mapping[str, Mapping[str, Any]],
) -> ComponentNode:
    """Layer per-type default attributes beneath the node's resolved attributes."""
    if not defaults:
        return node
    attributes = node.attributes
    type_defaults = defaults.get(node.type or "")
    if isinstance(type_defaults, Mapping) and type_defaults:
        attributes = deep_merge(type_defaults, attributes)
    children = tuple(apply_type_defaults(child, defaults) for child in node.children)
    return node.with_changes(attributes=attributes, children=children)

