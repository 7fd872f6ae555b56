"""Emission context passed between widget emitters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Optional

from ..errors import Diagnostic
from ..tree import ComponentNode
from .tailwind import Orientation

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from .registry import EmitterRegistry

logger = logging.getLogger(__name__)


@dataclass
class ModuleImport:
    default: Optional[str] = None
    names: List[str] = field(default_factory=list)

    def clause(self) -> str:
        """``Link``, ``{ Home, User }`` or ``Link, { Home }``."""
        pieces = []
        if self.default:
            pieces.append(self.default)
        if self.names:
            pieces.append("{ " + ", ".join(self.names) + " }")
        return ", ".join(pieces)


@dataclass
class EmitContext:
    registry: "EmitterRegistry"
    diagnostics: List[Diagnostic] = field(default_factory=list)
    components: List[str] = field(default_factory=list)
    # Package imports keyed by module: default import name and named imports.
    modules: Dict[str, ModuleImport] = field(default_factory=dict)
    known_documents: Optional[FrozenSet[str]] = None
    parent_orientation: Orientation = Orientation.VERTICAL
    document: Optional[str] = None

    def nested(self, orientation: Orientation) -> "EmitContext":
        """Return a context for the children of a container laid out along ``orientation``."""
        return EmitContext(
            registry=self.registry,
            diagnostics=self.diagnostics,
            components=self.components,
            modules=self.modules,
            known_documents=self.known_documents,
            parent_orientation=orientation,
            document=self.document,
        )

    def record(self, code: str, message: str, node: Optional[ComponentNode] = None) -> None:
        location = node.location if node is not None else None
        if self.document:
            location = f"{self.document}:{location}" if location else self.document
        logger.warning("%s (%s)", message, location or "unknown location")
        self.diagnostics.append(Diagnostic(code=code, message=message, location=location))

    def use_component(self, name: str) -> None:
        """Register a component referenced by the markup so the module imports it."""
        if name not in self.components:
            self.components.append(name)

    def use_module(self, module: str, *, default: Optional[str] = None, named: Optional[str] = None) -> None:
        """Register an import from a package module such as ``next/link``."""
        entry = self.modules.setdefault(module, ModuleImport())
        if default is not None:
            entry.default = default
        if named is not None and named not in entry.names:
            entry.names.append(named)
