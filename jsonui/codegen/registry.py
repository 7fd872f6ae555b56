"""Registry of externally supplied widget emitters."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, Optional

from ..errors import EmitterRegistryError
from ..tree import ComponentNode

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from .context import EmitContext

logger = logging.getLogger(__name__)

ChildEmitter = Callable[[ComponentNode, "EmitContext", int], str]
Emitter = Callable[[ComponentNode, "EmitContext", int, ChildEmitter], str]


def load_emitter(reference: str) -> Emitter:
    """Import an emitter from a ``package.module:callable`` reference."""
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise EmitterRegistryError(
            f"Invalid emitter reference '{reference}'",
            hint="Use the form 'package.module:function'",
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise EmitterRegistryError(f"Cannot import emitter module '{module_name}': {exc}") from exc
    emitter = getattr(module, attribute, None)
    if not callable(emitter):
        raise EmitterRegistryError(f"'{reference}' is not a callable emitter")
    return emitter


class EmitterRegistry:
    """Extension emitters keyed by type tag.

    Built once, before any document is compiled, and only read afterwards.
    Extension kinds take precedence over the built-in widget kinds.
    """

    def __init__(
        self,
        emitters: Optional[Mapping[str, Emitter]] = None,
        load_errors: Optional[List[str]] = None,
    ) -> None:
        self._emitters: Dict[str, Emitter] = dict(emitters or {})
        self.load_errors: List[str] = list(load_errors or [])

    @classmethod
    def from_references(cls, references: Mapping[str, str], *, strict: bool = False) -> "EmitterRegistry":
        emitters: Dict[str, Emitter] = {}
        errors: List[str] = []
        for type_tag, reference in references.items():
            try:
                emitters[type_tag] = load_emitter(reference)
            except EmitterRegistryError as exc:
                if strict:
                    raise
                logger.warning("Failed to load emitter for %s: %s", type_tag, exc.message)
                errors.append(f"{type_tag}: {exc.message}")
        return cls(emitters, errors)

    def lookup(self, type_tag: Optional[str]) -> Optional[Emitter]:
        if type_tag is None:
            return None
        return self._emitters.get(type_tag)

    def __contains__(self, type_tag: object) -> bool:
        return type_tag in self._emitters

    def kinds(self) -> List[str]:
        return sorted(self._emitters)
