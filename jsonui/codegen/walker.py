"""Depth-first emission of a resolved component tree."""

from __future__ import annotations

from .context import EmitContext
from .emitters import resolve_emitter
from .emitters.include import emit_include
from ..tree import ComponentNode


def emit_node(node: ComponentNode, ctx: EmitContext, indent: int = 0) -> str:
    """Markup for ``node`` and its subtree.

    Marker nodes render nothing.  A node with an ``include`` reference is
    emitted as a component reference regardless of its type.
    """
    if node.is_marker:
        return ""
    if node.is_include:
        return emit_include(node, ctx, indent, emit_node)
    emitter = resolve_emitter(node, ctx)
    return emitter(node, ctx, indent, emit_node)
