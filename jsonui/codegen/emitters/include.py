"""Cross-document include emitter."""

from __future__ import annotations

import json
import re
from typing import Any, Dict

from ...bindings import (
    binding_body,
    contains_binding,
    is_path,
    render_attribute,
    resolve_path,
    template_literal,
)
from ...naming import component_name_for
from ...tree import ComponentNode
from ..context import EmitContext
from ..registry import ChildEmitter
from .base import element_id, indent_str

_PROP_KEY = re.compile(r"^[A-Za-z_$][\w$]*$")


def _key(key: Any) -> str:
    key = str(key)
    return key if _PROP_KEY.match(key) else json.dumps(key)


def format_prop_value(value: Any) -> str:
    """JavaScript expression for one include prop value."""
    if isinstance(value, str):
        body = binding_body(value)
        if body is not None and is_path(body):
            return resolve_path(body)
        if contains_binding(value):
            return template_literal(value)
        return json.dumps(value)
    if isinstance(value, dict):
        pairs = ", ".join(f"{_key(key)}: {format_prop_value(item)}" for key, item in value.items())
        return f"{{ {pairs} }}" if pairs else "{}"
    if isinstance(value, list):
        return "[" + ", ".join(format_prop_value(item) for item in value) + "]"
    return json.dumps(value)


def include_props(node: ComponentNode) -> Dict[str, Any]:
    """``shared_data`` overlaid by ``data``; keys from ``data`` win."""
    props: Dict[str, Any] = {}
    for key in ("shared_data", "data"):
        value = node.get(key)
        if isinstance(value, dict):
            props.update(value)
    return props


def include_known(reference: str, ctx: EmitContext) -> bool:
    if ctx.known_documents is None:
        return True
    normalized = reference.replace("\\", "/")
    if normalized.endswith(".json"):
        normalized = normalized[: -len(".json")]
    return normalized in ctx.known_documents or normalized.split("/")[-1] in ctx.known_documents


def emit_include(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    pad = indent_str(indent)
    reference = node.include
    if not reference:
        ctx.record("include-unresolved", "Include node has no 'include' reference", node)
        return f"{pad}{{/* include without a reference */}}"
    if not include_known(reference, ctx):
        ctx.record("include-unresolved", f"Included layout '{reference}' was not found", node)
        return f"{pad}{{/* include not found: {reference.replace('*/', '* /')} */}}"

    name = component_name_for(reference)
    ctx.use_component(name)
    props = include_props(node)
    data = format_prop_value(props) if props else "data"
    return f"{pad}<{name}{render_attribute('id', element_id(node))} data={{{data}}} viewModel={{viewModel}} />"
