"""Emitters for text-bearing widgets: Label/Text, Button and IconLabel."""

from __future__ import annotations

import json
from typing import Any, List, Mapping

from ...bindings import (
    binding_body,
    escape_text,
    is_binding,
    is_path,
    parse_binding,
    render_action_attribute,
    render_attribute,
    render_text,
    resolve_path,
)
from ...tree import ComponentNode
from .. import tailwind
from ..context import EmitContext
from ..registry import ChildEmitter
from .base import (
    build_parts,
    event_attributes,
    has_events,
    indent_str,
    record_invalid_action,
    render_element,
)


def _label_trailing(node: ComponentNode) -> List[str]:
    trailing = []
    lines = node.get("lines")
    if tailwind.is_number(lines) and lines > 1:
        trailing.append(f"line-clamp-{tailwind.format_number(lines)}")
    elif lines == 1:
        trailing.append("truncate")
    if node.get("underline") is True:
        trailing.append("underline")
    if node.get("strikethrough") is True:
        trailing.append("line-through")
    if node.get("autoShrink") is True:
        trailing.append("whitespace-nowrap")
    return trailing


def emit_label(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    parts = build_parts(node, ctx, trailing=_label_trailing(node))
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("span", node, parts, indent, content=render_text(node.get("text", "")))


def disabled_attribute(node: ComponentNode) -> str:
    """``disabled`` prop from ``enabled``/``disabled``, literal or bound."""
    enabled = node.get("enabled")
    if is_binding(enabled):
        body = binding_body(enabled)
        if body is not None and body.startswith("!") and is_path(body[1:]):
            return f" disabled={{{resolve_path(body[1:].strip())}}}"
        if body is not None and is_path(body):
            return f" disabled={{!{resolve_path(body)}}}"
    elif enabled is False:
        return " disabled"
    disabled = node.get("disabled")
    if is_binding(disabled):
        body = binding_body(disabled)
        if body is not None and is_path(body):
            return f" disabled={{{resolve_path(body)}}}"
    elif disabled is True:
        return " disabled"
    return ""


def _button_trailing(node: ComponentNode) -> List[str]:
    trailing = ["cursor-pointer", "transition-colors"]
    tap = node.get("tapBackground")
    highlight = node.get("highlightBackground")
    if isinstance(tap, str) and not is_binding(tap):
        trailing.append(tailwind.map_color(tap, "hover:bg"))
        trailing.append(tailwind.map_color(tap, "active:bg"))
    elif isinstance(highlight, str) and not is_binding(highlight):
        trailing.append(tailwind.map_color(highlight, "hover:bg"))
    else:
        trailing.append("hover:opacity-80")
    highlight_color = node.get("highlightColor")
    if isinstance(highlight_color, str) and not is_binding(highlight_color):
        trailing.append(tailwind.map_color(highlight_color, "hover:text"))
    disabled_background = node.get("disabledBackground")
    if isinstance(disabled_background, str):
        trailing.append(tailwind.map_color(disabled_background, "disabled:bg"))
    else:
        trailing.append("disabled:opacity-50")
    disabled_color = node.get("disabledFontColor")
    if isinstance(disabled_color, str):
        trailing.append(tailwind.map_color(disabled_color, "disabled:text"))
    trailing.append("disabled:cursor-not-allowed")
    return trailing


def _partial_span(node: ComponentNode, ctx: EmitContext, partial: Mapping[str, Any], text: str) -> str:
    classes = [
        tailwind.map_color(partial.get("fontColor"), "text"),
        tailwind.map_font_size(partial.get("fontSize")),
        tailwind.map_font_weight(partial.get("fontWeight")),
        tailwind.map_color(partial.get("background"), "bg"),
        "underline" if partial.get("underline") else "",
        "line-through" if partial.get("strikethrough") else "",
    ]
    handlers = []
    for attribute in ("onclick", "onClick"):
        if attribute in partial:
            classes.append("cursor-pointer")
            handlers.append(render_action_attribute(attribute, partial[attribute], "onClick"))
            record_invalid_action(node, ctx, attribute, partial[attribute])
    class_name = tailwind.join_class_list(classes)
    class_attribute = f' className="{class_name}"' if class_name else ""
    return f"<span{class_attribute}{''.join(handlers)}>{escape_text(text)}</span>"


def _range_start(partial: Mapping[str, Any]) -> int:
    bounds = partial["range"]
    return bounds[0] if bounds and isinstance(bounds[0], int) else -1


def partial_text(node: ComponentNode, ctx: EmitContext) -> str:
    """Button text split into plain runs and styled ``partialAttributes`` spans.

    Ranges are ``[start, end)`` offsets into ``text``; ranges that fall
    outside the text or overlap an earlier one are skipped.  Runs stay on
    one line so whitespace between them survives.
    """
    text = str(node.get("text", ""))
    partials = [
        partial for partial in node.get("partialAttributes", [])
        if isinstance(partial, dict) and isinstance(partial.get("range"), list)
    ]
    partials.sort(key=_range_start)
    runs: List[str] = []
    position = 0
    for partial in partials:
        bounds = partial["range"]
        if (len(bounds) != 2 or not all(isinstance(bound, int) for bound in bounds)
                or not position <= bounds[0] < bounds[1] <= len(text)):
            ctx.record(
                "partial-attribute-range",
                f"partialAttributes range {bounds} does not fit the text; ignored",
                node,
            )
            continue
        start, end = bounds
        if start > position:
            runs.append(escape_text(text[position:start]))
        runs.append(_partial_span(node, ctx, partial, text[start:end]))
        position = end
    if position < len(text):
        runs.append(escape_text(text[position:]))
    return "".join(runs)


def emit_button(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    """``<button>``; ``href`` wraps it in a Next.js ``Link``."""
    parts = build_parts(node, ctx, trailing=_button_trailing(node))
    parts.attributes.append(' type="button"')
    parts.attributes.extend(event_attributes(node, ctx))
    disabled = disabled_attribute(node)
    if disabled:
        parts.attributes.append(disabled)
    outer = None
    href = node.get("href")
    if href is not None:
        ctx.use_module("next/link", default="Link")
        outer = (f"<Link{render_attribute('href', href)}>", "</Link>")
    partials = node.get("partialAttributes")
    if isinstance(partials, list) and partials:
        content = partial_text(node, ctx)
    else:
        content = render_text(node.get("text", ""))
    return render_element("button", node, parts, indent, content=content, outer=outer)


# =============================================================================
# ICON LABEL
# =============================================================================

# iconPosition -> (flex direction, margin prefix between icon and text)
ICON_POSITIONS = {
    "left": ("flex-row", "mr"),
    "right": ("flex-row-reverse", "ml"),
    "top": ("flex-col", "mb"),
    "bottom": ("flex-col-reverse", "mt"),
}


def _icon_source(node: ComponentNode) -> str:
    selected = node.get("selected")
    if is_binding(selected):
        on = json.dumps(node.get("icon_on", ""))
        off = json.dumps(node.get("icon_off", ""))
        return f" src={{{parse_binding(selected).render()} ? {on} : {off}}}"
    source = node.get("icon_off", node.get("icon_on", node.get("icon")))
    return render_attribute("src", source)


def emit_icon_label(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    direction, margin_prefix = ICON_POSITIONS.get(
        str(node.get("iconPosition", "left")).lower(), ICON_POSITIONS["left"])
    trailing = ["flex", direction, "items-center"]
    if has_events(node):
        trailing.append("cursor-pointer")
    parts = build_parts(node, ctx, trailing=trailing)
    parts.attributes.extend(event_attributes(node, ctx))

    icon_classes = []
    size = node.get("iconSize")
    if isinstance(size, list) and len(size) >= 2:
        icon_classes.extend([tailwind.map_width(size[0]), tailwind.map_height(size[1])])
    icon_classes.append(tailwind.spacing_token(margin_prefix, node.get("iconMargin", 4)))
    icon_class = tailwind.join_class_list(icon_classes)
    class_attribute = f' className="{icon_class}"' if icon_class else ""

    pad = indent_str(indent + 2)
    children = "\n".join([
        f'{pad}<img{class_attribute}{_icon_source(node)} alt="" />',
        f"{pad}<span>{render_text(node.get('text', ''))}</span>",
    ])
    return render_element("div", node, parts, indent, children=children)
