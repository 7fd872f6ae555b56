"""Input-like widget emitters and their two-way binding wiring.

A value attribute bound to a plain property (``"text": "@{name}"``) with
no explicit change handler gets a default ``onNameChange`` handler, which
the companion state module implements.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from ...bindings import (
    CANONICAL_PREFIX,
    LOWER_EVENT,
    BindingKind,
    is_binding,
    parse_action,
    parse_binding,
    render_attribute,
    render_text,
    resolve_path,
)
from ...naming import change_handler_name
from ...tree import ComponentNode
from .. import tailwind
from ..context import EmitContext
from ..registry import ChildEmitter
from .base import build_parts, event_attributes, indent_str, render_element
from .text import disabled_attribute


@dataclass(frozen=True)
class TwoWayField:
    value_attributes: Tuple[str, ...]
    handler_attributes: Tuple[str, ...]
    extractor: str
    ts_type: str
    # Binding assumed when no value attribute is present.
    default_binding: Optional[str] = None


_TEXT_FIELD = TwoWayField(
    value_attributes=("text",),
    handler_attributes=("onTextChange", "onChange", "ontextchange", "onchange"),
    extractor="e.target.value",
    ts_type="string",
)
_TOGGLE_FIELD = TwoWayField(
    value_attributes=("isOn", "checked", "value"),
    handler_attributes=("onValueChange", "onValueChanged", "onChange", "onToggle",
                        "onvaluechange", "onchange", "ontoggle"),
    extractor="e.target.checked",
    ts_type="boolean",
)
_SLIDER_FIELD = TwoWayField(
    value_attributes=("value",),
    handler_attributes=("onValueChange", "onValueChanged", "onChange", "onvaluechange", "onchange"),
    extractor="Number(e.target.value)",
    ts_type="number",
)
_SELECT_FIELD = TwoWayField(
    value_attributes=("selectedValue", "value"),
    handler_attributes=("onValueChange", "onValueChanged", "onChange", "onSelect",
                        "onvaluechange", "onchange", "onselect"),
    extractor="e.target.value",
    ts_type="string",
)
SEGMENT_FIELD = TwoWayField(
    value_attributes=("selectedIndex", "selectedTabIndex"),
    handler_attributes=("onValueChange", "onValueChanged", "onChange", "onvaluechange", "onchange"),
    extractor="index",
    ts_type="number",
    default_binding="@{selectedIndex}",
)
RADIO_FIELD = TwoWayField(
    value_attributes=("selectedValue",),
    handler_attributes=("onValueChange", "onValueChanged", "onChange", "onvaluechange", "onchange"),
    extractor="e.target.value",
    ts_type="string",
)
TAB_FIELD = TwoWayField(
    value_attributes=("selectedIndex",),
    handler_attributes=("onTabChange", "onValueChange", "ontabchange", "onvaluechange"),
    extractor="index",
    ts_type="number",
    default_binding="@{selectedTab}",
)

TWO_WAY_FIELDS = {
    "TextField": _TEXT_FIELD,
    "TextView": _TEXT_FIELD,
    "Switch": _TOGGLE_FIELD,
    "Toggle": _TOGGLE_FIELD,
    "CheckBox": _TOGGLE_FIELD,
    "Check": _TOGGLE_FIELD,
    "Checkbox": _TOGGLE_FIELD,
    "Slider": _SLIDER_FIELD,
    "SelectBox": _SELECT_FIELD,
    "Segment": SEGMENT_FIELD,
    "Radio": RADIO_FIELD,
    "TabView": TAB_FIELD,
}


def value_attribute(node: ComponentNode, field: TwoWayField) -> Tuple[Optional[str], Any]:
    for attribute in field.value_attributes:
        if attribute in node.attributes:
            return attribute, node.attributes[attribute]
    if field.default_binding is not None:
        return field.value_attributes[0], field.default_binding
    return None, None


def two_way_property(node: ComponentNode) -> Optional[Tuple[str, TwoWayField]]:
    """Property name needing a default change handler, if any."""
    field = TWO_WAY_FIELDS.get(node.type or "")
    if field is None:
        return None
    if any(attribute in node.attributes for attribute in field.handler_attributes):
        return None
    _, value = value_attribute(node, field)
    expression = parse_binding(value)
    if expression.kind is not BindingKind.DATA or expression.negated:
        return None
    prop = (expression.accessor or "")[len(CANONICAL_PREFIX):]
    if not prop or "." in prop or "[" in prop:
        return None
    return prop, field


def handler_expression(
    node: ComponentNode,
    ctx: EmitContext,
    field: TwoWayField,
    *,
    params: str = "(e)",
    argument: Optional[str] = None,
) -> Optional[str]:
    """Arrow function handing ``argument`` to the node's change handler.

    An invalid explicit handler records a diagnostic and yields an
    ``/* ERROR */`` comment; ``None`` means nothing handles changes.
    """
    argument = field.extractor if argument is None else argument
    for attribute in field.handler_attributes:
        if attribute not in node.attributes:
            continue
        value = node.attributes[attribute]
        action = parse_action(attribute, value)
        if action.kind is BindingKind.INVALID:
            reason = action.reason or f"invalid {attribute} handler"
            ctx.record("event-binding-form", reason, node)
            reason = reason.replace("*/", "* /")
            return f"/* ERROR: {reason} */"
        if isinstance(value, dict):
            return action.accessor
        if LOWER_EVENT.match(attribute):
            return f"{params} => viewModel.{action.path}({argument})"
        return f"{params} => {action.accessor}?.({argument})"
    two_way = two_way_property(node)
    if two_way is None:
        return None
    prop, _ = two_way
    handler = resolve_path(change_handler_name(prop))
    return f"{params} => {handler}?.({argument})"


def event_prop(name: str, expression: Optional[str]) -> str:
    if expression is None:
        return ""
    if expression.startswith("/*"):
        return f" {expression}"
    return f" {name}={{{expression}}}"


def change_attribute(node: ComponentNode, ctx: EmitContext, field: TwoWayField) -> str:
    """``onChange`` prop passing the new value, not the DOM event, to the handler."""
    return event_prop("onChange", handler_expression(node, ctx, field))


def _value_binding_attribute(node: ComponentNode, field: TwoWayField, bound_name: str, literal_name: str) -> str:
    _, value = value_attribute(node, field)
    if value is None:
        return ""
    if is_binding(value):
        return f" {bound_name}={{{parse_binding(value).render()}}}"
    if isinstance(value, bool):
        return f" {literal_name}" if value else ""
    return render_attribute(literal_name, value)


# =============================================================================
# TEXT INPUTS
# =============================================================================

INPUT_TYPES = {
    "email": "email",
    "password": "password",
    "number": "number",
    "decimal": "number",
    "phone": "tel",
    "url": "url",
}


def _text_input_classes(node: ComponentNode) -> List[str]:
    trailing = ["border", "outline-none", "focus:ring-2 focus:ring-blue-500"]
    border_style = str(node.get("borderStyle", "")).lower()
    if border_style == "roundedrect":
        trailing.append("rounded-md")
    elif border_style == "line":
        trailing.append("border-b border-t-0 border-l-0 border-r-0")
    return trailing


def _placeholder(node: ComponentNode) -> str:
    hint = node.get("hint", node.get("placeholder"))
    return render_attribute("placeholder", hint)


def emit_text_field(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    parts = build_parts(node, ctx, trailing=_text_input_classes(node))
    input_type = "password" if node.get("secure") is True else INPUT_TYPES.get(
        str(node.get("input", "")).lower(), "text")
    parts.attributes.append(f' type="{input_type}"')
    parts.attributes.append(_placeholder(node))
    parts.attributes.append(_value_binding_attribute(node, _TEXT_FIELD, "value", "defaultValue"))
    if tailwind.is_number(node.get("maxLength")):
        parts.attributes.append(f" maxLength={{{tailwind.format_number(node.get('maxLength'))}}}")
    parts.attributes.append(change_attribute(node, ctx, _TEXT_FIELD))
    parts.attributes.append(disabled_attribute(node))
    parts.attributes.extend(event_attributes(node, ctx, skip=_TEXT_FIELD.handler_attributes))
    return render_element("input", node, parts, indent)


def emit_text_view(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    trailing = _text_input_classes(node)
    trailing.append("resize-none" if node.get("resizable") is not True else "")
    parts = build_parts(node, ctx, trailing=trailing)
    parts.attributes.append(_placeholder(node))
    lines = node.get("lines", node.get("rows"))
    if tailwind.is_number(lines):
        parts.attributes.append(f" rows={{{tailwind.format_number(lines)}}}")
    parts.attributes.append(_value_binding_attribute(node, _TEXT_FIELD, "value", "defaultValue"))
    parts.attributes.append(change_attribute(node, ctx, _TEXT_FIELD))
    parts.attributes.append(disabled_attribute(node))
    parts.attributes.extend(event_attributes(node, ctx, skip=_TEXT_FIELD.handler_attributes))
    return render_element("textarea", node, parts, indent)


# =============================================================================
# TOGGLES
# =============================================================================

def _emit_toggle(node: ComponentNode, ctx: EmitContext, indent: int, role: Optional[str]) -> str:
    label = node.get("text", node.get("label"))
    trailing = ["cursor-pointer"]
    if label:
        trailing.insert(0, "flex items-center gap-2")
    if node.get("enabled") is False:
        trailing.append("opacity-50 cursor-not-allowed")
    parts = build_parts(node, ctx, trailing=trailing)

    input_attrs = [' type="checkbox"']
    if role:
        input_attrs.append(f' role="{role}"')
    input_attrs.append(_value_binding_attribute(node, _TOGGLE_FIELD, "checked", "defaultChecked"))
    input_attrs.append(change_attribute(node, ctx, _TOGGLE_FIELD))
    input_attrs.append(disabled_attribute(node))

    if not label:
        parts.attributes.extend(input_attrs)
        parts.attributes.extend(event_attributes(node, ctx, skip=_TOGGLE_FIELD.handler_attributes))
        return render_element("input", node, parts, indent)

    parts.attributes.extend(event_attributes(node, ctx, skip=_TOGGLE_FIELD.handler_attributes))
    inner = indent_str(indent + 2)
    children = "\n".join([
        f"{inner}<input{''.join(input_attrs)} />",
        f"{inner}<span>{render_text(label)}</span>",
    ])
    return render_element("label", node, parts, indent, children=children)


def emit_switch(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    return _emit_toggle(node, ctx, indent, role="switch")


def emit_checkbox(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    return _emit_toggle(node, ctx, indent, role=None)


# =============================================================================
# RANGE / SELECTION / PROGRESS
# =============================================================================

def emit_slider(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    parts = build_parts(node, ctx, trailing=["cursor-pointer", "accent-blue-600"])
    parts.attributes.append(' type="range"')
    for attribute, prop in (("minimum", "min"), ("maximum", "max"), ("step", "step")):
        value = node.get(attribute, node.get(prop))
        if value is not None:
            parts.attributes.append(render_attribute(prop, value))
    parts.attributes.append(_value_binding_attribute(node, _SLIDER_FIELD, "value", "defaultValue"))
    parts.attributes.append(change_attribute(node, ctx, _SLIDER_FIELD))
    parts.attributes.append(disabled_attribute(node))
    parts.attributes.extend(event_attributes(node, ctx, skip=_SLIDER_FIELD.handler_attributes))
    return render_element("input", node, parts, indent)


def _select_options(node: ComponentNode, indent: int) -> List[str]:
    pad = indent_str(indent)
    lines = []
    hint = node.get("hint", node.get("placeholder"))
    if hint is not None:
        lines.append(f'{pad}<option value="" disabled>{render_text(hint)}</option>')
    items = node.get("items", [])
    if is_binding(items):
        source = parse_binding(items).render()
        lines.append(f"{pad}{{{source}?.map((item) => (")
        lines.append(
            f"{indent_str(indent + 2)}<option key={{item.value ?? item.id ?? item}} "
            f"value={{item.value ?? item.id ?? item}}>{{item.text ?? item.label ?? item}}</option>"
        )
        lines.append(f"{pad}))}}")
        return lines
    for item in items if isinstance(items, list) else []:
        if isinstance(item, dict):
            value = item.get("value", item.get("id", item.get("text")))
            label = item.get("text", item.get("label", value))
        else:
            value = label = item
        lines.append(f"{pad}<option value={{{json.dumps(value)}}}>{render_text(label)}</option>")
    return lines


def emit_select_box(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    trailing = [
        "border", "rounded-md", "px-3 py-2", "bg-white", "cursor-pointer", "outline-none",
        "focus:ring-2 focus:ring-blue-500 focus:border-blue-500",
    ]
    enabled = node.get("enabled")
    if enabled is False:
        trailing.append("opacity-50 cursor-not-allowed")
    parts = build_parts(node, ctx, trailing=trailing)
    parts.attributes.append(_value_binding_attribute(node, _SELECT_FIELD, "value", "defaultValue"))
    parts.attributes.append(change_attribute(node, ctx, _SELECT_FIELD))
    parts.attributes.append(disabled_attribute(node))
    parts.attributes.extend(event_attributes(node, ctx, skip=_SELECT_FIELD.handler_attributes))
    children = "\n".join(_select_options(node, indent + 2))
    return render_element("select", node, parts, indent, children=children)


def emit_progress(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    parts = build_parts(node, ctx, trailing=["w-full", "accent-blue-600"])
    value = node.get("progress", node.get("value"))
    if value is not None:
        if is_binding(value):
            parts.attributes.append(f" value={{{parse_binding(value).render()}}}")
        else:
            parts.attributes.append(render_attribute("value", value))
    parts.attributes.append(' max="1"')
    return render_element("progress", node, parts, indent)


def emit_indicator(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    size = "w-8 h-8" if str(node.get("indicatorStyle", "")).lower() == "large" else "w-5 h-5"
    leading = ["animate-spin", "rounded-full", "border-2", "border-gray-300", "border-t-blue-600", size]
    parts = build_parts(node, ctx, leading=leading)
    parts.attributes.append(' role="status"')
    animating = node.get("isAnimating")
    if is_binding(animating) and parts.directive is None:
        parts.style["display"] = f"{parse_binding(animating).render()} ? undefined : \"none\""
    return render_element("div", node, parts, indent)
