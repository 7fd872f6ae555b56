"""Selection widgets: Segment, Radio and TabView.

Each keeps its selection in one bound property and reports changes
through the same default ``on<Prop>Change`` handlers as the inputs in
``controls``.  A Segment without ``selectedIndex`` binds
``selectedIndex``; a TabView without one binds ``selectedTab``.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

from ...bindings import is_binding, parse_binding, render_attribute, render_text
from ...naming import component_name_for, to_pascal_case
from ...tree import ComponentNode
from .. import tailwind
from ..context import EmitContext
from ..registry import ChildEmitter
from .base import build_parts, element_id, event_attributes, indent_str, render_element
from .controls import (
    RADIO_FIELD,
    SEGMENT_FIELD,
    TAB_FIELD,
    TwoWayField,
    change_attribute,
    event_prop,
    handler_expression,
    value_attribute,
)
from .text import disabled_attribute


def selected_accessor(node: ComponentNode, field: TwoWayField) -> Optional[str]:
    _, value = value_attribute(node, field)
    if is_binding(value):
        return parse_binding(value).render()
    return None


def _choice_class(base: str, selected: str, unselected: str, condition: Optional[str], static: bool) -> str:
    """``className`` choosing between two class sets, at runtime when ``condition`` is set."""
    if condition is not None:
        return f"className={{`{base} ${{{condition} ? '{selected}' : '{unselected}'}}`}}"
    return f'className="{base} {selected if static else unselected}"'


# =============================================================================
# SEGMENT
# =============================================================================

def _segment_button_classes(node: ComponentNode) -> Tuple[str, str, str]:
    font_size = tailwind.map_font_size(node.get("fontSize")) or "text-sm"
    base = tailwind.join_classes(
        "flex-1 px-4 py-2", font_size,
        "font-medium rounded-md transition-colors cursor-pointer disabled:cursor-not-allowed",
    )
    font_color = node.get("fontColor")
    text = tailwind.map_color(font_color, "text") if not is_binding(font_color) else ""
    selected_text = tailwind.map_color(node.get("selectedFontColor"), "text") or text or "text-gray-900"
    selected_background = tailwind.map_color(node.get("selectedBackground"), "bg") or "bg-white"
    selected = f"{selected_background} {selected_text} shadow"
    return base, selected, "text-gray-500 hover:text-gray-700"


def emit_segment(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    leading = ["w-full flex rounded-lg p-1"]
    if "background" not in node.attributes:
        leading.append("bg-gray-100")
    if node.get("enabled") is False:
        leading.append("opacity-50")
    parts = build_parts(node, ctx, leading=leading)
    parts.attributes.extend(event_attributes(node, ctx, skip=SEGMENT_FIELD.handler_attributes))

    base, selected, unselected = _segment_button_classes(node)
    accessor = selected_accessor(node, SEGMENT_FIELD)
    _, literal = value_attribute(node, SEGMENT_FIELD)
    disabled = disabled_attribute(node)
    pad = indent_str(indent + 2)
    items = node.get("items", [])

    if is_binding(items):
        condition = f"{accessor if accessor else json.dumps(literal)} === index"
        click = event_prop("onClick", handler_expression(
            node, ctx, SEGMENT_FIELD, params="()", argument="index"))
        lines = [
            f"{pad}{{{parse_binding(items).render()}?.map((item, index) => (",
            f"{indent_str(indent + 4)}<button key={{index}} type=\"button\" "
            f"{_choice_class(base, selected, unselected, condition, False)}{click}{disabled}>{{item}}</button>",
            f"{pad}))}}",
        ]
        return render_element("div", node, parts, indent, children="\n".join(lines))

    lines = []
    for index, item in enumerate(items if isinstance(items, list) else []):
        condition = f"{accessor} === {index}" if accessor else None
        click = event_prop("onClick", handler_expression(
            node, ctx, SEGMENT_FIELD, params="()", argument=str(index)))
        class_name = _choice_class(base, selected, unselected, condition, literal == index)
        lines.append(
            f'{pad}<button key={{{index}}} type="button" {class_name}{click}{disabled}>{render_text(item)}</button>'
        )
    return render_element("div", node, parts, indent, children="\n".join(lines))


# =============================================================================
# RADIO
# =============================================================================

def _radio_input(node: ComponentNode, ctx: EmitContext, group: Any, value: str, checked: str) -> str:
    pieces = ['<input type="radio"', render_attribute("name", group), value, checked]
    pieces.append(change_attribute(node, ctx, RADIO_FIELD))
    pieces.append(disabled_attribute(node))
    tint = node.get("tintColor")
    if tint is not None:
        tint_value = parse_binding(tint).render() if is_binding(tint) else json.dumps(tint)
        pieces.append(f" style={{{{ accentColor: {tint_value} }}}}")
    return "".join(pieces) + " />"


def _checked(node: ComponentNode, value: Any, expression: Optional[str] = None) -> str:
    _, selected = value_attribute(node, RADIO_FIELD)
    if is_binding(selected):
        return f" checked={{{parse_binding(selected).render()} === {expression or json.dumps(value)}}}"
    if selected is not None and selected == value:
        return " defaultChecked"
    return ""


def emit_radio(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    """A radio group from ``items``, or one radio button labelled by ``text``."""
    items = node.get("items")
    group = node.get("group", element_id(node) or "radioGroup")
    trailing = ["cursor-pointer"]
    if node.get("enabled") is False:
        trailing.append("opacity-50 cursor-not-allowed")
    text = node.get("text", "")

    if not items:
        value = element_id(node) or "option"
        parts = build_parts(node, ctx, trailing=trailing + ["flex items-center gap-2"])
        parts.attributes.extend(event_attributes(node, ctx, skip=RADIO_FIELD.handler_attributes))
        pad = indent_str(indent + 2)
        children = "\n".join([
            pad + _radio_input(node, ctx, group, render_attribute("value", value), _checked(node, value)),
            f"{pad}<span>{render_text(text)}</span>",
        ])
        return render_element("label", node, parts, indent, children=children)

    parts = build_parts(node, ctx, leading=["flex flex-col gap-2"], trailing=trailing)
    parts.attributes.extend(event_attributes(node, ctx, skip=RADIO_FIELD.handler_attributes))
    pad, inner = indent_str(indent + 2), indent_str(indent + 4)
    lines: List[str] = []
    if text:
        lines.append(f'{pad}<span className="font-medium">{render_text(text)}</span>')
    option_class = 'className="flex items-center gap-2 cursor-pointer"'

    if is_binding(items):
        input_markup = _radio_input(node, ctx, group, " value={item}", _checked(node, None, "item"))
        lines.extend([
            f"{pad}{{{parse_binding(items).render()}?.map((item) => (",
            f"{inner}<label key={{item}} {option_class}>",
            f"{indent_str(indent + 6)}{input_markup}",
            f"{indent_str(indent + 6)}<span>{{item}}</span>",
            f"{inner}</label>",
            f"{pad}))}}",
        ])
    else:
        for item in items if isinstance(items, list) else []:
            value = str(item)
            lines.extend([
                f"{pad}<label {option_class}>",
                inner + _radio_input(node, ctx, group, render_attribute("value", value), _checked(node, value)),
                f"{inner}<span>{render_text(value)}</span>",
                f"{pad}</label>",
            ])
    return render_element("div", node, parts, indent, children="\n".join(lines))


# =============================================================================
# TAB VIEW
# =============================================================================

# Platform icon names mapped to lucide-react components.
LUCIDE_ICONS = {
    "house": "Home",
    "house.fill": "Home",
    "Home": "Home",
    "person": "User",
    "person.fill": "User",
    "Person": "User",
    "gearshape": "Settings",
    "gearshape.fill": "Settings",
    "gear": "Settings",
    "Settings": "Settings",
    "magnifyingglass": "Search",
    "Search": "Search",
    "heart": "Heart",
    "heart.fill": "Heart",
    "Favorite": "Heart",
    "star": "Star",
    "star.fill": "Star",
    "Star": "Star",
    "bell": "Bell",
    "bell.fill": "Bell",
    "Notifications": "Bell",
    "cart": "ShoppingCart",
    "cart.fill": "ShoppingCart",
    "ShoppingCart": "ShoppingCart",
    "list.bullet": "List",
    "List": "List",
    "square.grid.2x2": "LayoutGrid",
    "GridView": "LayoutGrid",
    "circle": "Circle",
    "Circle": "Circle",
}

ICON_CLASS = "w-6 h-6"
BADGE_CLASS = (
    "absolute -top-1 -right-1 bg-red-500 text-white text-xs rounded-full "
    "min-w-4 h-4 px-1 flex items-center justify-center"
)


def lucide_icon(icon: str) -> str:
    if icon in LUCIDE_ICONS:
        return LUCIDE_ICONS[icon]
    return to_pascal_case(icon.split(".")[0]) or "Circle"


def _icon_element(icon: str, ctx: EmitContext, resource: bool) -> str:
    if resource:
        return f'<img src="/assets/{icon}.png" className="{ICON_CLASS}" alt="" />'
    name = lucide_icon(icon)
    ctx.use_module("lucide-react", named=name)
    return f'<{name} className="{ICON_CLASS}" />'


def _tab_icon(tab: dict, ctx: EmitContext, condition: str) -> str:
    icon = str(tab.get("icon", "circle"))
    resource = tab.get("iconType") == "resource"
    element = _icon_element(icon, ctx, resource)
    selected_icon = tab.get("selectedIcon")
    if selected_icon and selected_icon != icon:
        selected = _icon_element(str(selected_icon), ctx, resource)
        return f"{{{condition} ? {selected} : {element}}}"
    return element


def _tab_badge(badge: Any) -> Optional[str]:
    if is_binding(badge):
        accessor = parse_binding(badge).render()
        return f'{{{accessor} ? <span className="{BADGE_CLASS}">{{{accessor}}}</span> : null}}'
    if (tailwind.is_number(badge) and badge > 0) or (isinstance(badge, str) and badge):
        return f'<span className="{BADGE_CLASS}">{render_text(badge)}</span>'
    return None


def _tab_button(node: ComponentNode, ctx: EmitContext, tab: dict, index: int, accessor: str, indent: int) -> List[str]:
    pad, inner, icon_pad = indent_str(indent), indent_str(indent + 2), indent_str(indent + 4)
    condition = f"{accessor} === {index}"
    tint = tailwind.map_color(node.get("tintColor"), "text") or "text-blue-600"
    unselected = tailwind.map_color(node.get("unselectedColor"), "text") or "text-gray-500"
    base = "flex-1 flex flex-col items-center justify-center py-2 px-1 transition-colors"
    class_name = _choice_class(base, tint, f"{unselected} hover:text-gray-700", condition, False)
    click = event_prop("onClick", handler_expression(node, ctx, TAB_FIELD, params="()", argument=str(index)))

    lines = [
        f'{pad}<button key={{{index}}} type="button" {class_name}{click}>',
        f'{inner}<div className="relative">',
        icon_pad + _tab_icon(tab, ctx, condition),
    ]
    badge = _tab_badge(tab.get("badge"))
    if badge:
        lines.append(icon_pad + badge)
    lines.append(f"{inner}</div>")
    if node.get("showLabels") is not False:
        title = tab.get("title", f"Tab {index + 1}")
        lines.append(f'{inner}<span className="text-xs mt-1">{render_text(title)}</span>')
    lines.append(f"{pad}</button>")
    return lines


def _tab_panel(ctx: EmitContext, tab: dict, index: int, accessor: str, indent: int) -> List[str]:
    view = tab.get("view")
    if isinstance(view, str) and view:
        name = component_name_for(view)
        ctx.use_component(name)
        content = f"<{name} />"
    else:
        title = tab.get("title", f"Tab {index + 1}")
        content = f'<div className="p-4">{render_text(title)}</div>'
    return [
        f"{indent_str(indent)}{{{accessor} === {index} && (",
        f"{indent_str(indent + 2)}{content}",
        f"{indent_str(indent)})}}",
    ]


def emit_tab_view(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    """Content panels above a bottom tab bar, one button per ``tabs`` entry."""
    tabs = node.get("tabs")
    tabs = [tab for tab in tabs if isinstance(tab, dict)] if isinstance(tabs, list) else []
    accessor = selected_accessor(node, TAB_FIELD)
    if accessor is None:
        _, literal = value_attribute(node, TAB_FIELD)
        accessor = json.dumps(literal if tailwind.is_number(literal) else 0)
    parts = build_parts(node, ctx, leading=["flex flex-col h-full"])
    parts.attributes.extend(event_attributes(node, ctx, skip=TAB_FIELD.handler_attributes))

    pad = indent_str(indent + 2)
    lines = [f'{pad}<div className="flex-1 overflow-auto">']
    for index, tab in enumerate(tabs):
        lines.extend(_tab_panel(ctx, tab, index, accessor, indent + 4))
    lines.append(f"{pad}</div>")

    bar = node.get("tabBarBackground")
    bar_background = "" if is_binding(bar) else tailwind.map_color(bar, "bg")
    lines.append(f'{pad}<nav className="flex border-t border-gray-200 {bar_background or "bg-white"}">')
    for index, tab in enumerate(tabs):
        lines.extend(_tab_button(node, ctx, tab, index, accessor, indent + 4))
    lines.append(f"{pad}</nav>")
    return render_element("div", node, parts, indent, children="\n".join(lines))
