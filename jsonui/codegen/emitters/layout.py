"""Container emitters: View, ScrollView, GradientView, Blur, CircleView and Collection."""

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

from ...bindings import binding_body, is_binding, is_path, parse_binding, resolve_expression, resolve_path
from ...naming import component_name_for, to_pascal_case
from ...tree import ComponentNode
from .. import tailwind
from ..context import EmitContext
from ..registry import ChildEmitter
from .base import build_parts, event_attributes, has_events, indent_str, render_element

GRADIENT_DIRECTIONS = {
    "vertical": "to bottom",
    "top": "to bottom",
    "bottom": "to top",
    "horizontal": "to right",
    "left": "to right",
    "right": "to left",
    "topLeftToBottomRight": "to bottom right",
    "topRightToBottomLeft": "to bottom left",
    "bottomLeftToTopRight": "to top right",
    "bottomRightToTopLeft": "to top left",
}


def render_children(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    """Emit every renderable child, laid out along this node's orientation."""
    child_ctx = ctx.nested(tailwind.Orientation.parse(node.get("orientation")))
    rendered = [emit(child, child_ctx, indent) for child in node.children if not child.is_marker]
    return "\n".join(markup for markup in rendered if markup)


def has_rendered_children(node: ComponentNode) -> bool:
    return any(not child.is_marker for child in node.children)


def container_leading(node: ComponentNode) -> List[str]:
    # Containers without an explicit orientation stack their children vertically.
    if has_rendered_children(node) and "orientation" not in node.attributes:
        return ["flex flex-col"]
    return []


def container_trailing(node: ComponentNode) -> List[str]:
    orientation = tailwind.Orientation.parse(node.get("orientation"))
    trailing = tailwind.map_gravity(node.get("gravity"), orientation)
    trailing.append(tailwind.map_gap(node.get("spacing")))
    return trailing


def emit_view(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    children = render_children(node, ctx, indent + 2, emit)
    parts = build_parts(node, ctx, leading=container_leading(node), trailing=container_trailing(node))
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("div", node, parts, indent, children=children)


def gradient_background(node: ComponentNode) -> Optional[str]:
    colors = node.get("gradient")
    if not isinstance(colors, list) or not colors:
        return None
    direction = GRADIENT_DIRECTIONS.get(str(node.get("gradientDirection", "vertical")), "to bottom")
    stops = ", ".join(str(color) for color in colors)
    return resolve_expression(f"linear-gradient({direction}, {stops})")


def emit_gradient_view(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    children = render_children(node, ctx, indent + 2, emit)
    parts = build_parts(node, ctx, leading=container_leading(node), trailing=container_trailing(node))
    background = gradient_background(node)
    if background is not None:
        parts.style["background"] = background
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("div", node, parts, indent, children=children)


# =============================================================================
# EFFECT SHAPES
# =============================================================================

# effectStyle -> (blur radius in px, translucent background)
BLUR_EFFECTS = {
    "ultrathin": (4, "rgba(255, 255, 255, 0.3)"),
    "thin": (8, "rgba(255, 255, 255, 0.5)"),
    "regular": (12, "rgba(255, 255, 255, 0.7)"),
    "thick": (16, "rgba(255, 255, 255, 0.85)"),
    "chrome": (20, "rgba(255, 255, 255, 0.9)"),
    "light": (10, "rgba(255, 255, 255, 0.7)"),
    "extralight": (10, "rgba(255, 255, 255, 0.7)"),
    "dark": (10, "rgba(0, 0, 0, 0.5)"),
    "prominent": (10, "rgba(240, 240, 240, 0.8)"),
}
DEFAULT_BLUR = (10, "rgba(255, 255, 255, 0.6)")


def blur_effect(node: ComponentNode) -> Tuple[int, str]:
    """Blur radius and background for ``effectStyle``; ``intensity`` 0..1 maps to 0..20px."""
    style = "".join(str(node.get("effectStyle", "regular")).lower().split())
    if style.startswith("system") and style.endswith("material"):
        style = style[len("system"):-len("material")] or "regular"
    radius, background = BLUR_EFFECTS.get(style, DEFAULT_BLUR)
    intensity = node.get("intensity")
    if tailwind.is_number(intensity):
        radius = round(intensity * 20)
    return radius, background


def emit_blur(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    children = render_children(node, ctx, indent + 2, emit)
    trailing = container_trailing(node)
    if has_events(node):
        trailing.append("cursor-pointer")
    parts = build_parts(node, ctx, leading=container_leading(node), trailing=trailing)
    radius, background = blur_effect(node)
    parts.style["backdropFilter"] = f'"blur({radius}px)"'
    parts.style["WebkitBackdropFilter"] = f'"blur({radius}px)"'
    if "background" not in node.attributes:
        parts.style["backgroundColor"] = json.dumps(background)
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("div", node, parts, indent, children=children)


def emit_circle_view(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    """Circular container; ``fillColor`` and ``stroke*`` alias background and border."""
    children = render_children(node, ctx, indent + 2, emit)
    trailing = []
    if children:
        trailing.append("flex items-center justify-center")
    fill = node.get("fillColor")
    if isinstance(fill, str) and not is_binding(fill):
        trailing.append(tailwind.map_color(fill, "bg"))
    stroke_color, stroke_width = node.get("strokeColor"), node.get("strokeWidth")
    if (stroke_color is not None or stroke_width is not None) and not (
            "borderColor" in node.attributes or "borderWidth" in node.attributes):
        trailing.append(tailwind.map_border(
            stroke_width if stroke_width is not None else 1,
            stroke_color if stroke_color is not None else "#000000",
        ))
    if has_events(node):
        trailing.append("cursor-pointer")
    parts = build_parts(node, ctx, leading=["rounded-full overflow-hidden"], trailing=trailing)
    if is_binding(fill):
        parts.style.setdefault("backgroundColor", parse_binding(fill).render())
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("div", node, parts, indent, children=children)


def emit_scroll_view(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    horizontal = tailwind.Orientation.parse(node.get("orientation")) is tailwind.Orientation.HORIZONTAL
    leading = ["overflow-x-auto", "flex flex-row"] if horizontal else ["overflow-y-auto", "flex flex-col"]
    if node.get("showsScrollIndicator") is False:
        leading.append("scrollbar-none")
    children = render_children(node, ctx, indent + 2, emit)
    parts = build_parts(node, ctx, leading=leading, trailing=container_trailing(node))
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("div", node, parts, indent, children=children)


# =============================================================================
# COLLECTION
# =============================================================================

def cell_component_name(reference: Any) -> Optional[str]:
    """Component name for a ``cellClasses``/section entry (string or ``{"className": ...}``)."""
    name = reference.get("className") if isinstance(reference, dict) else reference
    if not isinstance(name, str) or not name:
        return None
    if "/" in name:
        return component_name_for(name)
    if name[:1].isupper() and "_" not in name:
        return name
    return to_pascal_case(name)


def _items_accessor(node: ComponentNode) -> Optional[str]:
    body = binding_body(node.get("items"))
    if body is None or not is_path(body):
        return None
    return resolve_path(body)


def _collection_classes(node: ComponentNode) -> List[str]:
    layout = str(node.get("layout", node.get("scrollDirection", "vertical"))).lower()
    columns = node.get("columnCount", node.get("columns", 1))
    spacing = node.get("itemSpacing", node.get("spacing"))
    classes: List[str] = []
    if layout == "horizontal":
        classes.extend(["overflow-x-auto", "flex flex-row"])
        if node.get("scrollEnabled") is not False:
            classes.append("flex-nowrap")
    elif columns == 1 or not tailwind.is_number(columns):
        classes.append("flex flex-col")
    else:
        classes.extend(["grid", f"grid-cols-{tailwind.format_number(columns)}"])
    classes.append(tailwind.map_gap(spacing))
    return classes


def _cell_lines(cell: str, source: str, item: str, index: str, indent: int) -> List[str]:
    pad = indent_str(indent)
    return [
        f"{pad}{{{source}?.map(({item}, {index}) => (",
        f"{indent_str(indent + 2)}<{cell} key={{{index}}} data={{{item}}} />",
        f"{pad}))}}",
    ]


def collection_content(node: ComponentNode, ctx: EmitContext, indent: int) -> str:
    pad = indent_str(indent)
    items = _items_accessor(node)
    lines: List[str] = []
    sections = node.get("sections")
    if isinstance(sections, list) and sections:
        for index, section in enumerate(sections):
            if not isinstance(section, dict):
                continue
            header = cell_component_name(section.get("header"))
            cell = cell_component_name(section.get("cell"))
            footer = cell_component_name(section.get("footer"))
            for name in (header, cell, footer):
                if name:
                    ctx.use_component(name)
            if header:
                lines.append(f"{pad}<{header} />")
            if cell and items:
                source = f"{items}?.sections?.[{index}]?.cells?.data"
                lines.extend(_cell_lines(cell, source, "cellData", "cellIndex", indent))
            elif cell:
                lines.append(f"{pad}<{cell} />")
            if footer:
                lines.append(f"{pad}<{footer} />")
        return "\n".join(lines)

    def first(key: str) -> Optional[str]:
        entries = node.get(key)
        if isinstance(entries, list) and entries:
            return cell_component_name(entries[0])
        return None

    header, cell, footer = first("headerClasses"), first("cellClasses"), first("footerClasses")
    for name in (header, cell, footer):
        if name:
            ctx.use_component(name)
    if header:
        lines.append(f"{pad}<{header} />")
    if cell and items:
        lines.extend(_cell_lines(cell, items, "item", "index", indent))
    elif cell:
        lines.append(f"{pad}<{cell} />")
    else:
        lines.append(f"{pad}{{/* No cell component specified */}}")
    if footer:
        lines.append(f"{pad}<{footer} />")
    return "\n".join(lines)


def emit_collection(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    parts = build_parts(node, ctx, trailing=_collection_classes(node))
    inset = node.get("contentInset")
    if isinstance(inset, list) and len(inset) == 4 and not any(is_binding(v) for v in inset):
        top, left, bottom, right = inset
        parts.classes.extend([
            tailwind.spacing_token("pt", top) if top else "",
            tailwind.spacing_token("pl", left) if left else "",
            tailwind.spacing_token("pb", bottom) if bottom else "",
            tailwind.spacing_token("pr", right) if right else "",
        ])
    parts.attributes.extend(event_attributes(node, ctx))
    content = collection_content(node, ctx, indent + 2)
    return render_element("div", node, parts, indent, children=content)
