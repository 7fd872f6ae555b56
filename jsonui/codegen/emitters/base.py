"""Shared element assembly for widget emitters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ...bindings import (
    BindingKind,
    is_binding,
    is_event_attribute,
    parse_action,
    parse_binding,
    render_action_attribute,
    render_attribute,
)
from ...tree import ComponentNode
from ...visibility import (
    VisibilityDirective,
    VisibilityKind,
    directive_for,
    fade_style,
    static_visibility_classes,
    wrap_hide_entirely,
)
from .. import tailwind
from ..context import EmitContext

# Event attributes every element understands, mapped to their React prop.
COMMON_EVENTS: Dict[str, str] = {
    "onClick": "onClick",
    "onclick": "onClick",
    "onTap": "onClick",
    "ontap": "onClick",
    "onLongPress": "onContextMenu",
}

# Attributes whose bound value becomes an inline style entry instead of a class.
DYNAMIC_STYLE_ATTRIBUTES = (
    ("width", "width"),
    ("height", "height"),
    ("background", "backgroundColor"),
    ("cornerRadius", "borderRadius"),
    ("fontColor", "color"),
    ("fontSize", "fontSize"),
    ("opacity", "opacity"),
    ("alpha", "opacity"),
    ("borderColor", "borderColor"),
    ("padding", "padding"),
    ("paddings", "padding"),
    ("topPadding", "paddingTop"),
    ("paddingTop", "paddingTop"),
    ("rightPadding", "paddingRight"),
    ("paddingRight", "paddingRight"),
    ("bottomPadding", "paddingBottom"),
    ("paddingBottom", "paddingBottom"),
    ("leftPadding", "paddingLeft"),
    ("paddingLeft", "paddingLeft"),
    ("margins", "margin"),
    ("margin", "margin"),
    ("topMargin", "marginTop"),
    ("rightMargin", "marginRight"),
    ("bottomMargin", "marginBottom"),
    ("leftMargin", "marginLeft"),
    ("zIndex", "zIndex"),
    ("weight", "flexGrow"),
    ("spacing", "gap"),
    ("direction", "direction"),
)


@dataclass
class ElementParts:
    """Pieces of one element's opening tag, in emission order."""
    classes: List[str] = field(default_factory=list)
    style: Dict[str, str] = field(default_factory=dict)
    attributes: List[str] = field(default_factory=list)
    directive: Optional[VisibilityDirective] = None

    def class_name(self) -> str:
        return tailwind.join_class_list(self.classes)


def indent_str(indent: int) -> str:
    return " " * indent


def _box_classes(node: ComponentNode, ctx: EmitContext, kind: str, attributes: Sequence[str]) -> str:
    for attribute in attributes:
        value = node.get(attribute)
        if value is None:
            continue
        if not tailwind.box_length_valid(value):
            ctx.record(
                "box-model-length",
                f"{attribute} array must have 1, 2 or 4 values, got {len(value)}; ignored",
                node,
            )
            return ""
        return tailwind.map_box(kind, value)
    return ""


def base_classes(node: ComponentNode, ctx: EmitContext, style: Dict[str, str]) -> List[str]:
    """Utility classes shared by every widget kind, in declaration order.

    Bound values are routed into ``style`` because they cannot be known
    at build time.
    """
    attrs = node.attributes
    classes: List[str] = []

    def static(name: str) -> Any:
        value = attrs.get(name)
        return None if is_binding(value) else value

    classes.append(tailwind.map_width(static("width")))
    classes.append(tailwind.map_height(static("height")))
    classes.append(tailwind.map_min_width(static("minWidth")))
    classes.append(tailwind.map_max_width(static("maxWidth")))
    classes.append(tailwind.map_min_height(static("minHeight")))
    classes.append(tailwind.map_max_height(static("maxHeight")))

    classes.append(_box_classes(node, ctx, "padding", ("padding", "paddings")))
    classes.append(tailwind.map_edges(
        "padding",
        attrs.get("topPadding", attrs.get("paddingTop")),
        attrs.get("rightPadding", attrs.get("paddingRight")),
        attrs.get("bottomPadding", attrs.get("paddingBottom")),
        attrs.get("leftPadding", attrs.get("paddingLeft")),
    ))
    classes.append(_box_classes(node, ctx, "margin", ("margins", "margin")))
    classes.append(tailwind.map_edges(
        "margin",
        attrs.get("topMargin"),
        attrs.get("rightMargin"),
        attrs.get("bottomMargin"),
        attrs.get("leftMargin"),
    ))

    classes.append(tailwind.map_color(static("background"), "bg"))
    classes.append(tailwind.map_corner_radius(static("cornerRadius")))
    classes.append(tailwind.map_color(static("fontColor"), "text"))
    classes.append(tailwind.map_font_size(static("fontSize")))
    classes.append(tailwind.map_font_weight(attrs.get("fontWeight")))
    classes.append(tailwind.map_font(attrs.get("font")))
    classes.append(tailwind.map_text_align(attrs.get("textAlign")))
    classes.append(tailwind.map_orientation(attrs.get("orientation")))
    classes.append(tailwind.map_shadow(attrs.get("shadow")))
    if "borderWidth" in attrs or static("borderColor") is not None:
        classes.append(tailwind.map_border(attrs.get("borderWidth"), static("borderColor")))

    opacity = static("opacity")
    if opacity is None:
        opacity = static("alpha")
    if tailwind.is_number(opacity) and opacity < 1:
        classes.append(tailwind.map_opacity(opacity))

    classes.extend(static_visibility_classes(attrs))
    classes.append(tailwind.map_overflow(attrs.get("clipToBounds")))
    classes.append(tailwind.map_z_index(attrs.get("zIndex")))
    classes.append(tailwind.map_flex_grow(attrs.get("weight")))
    classes.append(tailwind.map_self_alignment(attrs, ctx.parent_orientation))
    classes.append(tailwind.map_direction(attrs.get("direction")))
    if isinstance(attrs.get("className"), str):
        classes.append(attrs["className"])

    for attribute, css_property in DYNAMIC_STYLE_ATTRIBUTES:
        value = attrs.get(attribute)
        if is_binding(value) and css_property not in style:
            style[css_property] = parse_binding(value).render()

    rotation = attrs.get("rotation")
    if tailwind.is_number(rotation):
        style["transform"] = f'"rotate({tailwind.format_number(rotation)}deg)"'
    elif is_binding(rotation):
        style["transform"] = f"`rotate(${{{parse_binding(rotation).render()}}}deg)`"

    return classes


def build_parts(
    node: ComponentNode,
    ctx: EmitContext,
    *,
    leading: Iterable[Optional[str]] = (),
    trailing: Iterable[Optional[str]] = (),
) -> ElementParts:
    parts = ElementParts()
    parts.classes.extend(token for token in leading if token)
    parts.classes.extend(base_classes(node, ctx, parts.style))
    parts.classes.extend(token for token in trailing if token)
    parts.directive = directive_for(node.attributes)
    if parts.directive is not None and parts.directive.kind is VisibilityKind.FADE_OUT:
        parts.style["opacity"] = fade_style(parts.directive)
    return parts


def has_events(node: ComponentNode) -> bool:
    """True when the node carries a click-style event, which earns ``cursor-pointer``."""
    return any(attribute in node.attributes for attribute in COMMON_EVENTS)


def record_invalid_action(node: ComponentNode, ctx: EmitContext, attribute: str, value: Any) -> None:
    action = parse_action(attribute, value)
    if action.kind is BindingKind.INVALID:
        ctx.record("event-binding-form", action.reason or f"invalid {attribute} handler", node)


def event_attributes(
    node: ComponentNode,
    ctx: EmitContext,
    names: Optional[Mapping[str, str]] = None,
    skip: Iterable[str] = (),
) -> List[str]:
    """Render every event attribute on the node not listed in ``skip``."""
    mapping = dict(COMMON_EVENTS)
    mapping.update(names or {})
    skipped = set(skip)
    rendered = []
    for attribute, value in node.attributes.items():
        if attribute in skipped or not is_event_attribute(attribute):
            continue
        rendered.append(render_action_attribute(attribute, value, mapping.get(attribute)))
        record_invalid_action(node, ctx, attribute, value)
    return rendered


def element_id(node: ComponentNode) -> Any:
    return node.get("id", node.get("propertyName"))


def render_style(style: Mapping[str, str]) -> str:
    if not style:
        return ""
    pairs = ", ".join(f"{key}: {value}" for key, value in style.items())
    return f" style={{{{ {pairs} }}}}"


def open_tag(tag: str, node: ComponentNode, parts: ElementParts) -> str:
    """``<tag id className style ...attributes data-testid data-tag``."""
    pieces = [f"<{tag}", render_attribute("id", element_id(node))]
    class_name = parts.class_name()
    if class_name:
        pieces.append(f' className="{class_name}"')
    pieces.append(render_style(parts.style))
    pieces.extend(parts.attributes)
    pieces.append(render_attribute("data-testid", node.get("testId")))
    pieces.append(render_attribute("data-tag", node.get("tag")))
    return "".join(pieces)


def render_element(
    tag: str,
    node: ComponentNode,
    parts: ElementParts,
    indent: int,
    *,
    content: Optional[str] = None,
    children: Optional[str] = None,
    outer: Optional[Tuple[str, str]] = None,
) -> str:
    """Compose the element and apply its visibility directive.

    ``content`` renders inline between the tags; ``children`` is
    already-indented child markup placed on its own lines.  With neither,
    the element self-closes.  ``outer`` is an opening/closing tag pair
    wrapped around the element inside any visibility wrapper.
    """
    pad = indent_str(indent)
    head = open_tag(tag, node, parts)
    before, after = outer or ("", "")
    if children:
        markup = f"{pad}{before}{head}>\n{children}\n{pad}</{tag}>{after}"
    elif content is not None and content != "":
        markup = f"{pad}{before}{head}>{content}</{tag}>{after}"
    else:
        markup = f"{pad}{before}{head} />{after}"
    return apply_visibility(markup, parts, indent)


def apply_visibility(markup: str, parts: ElementParts, indent: int) -> str:
    directive = parts.directive
    if directive is not None and directive.kind is VisibilityKind.HIDE_ENTIRELY:
        return wrap_hide_entirely(markup, directive, indent)
    return markup
