"""Built-in widget emitters keyed by type tag."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from ...tree import ComponentNode
from ..context import EmitContext
from ..registry import Emitter
from .controls import (
    emit_checkbox,
    emit_indicator,
    emit_progress,
    emit_select_box,
    emit_slider,
    emit_switch,
    emit_text_field,
    emit_text_view,
)
from .include import emit_include
from .layout import (
    emit_blur,
    emit_circle_view,
    emit_collection,
    emit_gradient_view,
    emit_scroll_view,
    emit_view,
)
from .media import emit_image, emit_network_image, emit_web
from .selection import emit_radio, emit_segment, emit_tab_view
from .text import emit_button, emit_icon_label, emit_label


class WidgetKind(str, Enum):
    VIEW = "View"
    SAFE_AREA_VIEW = "SafeAreaView"
    LABEL = "Label"
    TEXT = "Text"
    BUTTON = "Button"
    IMAGE = "Image"
    CIRCLE_IMAGE = "CircleImage"
    NETWORK_IMAGE = "NetworkImage"
    TEXT_FIELD = "TextField"
    TEXT_VIEW = "TextView"
    SCROLL = "Scroll"
    SCROLL_VIEW = "ScrollView"
    COLLECTION = "Collection"
    TABLE = "Table"
    SWITCH = "Switch"
    TOGGLE = "Toggle"
    CHECK_BOX = "CheckBox"
    CHECK = "Check"
    CHECKBOX = "Checkbox"
    SLIDER = "Slider"
    PROGRESS = "Progress"
    INDICATOR = "Indicator"
    SELECT_BOX = "SelectBox"
    GRADIENT_VIEW = "GradientView"
    BLUR = "Blur"
    CIRCLE_VIEW = "CircleView"
    ICON_LABEL = "IconLabel"
    SEGMENT = "Segment"
    RADIO = "Radio"
    TAB_VIEW = "TabView"
    WEB = "Web"
    INCLUDE = "Include"

    @classmethod
    def parse(cls, type_tag: Optional[str]) -> Optional["WidgetKind"]:
        try:
            return cls(type_tag)
        except ValueError:
            return None


BUILTIN_EMITTERS: Dict[WidgetKind, Emitter] = {
    WidgetKind.VIEW: emit_view,
    WidgetKind.SAFE_AREA_VIEW: emit_view,
    WidgetKind.LABEL: emit_label,
    WidgetKind.TEXT: emit_label,
    WidgetKind.BUTTON: emit_button,
    WidgetKind.IMAGE: emit_image,
    WidgetKind.CIRCLE_IMAGE: emit_image,
    WidgetKind.NETWORK_IMAGE: emit_network_image,
    WidgetKind.TEXT_FIELD: emit_text_field,
    WidgetKind.TEXT_VIEW: emit_text_view,
    WidgetKind.SCROLL: emit_scroll_view,
    WidgetKind.SCROLL_VIEW: emit_scroll_view,
    WidgetKind.COLLECTION: emit_collection,
    WidgetKind.TABLE: emit_collection,
    WidgetKind.SWITCH: emit_switch,
    WidgetKind.TOGGLE: emit_switch,
    WidgetKind.CHECK_BOX: emit_checkbox,
    WidgetKind.CHECK: emit_checkbox,
    WidgetKind.CHECKBOX: emit_checkbox,
    WidgetKind.SLIDER: emit_slider,
    WidgetKind.PROGRESS: emit_progress,
    WidgetKind.INDICATOR: emit_indicator,
    WidgetKind.SELECT_BOX: emit_select_box,
    WidgetKind.GRADIENT_VIEW: emit_gradient_view,
    WidgetKind.BLUR: emit_blur,
    WidgetKind.CIRCLE_VIEW: emit_circle_view,
    WidgetKind.ICON_LABEL: emit_icon_label,
    WidgetKind.SEGMENT: emit_segment,
    WidgetKind.RADIO: emit_radio,
    WidgetKind.TAB_VIEW: emit_tab_view,
    WidgetKind.WEB: emit_web,
    WidgetKind.INCLUDE: emit_include,
}


def resolve_emitter(node: ComponentNode, ctx: EmitContext) -> Emitter:
    """Emitter for ``node.type``; extensions first, then built-ins, then View."""
    extension = ctx.registry.lookup(node.type)
    if extension is not None:
        return extension
    kind = WidgetKind.parse(node.type)
    if kind is not None:
        return BUILTIN_EMITTERS[kind]
    if node.type is not None:
        ctx.record("unknown-type", f"Unknown component type '{node.type}'; rendering as View", node)
    return emit_view


__all__ = ["BUILTIN_EMITTERS", "WidgetKind", "resolve_emitter"]
