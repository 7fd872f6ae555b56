"""Image and embedded-content emitters."""

from __future__ import annotations

from typing import Any, List, Optional

from ...bindings import render_attribute
from ...tree import ComponentNode
from ..context import EmitContext
from ..registry import ChildEmitter
from .base import build_parts, event_attributes, render_element

CONTENT_MODES = {
    "aspectfit": "object-contain",
    "scaleaspectfit": "object-contain",
    "fitcenter": "object-contain",
    "aspectfill": "object-cover",
    "scaleaspectfill": "object-cover",
    "centercrop": "object-cover",
    "scaletofill": "object-fill",
    "fitxy": "object-fill",
    "center": "object-none",
}


def content_mode_class(node: ComponentNode, default: Optional[str] = "object-cover") -> Optional[str]:
    mode = node.get("contentMode", node.get("scaleType"))
    if not isinstance(mode, str):
        return default
    return CONTENT_MODES.get(mode.lower(), default)


def _source(node: ComponentNode, *names: str) -> Any:
    for name in names:
        value = node.get(name)
        if value is not None:
            return value
    return None


def _image_parts(node: ComponentNode, ctx: EmitContext, trailing: List[Optional[str]]):
    if node.get("onClick") is not None or node.get("onclick") is not None or node.get("canTap"):
        trailing.append("cursor-pointer")
    parts = build_parts(node, ctx, trailing=trailing)
    parts.attributes.append(render_attribute("src", _source(node, "src", "url", "imageUrl")))
    parts.attributes.append(render_attribute("alt", node.get("alt", node.get("accessibilityLabel", ""))))
    return parts


def emit_image(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    trailing = [content_mode_class(node)]
    if node.type == "CircleImage" or node.get("circle") is True:
        trailing.append("rounded-full")
    parts = _image_parts(node, ctx, trailing)
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("img", node, parts, indent)


def emit_network_image(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    trailing = [content_mode_class(node)]
    if node.get("circle") is True or node.get("circleImage") is True:
        trailing.append("rounded-full")
    parts = _image_parts(node, ctx, trailing)
    parts.attributes.append(' loading="lazy"')
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("img", node, parts, indent)


# =============================================================================
# WEB
# =============================================================================

def _sandbox(node: ComponentNode) -> str:
    if node.get("sandbox") is False:
        return ""
    permissions = []
    if node.get("javaScriptEnabled") is not False:
        permissions.append("allow-scripts")
    permissions.append("allow-same-origin")
    if node.get("javaScriptCanOpenWindowsAutomatically"):
        permissions.append("allow-popups")
    permissions.append("allow-forms")
    if node.get("allowModals"):
        permissions.append("allow-modals")
    if node.get("allowDownloads"):
        permissions.append("allow-downloads")
    return f' sandbox="{" ".join(permissions)}"'


def _allow(node: ComponentNode) -> str:
    allows = []
    if node.get("allowsInlineMediaPlayback"):
        allows.append("autoplay")
    if node.get("allowsFullScreen") is not False:
        allows.append("fullscreen")
    if node.get("allowCamera"):
        allows.append("camera")
    if node.get("allowMicrophone"):
        allows.append("microphone")
    if node.get("allowGeolocation"):
        allows.append("geolocation")
    return f' allow="{"; ".join(allows)}"' if allows else ""


def emit_web(node: ComponentNode, ctx: EmitContext, indent: int, emit: ChildEmitter) -> str:
    trailing = ["border-0"]
    if node.get("scrollEnabled") is False:
        trailing.append("overflow-hidden")
    parts = build_parts(node, ctx, trailing=trailing)
    url = _source(node, "url", "src")
    if url is not None:
        parts.attributes.append(render_attribute("src", url))
    else:
        parts.attributes.append(render_attribute("srcDoc", _source(node, "html", "htmlContent")))
    parts.attributes.append(render_attribute("title", node.get("title", node.get("accessibilityLabel"))))
    parts.attributes.append(_sandbox(node))
    parts.attributes.append(_allow(node))
    if node.get("lazyLoad") or node.get("loading"):
        parts.attributes.append(' loading="lazy"')
    parts.attributes.extend(event_attributes(node, ctx))
    return render_element("iframe", node, parts, indent)
