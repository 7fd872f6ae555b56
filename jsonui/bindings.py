"""Binding expression grammar and accessor synthesis.

Layouts reference runtime data with ``@{path}``.  Every resolved accessor is
rooted at the ``data.`` namespace::

    @{title}            -> data.title
    @{data.title}       -> data.title
    @{viewModel.title}  -> data.title
    @{!isLoading}       -> !data.isLoading

Anything richer than a property path (operators, calls, ternaries) is an
``InvalidBinding``; it still compiles, as ``undefined`` with a comment, so
logic stays out of the layout layer.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional

CANONICAL_PREFIX = "data."
LEGACY_PREFIXES = ("viewModel.data.", "viewModel.", "this.", "props.")
VIEW_MODEL_NAMESPACE = "viewModel"

BINDING_PATTERN = re.compile(r"@\{([^{}]*)\}")
_WHOLE_BINDING = re.compile(r"^@\{([^{}]*)\}$")
_IDENTIFIER = r"[A-Za-z_$][\w$]*"
PATH_PATTERN = re.compile(rf"^{_IDENTIFIER}(?:\[\d+\])?(?:\.{_IDENTIFIER}(?:\[\d+\])?)*$")
_BARE_IDENTIFIER = re.compile(rf"^{_IDENTIFIER}$")

CAMEL_EVENT = re.compile(r"^on[A-Z]\w*$")
LOWER_EVENT = re.compile(r"^on[a-z]+$")

_VERBATIM_TRIGGERS = ("{", "}", "<", ">")


class BindingKind(str, Enum):
    LITERAL = "literal"
    DATA = "data"
    ACTION = "action"
    INVALID = "invalid"


@dataclass(frozen=True)
class BindingExpression:
    kind: BindingKind
    raw: Any
    path: Optional[str] = None
    accessor: Optional[str] = None
    reason: Optional[str] = None
    negated: bool = False

    @property
    def is_valid(self) -> bool:
        return self.kind is not BindingKind.INVALID

    def render(self) -> str:
        """JavaScript expression for this binding."""
        if self.kind is BindingKind.INVALID:
            body = str(self.raw).replace("*/", "* /")
            return f"undefined /* unsupported binding: {body} */"
        if self.kind is BindingKind.LITERAL:
            return json.dumps(self.raw)
        return self.accessor or "undefined"


# =============================================================================
# DETECTION
# =============================================================================

def is_binding(value: Any) -> bool:
    """True when the whole value is a single ``@{...}`` binding."""
    return isinstance(value, str) and _WHOLE_BINDING.match(value.strip()) is not None


def contains_binding(value: Any) -> bool:
    return isinstance(value, str) and BINDING_PATTERN.search(value) is not None


def binding_body(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    match = _WHOLE_BINDING.match(value.strip())
    return match.group(1).strip() if match else None


def is_path(expression: str) -> bool:
    return PATH_PATTERN.match(expression.strip()) is not None


# =============================================================================
# RESOLUTION
# =============================================================================

def resolve_path(path: str) -> str:
    """Rewrite a property path onto the canonical ``data.`` namespace.

    Idempotent: a path that already carries the canonical prefix passes
    through unchanged.
    """
    path = path.strip()
    if path.startswith(CANONICAL_PREFIX):
        return path
    for prefix in LEGACY_PREFIXES:
        if path.startswith(prefix):
            return CANONICAL_PREFIX + path[len(prefix):]
    return CANONICAL_PREFIX + path


def parse_binding(value: Any) -> BindingExpression:
    """Classify a raw attribute value as literal, data binding or invalid."""
    body = binding_body(value)
    if body is None:
        return BindingExpression(kind=BindingKind.LITERAL, raw=value)
    negated = body.startswith("!")
    path = body[1:].strip() if negated else body
    if not path or not is_path(path):
        reason = "empty binding" if not body else "only property paths are supported"
        return BindingExpression(kind=BindingKind.INVALID, raw=body, reason=reason)
    accessor = resolve_path(path)
    return BindingExpression(
        kind=BindingKind.DATA,
        raw=body,
        path=path,
        accessor=f"!{accessor}" if negated else accessor,
        negated=negated,
    )


def resolve_expression(value: Any) -> str:
    """JavaScript expression for an attribute value, bound or literal."""
    if is_binding(value):
        return parse_binding(value).render()
    if isinstance(value, str) and contains_binding(value):
        return template_literal(value)
    return json.dumps(value)


def template_literal(value: str) -> str:
    """Render literal text with embedded bindings as a JS template literal."""
    parts: List[str] = []
    position = 0
    for match in BINDING_PATTERN.finditer(value):
        parts.append(_escape_template(value[position:match.start()]))
        parts.append("${" + parse_binding(match.group(0)).render() + "}")
        position = match.end()
    parts.append(_escape_template(value[position:]))
    return "`" + "".join(parts) + "`"


def _escape_template(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


# =============================================================================
# TEXT CONTENT
# =============================================================================

def escape_text(segment: str) -> str:
    """Escape one literal text segment for use as element content."""
    if any(trigger in segment for trigger in _VERBATIM_TRIGGERS):
        return "{`" + _escape_template(segment) + "`}"
    return segment


def _render_line(line: str) -> str:
    pieces: List[str] = []
    position = 0
    for match in BINDING_PATTERN.finditer(line):
        if match.start() > position:
            pieces.append(escape_text(line[position:match.start()]))
        pieces.append("{" + parse_binding(match.group(0)).render() + "}")
        position = match.end()
    if position < len(line):
        pieces.append(escape_text(line[position:]))
    return "".join(pieces)


def render_text(value: Any) -> str:
    """Element content for a text attribute.

    Multi-line literals become one segment per line separated by
    ``<br />``; each segment is escaped independently.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value).lower() if isinstance(value, bool) else str(value)
    lines = value.split("\n")
    return "<br />".join(_render_line(line) for line in lines)


# =============================================================================
# ELEMENT ATTRIBUTES
# =============================================================================

def render_attribute(name: str, value: Any) -> str:
    """`` name="literal"`` or `` name={expression}`` for a passthrough attribute."""
    if value is None:
        return ""
    if isinstance(value, str) and not contains_binding(value):
        if '"' in value or "{" in value or "\n" in value:
            return f" {name}={{{json.dumps(value)}}}"
        return f' {name}="{value}"'
    if isinstance(value, bool) and value:
        return f" {name}"
    return f" {name}={{{resolve_expression(value)}}}"


# =============================================================================
# ACTIONS
# =============================================================================

def jsx_event_name(attribute: str) -> str:
    """``onclick`` -> ``onClick``; camelCase names pass through."""
    if LOWER_EVENT.match(attribute):
        return "on" + attribute[2:].capitalize()
    return attribute


def is_event_attribute(attribute: str) -> bool:
    return bool(CAMEL_EVENT.match(attribute) or LOWER_EVENT.match(attribute))


def parse_action(attribute: str, value: Any) -> BindingExpression:
    """Resolve an event attribute value.

    The attribute casing selects the legal form: camelCase (``onClick``)
    takes ``@{handler}``; all-lowercase (``onclick``) takes a bare method
    name dispatched on ``viewModel``.  A ``{"kind": "link"}`` descriptor
    navigates instead.
    """
    if isinstance(value, Mapping):
        return _link_action(value)

    if CAMEL_EVENT.match(attribute):
        body = binding_body(value)
        if body is None:
            return BindingExpression(
                kind=BindingKind.INVALID,
                raw=value,
                reason=f"{attribute} requires binding syntax @{{handler}}, got {json.dumps(value)}",
            )
        if not is_path(body):
            return BindingExpression(
                kind=BindingKind.INVALID,
                raw=value,
                reason=f"{attribute} handler must be a property path, got {json.dumps(value)}",
            )
        return BindingExpression(
            kind=BindingKind.ACTION,
            raw=value,
            path=body,
            accessor=resolve_path(body),
        )

    if LOWER_EVENT.match(attribute):
        if not isinstance(value, str) or not _BARE_IDENTIFIER.match(value.strip()):
            return BindingExpression(
                kind=BindingKind.INVALID,
                raw=value,
                reason=f"{attribute} requires a bare method name, got {json.dumps(value)}",
            )
        name = value.strip()
        return BindingExpression(
            kind=BindingKind.ACTION,
            raw=value,
            path=name,
            accessor=f"() => {VIEW_MODEL_NAMESPACE}.{name}()",
        )

    return BindingExpression(
        kind=BindingKind.INVALID,
        raw=value,
        reason=f"{attribute} is not an event attribute",
    )


def _link_action(descriptor: Mapping[str, Any]) -> BindingExpression:
    kind = descriptor.get("kind")
    url = descriptor.get("url")
    if kind != "link" or not isinstance(url, str) or not url:
        return BindingExpression(
            kind=BindingKind.INVALID,
            raw=dict(descriptor),
            reason='action descriptors must be {"kind": "link", "url": "..."}',
        )
    if descriptor.get("target") == "_blank":
        accessor = f'() => window.open({json.dumps(url)}, "_blank")'
    else:
        accessor = f"() => window.location.assign({json.dumps(url)})"
    return BindingExpression(kind=BindingKind.ACTION, raw=dict(descriptor), path=url, accessor=accessor)


def render_action_attribute(attribute: str, value: Any, jsx_name: Optional[str] = None) -> str:
    """Event prop for an element, or an inline ``/* ERROR */`` comment."""
    action = parse_action(attribute, value)
    if action.kind is BindingKind.INVALID:
        reason = (action.reason or "invalid handler").replace("*/", "* /")
        return f" /* ERROR: {reason} */"
    return f" {jsx_name or jsx_event_name(attribute)}={{{action.accessor}}}"
