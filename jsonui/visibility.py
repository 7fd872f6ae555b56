"""Visibility bindings to conditional-render directives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from .bindings import binding_body, is_binding, is_path, resolve_path


class VisibilityKind(str, Enum):
    HIDE_ENTIRELY = "hide_entirely"  # unmount
    FADE_OUT = "fade_out"  # keep mounted, toggle opacity


@dataclass(frozen=True)
class VisibilityDirective:
    """How to render a node whose visibility is bound.

    ``condition`` is the expression under which the node is shown.
    ``inverted`` is True when the binding's truthy branch hides the node,
    in which case ``condition`` is already negated.
    """

    kind: VisibilityKind
    condition: str
    inverted: bool = False


_TERNARY = re.compile(
    r"""^(?P<cond>.+?)\s*\?\s*
        (?P<q1>['"])\.?(?P<a>\w+)(?P=q1)\s*:\s*
        (?P<q2>['"])\.?(?P<b>\w+)(?P=q2)\s*$""",
    re.VERBOSE,
)

_OUTCOMES = {
    ("visible", "gone"): (VisibilityKind.HIDE_ENTIRELY, False),
    ("gone", "visible"): (VisibilityKind.HIDE_ENTIRELY, True),
    ("visible", "invisible"): (VisibilityKind.FADE_OUT, False),
    ("invisible", "visible"): (VisibilityKind.FADE_OUT, True),
}


def negate(condition: str) -> str:
    if condition.startswith("!") and not condition.startswith("!("):
        return condition[1:]
    return f"!{condition}"


def _resolve_condition(expression: str) -> Optional[str]:
    expression = expression.strip()
    negated = expression.startswith("!")
    path = expression[1:].strip() if negated else expression
    if not is_path(path):
        return None
    accessor = resolve_path(path)
    return f"!{accessor}" if negated else accessor


def resolve_visibility(value: Any) -> Optional[VisibilityDirective]:
    """Parse a ``visibility`` binding; ``None`` means always render."""
    body = binding_body(value)
    if body is None:
        return None

    condition = _resolve_condition(body)
    if condition is not None:
        return VisibilityDirective(VisibilityKind.HIDE_ENTIRELY, condition, inverted=False)

    match = _TERNARY.match(body)
    if not match:
        return None
    outcome = _OUTCOMES.get((match.group("a"), match.group("b")))
    if outcome is None:
        return None
    condition = _resolve_condition(match.group("cond"))
    if condition is None:
        return None
    kind, inverted = outcome
    return VisibilityDirective(kind, negate(condition) if inverted else condition, inverted)


def resolve_hidden(value: Any) -> Optional[VisibilityDirective]:
    """``hidden: "@{flag}"`` hides the node while ``flag`` is truthy."""
    body = binding_body(value)
    if body is None:
        return None
    condition = _resolve_condition(body)
    if condition is None:
        return None
    return VisibilityDirective(VisibilityKind.HIDE_ENTIRELY, negate(condition), inverted=True)


def directive_for(attributes: Any) -> Optional[VisibilityDirective]:
    directive = resolve_visibility(attributes.get("visibility"))
    if directive is None:
        directive = resolve_hidden(attributes.get("hidden"))
    return directive


def static_visibility_classes(attributes: Any) -> List[str]:
    """Class tokens for literal (unbound) visibility values."""
    tokens: List[str] = []
    visibility = attributes.get("visibility")
    if isinstance(visibility, str) and not is_binding(visibility):
        state = visibility.lstrip(".")
        if state == "gone":
            tokens.append("hidden")
        elif state == "invisible":
            tokens.append("invisible")
    if attributes.get("hidden") is True:
        tokens.append("hidden")
    return tokens


def fade_style(directive: VisibilityDirective) -> str:
    return f"{directive.condition} ? 1 : 0"


def wrap_hide_entirely(markup: str, directive: VisibilityDirective, indent: int) -> str:
    pad = " " * indent
    return f"{pad}{{{directive.condition} && (\n{markup}\n{pad})}}"
