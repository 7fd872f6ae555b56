"""Built-in binding lint rules."""

from __future__ import annotations

import json
import re
from typing import List, Optional, Tuple

from ..bindings import CANONICAL_PREFIX, LEGACY_PREFIXES, is_event_attribute
from ..schema import SchemaKind
from .core import BindingSite, LintContext, LintFinding, LintSeverity
from .rules import LintRule

_STRING_LITERAL = re.compile(r"'[^']*'|\"[^\"]*\"")
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")

# Checked in order; only the first matching construct is reported.
BUSINESS_LOGIC_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]", str], ...] = (
    ("ternary", re.compile(r"\?(?!\?).*:"),
     "ternary operator (? :); compute the value in the view model"),
    ("comparison", re.compile(r"===|!==|==|!=|<=|>=|<|>"),
     "comparison operator; move the comparison to the view model"),
    ("logical", re.compile(r"&&|\|\|"),
     "logical operator (&&, ||); move the logic to the view model"),
    ("arithmetic", re.compile(r"\+\+|--|[+*/%]|(?<=[\w)\]])\s*-\s*(?=[\w(])"),
     "arithmetic operator; compute the value in the view model"),
    ("nil-coalescing", re.compile(r"\?\?"),
     "nil-coalescing operator (??); handle missing values in the view model"),
    ("call", re.compile(r"[\w$)]\s*\(\s*[^)\s]"),
     "function call with arguments; move the call to the view model"),
)

BOOLEAN_ATTRIBUTES = frozenset({
    "hidden", "enabled", "disabled", "checked", "isOn", "selected",
    "clipToBounds", "secure", "editable", "visibility",
})
ARRAY_ATTRIBUTES = frozenset({"items", "sections", "options", "tabs"})
KEYWORDS = frozenset({"true", "false", "null", "undefined", "visible", "gone", "invisible"})


def strip_literals(expression: str) -> str:
    return _STRING_LITERAL.sub("", expression)


def business_logic(expression: str) -> Optional[Tuple[str, str]]:
    """``(construct, message)`` for the first logic construct in ``expression``."""
    stripped = strip_literals(expression)
    for construct, pattern, message in BUSINESS_LOGIC_PATTERNS:
        if pattern.search(stripped):
            return construct, message
    return None


def leading_identifier(expression: str) -> Optional[str]:
    """First identifier of a binding body, after negation and legacy prefixes."""
    body = strip_literals(expression).strip().lstrip("!").strip()
    for prefix in LEGACY_PREFIXES:
        if body.startswith(prefix):
            body = body[len(prefix):]
            break
    match = _IDENTIFIER.match(body)
    if match is None or match.group(0) in KEYWORDS:
        return None
    return match.group(0)


def infer_kind(name: str, attribute: str) -> SchemaKind:
    """Kind to suggest for an undeclared name, from its attribute first, then its spelling."""
    if attribute in BOOLEAN_ATTRIBUTES:
        return SchemaKind.BOOLEAN
    if attribute in ARRAY_ATTRIBUTES:
        return SchemaKind.ARRAY
    if is_event_attribute(attribute):
        return SchemaKind.FUNCTION
    if re.match(r"^on[A-Z]", name):
        return SchemaKind.FUNCTION
    if re.match(r"^(is|has|can|should)[A-Z]", name):
        return SchemaKind.BOOLEAN
    if name.endswith(("Items", "List", "Options")):
        return SchemaKind.ARRAY
    if name.endswith(("Count", "Index")):
        return SchemaKind.NUMBER
    return SchemaKind.STRING


def _describe(site: BindingSite) -> str:
    return f"Binding '@{{{site.expression}}}' in '{site.component_type}.{site.path}'"


class NamespacePrefixRule(LintRule):
    """Flag bindings that reach through the view-model namespace."""

    def __init__(self):
        super().__init__(
            rule_id="namespace-prefix",
            description="Bindings must not use the viewModel. prefix",
        )

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = []
        for site in context.bindings:
            body = site.expression.lstrip("!").strip()
            if not body.startswith("viewModel."):
                continue
            findings.append(LintFinding(
                rule_id=self.rule_id,
                message=f"{_describe(site)} uses the viewModel. prefix",
                severity=LintSeverity.WARNING,
                location=context.location_for(site),
                suggestion=f"Use @{{{body[len('viewModel.'):]}}} instead",
            ))
        return findings


class BindingLogicRule(LintRule):
    """Flag operators and calls inside bindings, declared or not."""

    def __init__(self):
        super().__init__(
            rule_id="binding-logic",
            description="Bindings must be plain property paths without business logic",
        )

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = []
        for site in context.bindings:
            detected = business_logic(site.expression)
            if detected is None:
                continue
            construct, message = detected
            findings.append(LintFinding(
                rule_id=self.rule_id,
                message=f"{_describe(site)} contains {message}",
                severity=LintSeverity.WARNING,
                location=context.location_for(site),
                suggestion=f"Expose a computed property instead of the {construct} expression",
            ))
        return findings


class UndeclaredBindingRule(LintRule):
    """Flag bindings whose leading name has no declaration in scope."""

    def __init__(self):
        super().__init__(
            rule_id="undeclared-binding",
            description="Bound names must be declared in a data list in scope",
        )

    def check(self, context: LintContext) -> List[LintFinding]:
        findings = []
        for site in context.bindings:
            body = site.expression.lstrip("!").strip()
            # Collection cells bind against their own item.
            if body.startswith(CANONICAL_PREFIX):
                continue
            name = leading_identifier(site.expression)
            if name is None or name in site.scope:
                continue
            kind = infer_kind(name, site.attribute)
            declaration = json.dumps({"name": name, "class": kind.value})
            findings.append(LintFinding(
                rule_id=self.rule_id,
                message=f"{_describe(site)} references '{name}', which is not declared in data",
                severity=LintSeverity.WARNING,
                location=context.location_for(site),
                suggestion=f"Add {declaration}",
                suggested_kind=kind,
            ))
        return findings


def get_default_rules() -> List[LintRule]:
    """Rules run by ``BindingLinter`` when none are given."""
    return [
        NamespacePrefixRule(),
        BindingLogicRule(),
        UndeclaredBindingRule(),
    ]
