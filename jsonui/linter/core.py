"""Core binding linter infrastructure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterator, List, Optional, Tuple

from ..bindings import BINDING_PATTERN
from ..errors import JsonUIError
from ..schema import SchemaKind
from ..tree import ComponentNode, parse_document
from .rules import LintRule


class LintSeverity(Enum):
    """Severity levels for lint findings; binding findings are advisory warnings."""
    WARNING = "warning"


@dataclass
class LintFinding:
    """A single lint finding."""
    rule_id: str
    message: str
    severity: LintSeverity
    location: Optional[str] = None
    suggestion: Optional[str] = None
    suggested_kind: Optional[SchemaKind] = None

    def format(self) -> str:
        where = f"[{self.location}] " if self.location else ""
        text = f"{where}{self.message}"
        if self.suggestion:
            text += f" ({self.suggestion})"
        return text


@dataclass
class LintResult:
    """Result of linting one document."""
    findings: List[LintFinding]
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    document: Optional[str] = None

    def success(self) -> bool:
        """Check if linting completed without errors."""
        return len(self.errors) == 0

    def has_issues(self) -> bool:
        return len(self.findings) > 0

    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity == LintSeverity.WARNING)

    def by_rule(self, rule_id: str) -> List[LintFinding]:
        return [finding for finding in self.findings if finding.rule_id == rule_id]


@dataclass(frozen=True)
class BindingSite:
    """One ``@{...}`` occurrence and the names declared in scope at that node."""
    node: ComponentNode
    attribute: str
    path: str
    expression: str
    scope: FrozenSet[str]

    @property
    def component_type(self) -> str:
        return self.node.type or "Unknown"

    @property
    def location(self) -> str:
        return f"{self.node.location}.{self.path}"


def _scope_names(node: ComponentNode) -> List[str]:
    # View-model handles are not bindable data.
    names = [entry.name for entry in node.declarations if not entry.is_view_model_handle]
    for child in node.children:
        if child.is_marker:
            names.extend(entry.name for entry in child.declarations if not entry.is_view_model_handle)
    return names


def _value_sites(value: Any, path: str) -> Iterator[Tuple[str, str]]:
    if isinstance(value, str):
        for match in BINDING_PATTERN.finditer(value):
            yield path, match.group(1).strip()
    elif isinstance(value, dict):
        for key, item in value.items():
            yield from _value_sites(item, f"{path}.{key}")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            yield from _value_sites(item, f"{path}[{index}]")


def _collect_sites(node: ComponentNode, inherited: FrozenSet[str], sites: List[BindingSite]) -> None:
    if node.is_marker:
        return
    scope = inherited | frozenset(_scope_names(node))
    for attribute, value in node.attributes.items():
        for path, expression in _value_sites(value, attribute):
            sites.append(BindingSite(node, attribute, path, expression, scope))
    for child in node.children:
        _collect_sites(child, scope, sites)


@dataclass
class LintContext:
    """Context provided to lint rules for analysis."""
    root: ComponentNode
    document: Optional[str] = None
    bindings: List[BindingSite] = field(default_factory=list)

    @classmethod
    def build(cls, root: ComponentNode, document: Optional[str] = None) -> "LintContext":
        sites: List[BindingSite] = []
        _collect_sites(root, frozenset(), sites)
        return cls(root=root, document=document, bindings=sites)

    @property
    def has_schema(self) -> bool:
        """True when any node declares at least one bindable (non view-model) name."""
        return any(
            not entry.is_view_model_handle
            for node in self.root.walk()
            for entry in node.declarations
        )

    def location_for(self, site: BindingSite) -> str:
        return f"{self.document}:{site.location}" if self.document else site.location


class BindingLinter:
    """
    Static checker for the bindings of one resolved layout.

    Documents with no declared data are assumed to be bound externally
    and are skipped entirely.  Rule failures are logged and recorded in
    ``LintResult.warnings``; the linter never raises.
    """

    def __init__(self, rules: Optional[List[LintRule]] = None):
        if rules is None:
            from .builtin_rules import get_default_rules
            rules = get_default_rules()
        self.rules = rules
        self.logger = logging.getLogger(__name__)

    def lint_tree(self, root: ComponentNode, document: Optional[str] = None) -> LintResult:
        findings: List[LintFinding] = []
        warnings: List[str] = []
        context = LintContext.build(root, document)
        if not context.has_schema:
            self.logger.debug("Skipping binding checks for %s: no data declarations", document or "document")
            return LintResult(findings=findings, document=document)

        for rule in self.rules:
            try:
                findings.extend(rule.check(context))
            except Exception as exc:
                self.logger.warning(f"Rule {rule.rule_id} failed: {exc}")
                warnings.append(f"Rule {rule.rule_id} encountered an error: {exc}")

        return LintResult(findings=findings, warnings=warnings, document=document)

    def lint_document(self, source_text: str, file_path: Optional[str] = None) -> LintResult:
        """Parse and lint raw layout JSON; parse failures land in ``errors``."""
        try:
            root = parse_document(source_text, path=file_path)
        except JsonUIError as exc:
            return LintResult(findings=[], errors=[f"Parse error: {exc.message}"], document=file_path)
        return self.lint_tree(root, file_path)
