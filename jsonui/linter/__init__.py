"""
Binding linter for jsonui layouts.

Checks that bindings are plain property paths over declared data, so
logic stays in the view model rather than the layout.
"""

from __future__ import annotations

__all__ = [
    "BindingLinter",
    "LintFinding",
    "LintResult",
    "LintRule",
    "LintSeverity",
    "get_default_rules",
]

from .core import BindingLinter, LintFinding, LintResult, LintSeverity
from .rules import LintRule
from .builtin_rules import get_default_rules
