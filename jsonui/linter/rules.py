"""Base class for binding lint rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .core import LintContext, LintFinding


class LintRule(ABC):
    """Base class for binding lint rules."""

    def __init__(self, rule_id: str, description: str):
        self.rule_id = rule_id
        self.description = description

    @abstractmethod
    def check(self, context: "LintContext") -> List["LintFinding"]:
        """
        Apply this rule to every binding site in the context.

        Args:
            context: Resolved tree with its binding sites and scopes

        Returns:
            List of lint findings
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rule_id!r})"
