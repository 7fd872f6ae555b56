"""
Output formatting for CLI operations.

Summaries and findings are rendered with rich; every user-supplied string
goes through ``Text`` so brackets in layout paths are never read as markup.
"""

from typing import Iterable, List

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..compiler import BatchResult
from ..errors import Diagnostic
from ..linter import LintResult

console = Console()


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Compiled 3 layouts")  # doctest: +SKIP
        ✓ Compiled 3 layouts
    """
    console.print(Text("✓ ", style="green") + Text(message))


def print_error(message: str) -> None:
    console.print(Text("✗ ", style="red") + Text(message))


def diagnostics_table(diagnostics: Iterable[Diagnostic]) -> Table:
    table = Table(title="Diagnostics")
    table.add_column("Code", style="yellow", no_wrap=True)
    table.add_column("Location", style="cyan")
    table.add_column("Message")
    for diagnostic in diagnostics:
        table.add_row(Text(diagnostic.code), Text(diagnostic.location or "-"), Text(diagnostic.message))
    return table


def lint_table(results: Iterable[LintResult]) -> Table:
    table = Table(title="Binding warnings")
    table.add_column("Rule", style="magenta", no_wrap=True)
    table.add_column("Location", style="cyan")
    table.add_column("Message")
    table.add_column("Suggestion", style="green")
    for result in results:
        for finding in result.findings:
            table.add_row(
                Text(finding.rule_id),
                Text(finding.location or result.document or "-"),
                Text(finding.message),
                Text(finding.suggestion or ""),
            )
    return table


def print_diagnostics(diagnostics: List[Diagnostic]) -> None:
    if diagnostics:
        console.print(diagnostics_table(diagnostics))


def print_lint_results(results: List[LintResult]) -> None:
    """Binding warnings as a table; advisory only, never affects the exit status."""
    if any(result.findings for result in results):
        console.print(lint_table(results))
    for result in results:
        for error in result.errors:
            print_error(f"{result.document or 'layout'}: {error}")


def print_build_summary(result: BatchResult) -> None:
    print_diagnostics(result.all_diagnostics())
    print_lint_results([document.lint for document in result.compiled if document.lint is not None])
    for failure in result.failures:
        print_error(f"{failure.path}: {failure.error.message}")
    summary = f"Compiled {len(result.compiled)} layout(s), wrote {len(result.written)} file(s)"
    if result.failures:
        print_error(f"{summary}; {len(result.failures)} layout(s) failed")
    else:
        print_success(summary)
