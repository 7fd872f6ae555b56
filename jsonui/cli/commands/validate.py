"""
Validate command implementation.

Runs parsing, style resolution and the binding linter over layout files
without writing anything.
"""

import argparse
from pathlib import Path

from ...compiler import LayoutCompiler, discover_layouts, known_document_names
from ...errors import JsonUIError
from ..context import get_cli_context
from ..errors import CLIFileNotFoundError, CLIValidationError, handle_cli_exception
from ..output import print_diagnostics, print_error, print_lint_results, print_success


def cmd_validate(args: argparse.Namespace) -> None:
    """
    Handle the 'validate' subcommand.

    Binding warnings are advisory: the exit status is non-zero only for
    layouts that cannot be parsed, or for any warning under ``--strict``.
    """
    try:
        ctx = get_cli_context(args)
        config = ctx.config
        files = getattr(args, "files", None) or []
        paths = [Path(name).resolve() for name in files] if files else discover_layouts(config)
        for path in paths:
            if not path.is_file():
                raise CLIFileNotFoundError(f"Layout file not found: {path}")
        if not paths:
            raise CLIValidationError(
                "No layouts to validate",
                hint="Pass layout files or configure layouts_directory",
            )

        compiler = LayoutCompiler.from_config(
            config,
            validate=True,
            known_documents=known_document_names(config, discover_layouts(config) + paths),
        )
        print_diagnostics(compiler.diagnostics)

        failed = 0
        warnings = 0
        for path in paths:
            try:
                document = compiler.compile_file(path)
            except JsonUIError as exc:
                failed += 1
                print_error(f"{path}: {exc.format()}")
                continue
            print_diagnostics(document.diagnostics)
            if document.lint is not None:
                print_lint_results([document.lint])
                warnings += document.lint.warning_count()
            warnings += len(document.diagnostics)

        if failed:
            raise CLIValidationError(f"{failed} layout(s) could not be parsed")
        if warnings and getattr(args, "strict", False):
            raise CLIValidationError(f"{warnings} warning(s) reported", hint="Fix the warnings or drop --strict")
        print_success(f"Validated {len(paths)} layout(s), {warnings} warning(s)")

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
