"""
Build command implementation.

This module handles the 'build' subcommand, which compiles every layout in
the workspace into React components, data modules and state hooks.
"""

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from ...compiler import compile_workspace
from ..context import get_cli_context
from ..errors import CLIBuildError, CLIFileNotFoundError, handle_cli_exception
from ..output import print_build_summary

logger = logging.getLogger(__name__)


def cmd_build(args: argparse.Namespace) -> None:
    """
    Handle the 'build' subcommand.

    This command:
    1. Resolves the workspace configuration and CLI overrides
    2. Discovers layouts below the layouts directory (or takes explicit files)
    3. Compiles and writes every layout; one failing layout never stops the rest
    4. Prints diagnostics, binding warnings and a summary

    Args:
        args: Parsed command-line arguments containing:
            - files: Explicit layout files (optional)
            - js: Emit JavaScript instead of TypeScript (optional)
            - no_validate: Skip binding checks (optional)
            - quiet: Print only failures (optional)

    Raises:
        SystemExit: When any layout failed to compile

    Examples:
        >>> cmd_build(argparse.Namespace(files=[], js=False, no_validate=False, quiet=False))  # doctest: +SKIP
        ✓ Compiled 3 layout(s), wrote 9 file(s)
    """
    try:
        ctx = get_cli_context(args)
        config = ctx.config
        if getattr(args, "js", False):
            config = replace(config, typescript=False)

        paths = None
        files = getattr(args, "files", None) or []
        if files:
            paths = []
            for name in files:
                path = Path(name).resolve()
                if not path.is_file():
                    raise CLIFileNotFoundError(
                        f"Layout file not found: {name}",
                        hint="Pass paths to existing .json layout files",
                    )
                paths.append(path)
        elif not config.layouts_path.is_dir():
            raise CLIFileNotFoundError(
                f"Layouts directory not found: {config.layouts_path}",
                hint="Set layouts_directory in jsonui.config.json or pass --workspace",
            )

        result = compile_workspace(
            config,
            validate=not getattr(args, "no_validate", False),
            paths=paths,
        )
        logger.debug("Build finished: %d compiled, %d failed", len(result.compiled), len(result.failures))

        if not getattr(args, "quiet", False) or result.failures:
            print_build_summary(result)

        if result.failures:
            raise CLIBuildError(
                f"{len(result.failures)} layout(s) failed to compile",
                context={'failed': ", ".join(str(failure.path) for failure in result.failures)},
            )

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
