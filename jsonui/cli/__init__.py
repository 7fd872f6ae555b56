"""
jsonui CLI entry point.

Dispatches the ``build`` and ``validate`` subcommands to the command
modules after resolving the workspace configuration.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from .commands import cmd_build, cmd_validate
from .context import load_cli_context
from .errors import handle_cli_exception


def _configure_runtime_logging(args) -> None:
    """Configure the level of the ``jsonui`` logger from the CLI or JSONUI_LOG_LEVEL."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('JSONUI_LOG_LEVEL', 'warning')
    ).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }

    numeric_level = level_map.get(log_level, logging.WARNING)

    package_logger = logging.getLogger('jsonui')
    package_logger.setLevel(numeric_level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        package_logger.propagate = False


def build_parser(workspace_root: Path, config_path: Optional[Path]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compile JSON layout documents into React components with Tailwind classes",
        prog="jsonui"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=str(config_path) if config_path else None,
        help='Path to a jsonui.config.json or jsonui.toml file'
    )
    parser.add_argument(
        '--workspace',
        default=str(workspace_root),
        help='Workspace root directory (defaults to current working directory)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set JSONUI_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level for compiler log statements (or set JSONUI_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    build = subparsers.add_parser(
        'build',
        help='Compile every layout in the workspace'
    )
    build.add_argument(
        'files',
        nargs='*',
        help='Layout files to compile (default: every layout under layouts_directory)'
    )
    build.add_argument(
        '--js',
        action='store_true',
        help='Emit .jsx/.js instead of .tsx/.ts'
    )
    build.add_argument(
        '--no-validate',
        action='store_true',
        help='Skip binding checks'
    )
    build.add_argument(
        '--quiet',
        action='store_true',
        help='Only report failures'
    )
    build.set_defaults(func=cmd_build)

    validate = subparsers.add_parser(
        'validate',
        help='Check layouts for style and binding problems without writing output'
    )
    validate.add_argument(
        'files',
        nargs='*',
        help='Layout files to check (default: every layout under layouts_directory)'
    )
    validate.add_argument(
        '--strict',
        action='store_true',
        help='Exit non-zero when any warning is reported'
    )
    validate.set_defaults(func=cmd_validate)
    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        Build the current workspace:
        >>> main(['build'])  # doctest: +SKIP

        Check one layout:
        >>> main(['validate', 'src/Layouts/Login.json'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pre-parse to locate the workspace and its configuration
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument('--config')
    pre_parser.add_argument('--workspace')
    pre_args, _ = pre_parser.parse_known_args(argv)

    workspace_root = (
        Path(pre_args.workspace).resolve()
        if pre_args.workspace
        else Path.cwd()
    )
    config_path = (
        Path(pre_args.config).resolve()
        if pre_args.config
        else None
    )

    parser = build_parser(workspace_root, config_path)
    args = parser.parse_args(argv)
    args.verbose = getattr(args, "verbose", False)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    _configure_runtime_logging(args)

    try:
        args.cli_context = load_cli_context(workspace_root, config_path)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    args.func(args)


if __name__ == '__main__':  # pragma: no cover
    main()
