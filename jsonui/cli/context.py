"""
CLI context management.

The workspace root and its parsed configuration are resolved once in
``main`` and attached to the argparse namespace for the command handlers.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import CompilerConfig, load_config
from ..errors import ConfigError
from .errors import CLIConfigError, wrap_exception


@dataclass
class CLIContext:
    """
    Shared context resolved from workspace configuration.

    Attributes:
        workspace_root: Root directory of the workspace
        config: Parsed compiler configuration
    """

    workspace_root: Path
    config: CompilerConfig


def load_cli_context(workspace_root: Path, config_path: Optional[Path] = None) -> CLIContext:
    try:
        config = load_config(workspace_root, config_path)
    except ConfigError as exc:
        raise wrap_exception(
            exc,
            message=exc.format(),
            error_class=CLIConfigError,
            context={'workspace': str(workspace_root)},
        ) from exc
    return CLIContext(workspace_root=workspace_root, config=config)


def get_cli_context(args: argparse.Namespace) -> CLIContext:
    """
    Retrieve CLIContext from parsed arguments.

    Raises:
        CLIConfigError: If context was not initialized
    """
    ctx = getattr(args, "cli_context", None)
    if ctx is None:
        raise CLIConfigError(
            "CLI context was not initialized before command execution",
            hint="This is an internal error - please report it",
            code="CLI_CONTEXT_NOT_INITIALIZED"
        )
    return ctx
