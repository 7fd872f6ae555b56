"""
CLI command modules.

Each module handles one jsonui subcommand.
"""

from .build import cmd_build
from .validate import cmd_validate

__all__ = ["cmd_build", "cmd_validate"]
