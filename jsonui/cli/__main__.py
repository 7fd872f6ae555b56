"""
Main entry point for the jsonui CLI when run as a module.

This allows the CLI to be executed using:
    python -m jsonui.cli

or the equivalent console script entry point.
"""

from . import main

if __name__ == '__main__':
    main()
