"""
CLI module for txtplate.

Provides the command-line interface using Click.
"""

from txtplate.cli.main import cli, main

__all__ = ["main", "cli"]
