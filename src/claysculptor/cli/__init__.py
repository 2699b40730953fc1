"""
Command-line interface for claysculptor.

This package contains the Click command, the Rich progress output and the
interactive session.
"""

from claysculptor.cli.commands import cli, main

__all__ = ["cli", "main"]
