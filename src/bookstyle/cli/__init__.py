"""Command line interface for bookstyle."""

from bookstyle.cli.main import cli

__all__ = ["cli"]
