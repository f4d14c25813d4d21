"""Command line interface."""

from teamboard.cli.commands.root import cli

__all__ = ["cli"]
