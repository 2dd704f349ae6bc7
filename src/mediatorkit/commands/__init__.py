"""Subcommand modules for mediatorkit.

Deferred imports keep ``mediatorkit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from mediatorkit.commands.demo import demo
    from mediatorkit.commands.registry import registry

    cli.add_command(registry)
    cli.add_command(demo)
