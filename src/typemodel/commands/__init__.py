"""Subcommand modules for typemodel.

Provides register_commands() which uses deferred imports to keep
``typemodel --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``resolve`` group and the standalone ``inspect`` command."""
    from typemodel.commands.inspect import inspect_cmd
    from typemodel.commands.resolve import resolve

    cli.add_command(inspect_cmd)
    cli.add_command(resolve)
