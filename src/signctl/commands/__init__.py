"""Subcommand modules for signctl.

Provides register_commands() which uses deferred imports to keep
``signctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from signctl.commands.random_cmd import random_group

    cli.add_command(random_group)

    # --- Standalone commands ---
    from signctl.commands.check import check
    from signctl.commands.sign import sign, signature, unsign, verify

    cli.add_command(sign)
    cli.add_command(signature)
    cli.add_command(verify)
    cli.add_command(unsign)
    cli.add_command(check)
