"""Subcommand modules for autoprops.

Provides register_commands() which uses deferred imports to keep
``autoprops --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from autoprops.commands.rules import rules

    cli.add_command(rules)

    # --- Standalone commands ---
    from autoprops.commands.apply import apply
    from autoprops.commands.normalize import normalize
    from autoprops.commands.plan import plan

    cli.add_command(apply)
    cli.add_command(plan)
    cli.add_command(normalize)
