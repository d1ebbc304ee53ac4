"""Command: preview value normalization for a property type."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from autoprops.commands._base import AutopropsCommand
from autoprops.domain.types import PropertyType

if TYPE_CHECKING:
    from autoprops.commands._context import AppContext


@click.command(
    cls=AutopropsCommand,
    examples="""\
  autoprops normalize tags "#Project One, status/active"
  autoprops normalize number "1,234.5"
  autoprops normalize checkbox yes
  autoprops normalize date today
  autoprops -q normalize multitext 'a, b,,c'""",
)
@click.argument(
    "type_name",
    metavar="TYPE",
    type=click.Choice([t.value for t in PropertyType], case_sensitive=False),
)
@click.argument("value")
@click.pass_obj
def normalize(app: AppContext, type_name: str, value: str) -> None:
    """Show how VALUE is stored for a property of TYPE."""
    from autoprops.services.rules import RulesService

    app.emit(RulesService(app.vault).normalize(value, type_name))
