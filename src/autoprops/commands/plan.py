"""Command: dry run of apply for a single note."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from autoprops.commands._base import AutopropsCommand

if TYPE_CHECKING:
    from autoprops.commands._context import AppContext


@click.command(
    cls=AutopropsCommand,
    examples="""\
  autoprops plan inbox/new-idea.md
  autoprops --json plan inbox/new-idea.md""",
)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def plan(app: AppContext, path: Path) -> None:
    """Show what apply would change in a note, without writing it."""
    from autoprops.services.apply import ApplyService

    app.emit(ApplyService(app.vault).plan_file(path.absolute()))
