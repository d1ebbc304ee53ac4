"""Command: inject configured properties into notes."""

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
  autoprops apply inbox/new-idea.md
  autoprops apply .
  autoprops apply projects/ journal/2026-10-18.md
  autoprops --json apply inbox/
  autoprops -q apply .          # print only the notes that changed""",
)
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path),
)
@click.pass_obj
def apply(app: AppContext, paths: tuple[Path, ...]) -> None:
    """Apply the configured properties to notes.

    PATHS may be notes or folders; folders are searched recursively.
    """
    from autoprops.services.apply import ApplyService

    svc = ApplyService(app.vault)
    targets = [p.absolute() for p in paths]
    if len(targets) == 1 and targets[0].is_file():
        app.emit(svc.apply_file(targets[0]))
    else:
        app.emit(svc.apply_batch(targets))
