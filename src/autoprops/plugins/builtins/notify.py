"""Built-in notification plugin.

Prints a one-line notice to stderr whenever properties are added to a
note. Registered by the vault only when ``[general] show_notifications``
is on and output is neither ``--quiet`` nor ``--json``.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any

import click
import pluggy

hookimpl = pluggy.HookimplMarker("autoprops")


class NotifyPlugin:
    """Report how many properties each application added."""

    @hookimpl
    def post_apply(
        self,
        path: str,
        properties_added: int,
        changes: list[dict[str, Any]],
    ) -> None:
        if properties_added <= 0:
            return
        noun = "property" if properties_added == 1 else "properties"
        click.echo(
            f'Added {properties_added} {noun} to "{PurePosixPath(path).stem}"',
            err=True,
        )
