"""Command group: inspect property definitions and exclusion rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from autoprops.commands._base import AutopropsGroup

if TYPE_CHECKING:
    from autoprops.commands._context import AppContext

_RULES_EXAMPLES = """\
  autoprops rules list
  autoprops rules validate
  autoprops --json rules validate
  autoprops -c ~/vault/autoprops.toml rules list"""


@click.group(cls=AutopropsGroup, examples=_RULES_EXAMPLES)
@click.pass_obj
def rules(app: AppContext) -> None:
    """Inspect the configured properties and exclusion rules."""


@rules.command(
    "list",
    examples="""\
  autoprops rules list
  autoprops --json rules list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List property definitions, exclusion rules and excluded folders."""
    from autoprops.services.rules import RulesService

    app.emit(RulesService(app.vault).list_rules())


@rules.command(
    examples="""\
  autoprops rules validate
  autoprops --json rules validate""",
)
@click.pass_obj
def validate(app: AppContext) -> None:
    """Report rules that will be ignored or can never take effect."""
    from autoprops.services.rules import RulesService

    app.emit(RulesService(app.vault).validate_rules())
