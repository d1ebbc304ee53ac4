"""Entry point for the ``autoprops`` command.

Global flags choose the output mode and the config file; they must come
before the subcommand (``autoprops --json apply inbox/``).
"""

from __future__ import annotations

import click

from autoprops import __version__
from autoprops.commands import register_commands
from autoprops.commands._context import AppContext
from autoprops.config.settings import AutoPropsSettings

_EPILOG = (
    "Without --config, the nearest autoprops.toml above the current directory "
    "is used and its folder is treated as the vault root."
)


@click.group(
    invoke_without_command=True,
    epilog=_EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="autoprops")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only changed notes or values.")
@click.option("-v", "--verbose", is_flag=True, help="Show unchanged properties and debug logs.")
@click.option("--log-json", is_flag=True, help="Emit logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this autoprops.toml instead of searching for one.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """autoprops — inject default properties into markdown notes."""
    settings = AutoPropsSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
