"""commodity-ledger CLI — entry point for session, buy, and sell commands."""

import click

from commodity_ledger import __version__


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, package_name="commodity-ledger")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML or JSON config file (default: ~/.commodity-ledger/config.yaml).",
)
@click.option("--data-file", type=click.Path(), default=None, help="Inventory JSON file to use.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_file: str | None, verbose: bool) -> None:
    """Commodity ledger — track cargo holdings at weighted-average cost."""
    from commodity_ledger.core.cli.common import load_config
    from commodity_ledger.core.exceptions import ConfigurationError
    from commodity_ledger.core.utils.logging import configure_logging

    config = load_config(config_file, data_file)
    try:
        configure_logging(config, verbose=verbose)
    except ConfigurationError as e:
        raise click.ClickException(f"Invalid logging configuration: {e}")
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        ctx.invoke(session)


# Register subcommands
from .session_cmd import session
from .trade_cmd import buy, sell

main.add_command(session)
main.add_command(buy)
main.add_command(sell)
