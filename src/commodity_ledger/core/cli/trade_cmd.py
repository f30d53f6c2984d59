"""commodity-ledger buy / sell — apply a single transaction and save."""

from __future__ import annotations

import click

from commodity_ledger.core.cli.common import AMOUNT, describe_result, open_store, save_ledger
from commodity_ledger.core.config import Config
from commodity_ledger.core.exceptions import AmountOverflowError, InsufficientInventoryError
from commodity_ledger.ledger import Transaction, TransactionKind, TransactionProcessor


def _run(config: Config, kind: TransactionKind, asset: str, quantity: float, amount: float, fees: float) -> None:
    asset = asset.strip()
    if not asset:
        raise click.BadParameter("Asset name cannot be empty.", param_hint="ASSET")

    store = open_store(config)
    ledger = store.load()
    processor = TransactionProcessor(ledger)

    try:
        result = processor.apply(Transaction(kind, asset, quantity, amount, fees))
    except (InsufficientInventoryError, AmountOverflowError) as e:
        raise click.ClickException(str(e))

    for line in describe_result(result):
        click.echo(line)

    if not save_ledger(store, ledger):
        raise click.exceptions.Exit(1)


@click.command()
@click.argument("asset")
@click.argument("quantity", type=AMOUNT)
@click.argument("amount", type=AMOUNT)
@click.option("--fees", type=AMOUNT, default=0.0, show_default=True, help="Transport fees in aUEC.")
@click.pass_obj
def buy(config: Config, asset: str, quantity: float, amount: float, fees: float) -> None:
    """Record a purchase of QUANTITY units of ASSET costing AMOUNT aUEC."""
    _run(config, TransactionKind.BUY, asset, quantity, amount, fees)


@click.command()
@click.argument("asset")
@click.argument("quantity", type=AMOUNT)
@click.argument("amount", type=AMOUNT)
@click.option("--fees", type=AMOUNT, default=0.0, show_default=True, help="Transport fees in aUEC.")
@click.pass_obj
def sell(config: Config, asset: str, quantity: float, amount: float, fees: float) -> None:
    """Record a sale of QUANTITY units of ASSET for AMOUNT aUEC revenue."""
    _run(config, TransactionKind.SELL, asset, quantity, amount, fees)
