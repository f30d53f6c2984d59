"""commodity-ledger session — interactive buy/sell loop."""

from __future__ import annotations

import click

from commodity_ledger.core.cli.common import (
    describe_result,
    describe_session_total,
    open_store,
    parse_amount,
    save_ledger,
)
from commodity_ledger.core.config import Config
from commodity_ledger.core.exceptions import AmountOverflowError, InsufficientInventoryError, ParseError
from commodity_ledger.ledger import Transaction, TransactionKind, TransactionProcessor

AMOUNT_PROMPTS = {
    "B": "Enter the TOTAL PURCHASE COST (in aUEC)",
    "S": "Enter the TOTAL SALE REVENUE (in aUEC)",
}


def _prompt_text(prompt: str) -> str:
    # Empty input is handled by the caller rather than re-asked by click
    return click.prompt(prompt, default="", show_default=False).strip()


def _prompt_amount(prompt: str) -> float:
    return parse_amount(_prompt_text(prompt))


@click.command()
@click.option("--no-wait", is_flag=True, help="Exit without waiting for a final key press.")
@click.pass_obj
def session(config: Config, no_wait: bool) -> None:
    """Record buys and sells interactively until you quit."""
    store = open_store(config)
    ledger = store.load()
    processor = TransactionProcessor(ledger)

    click.echo(f"Commodity ledger: {len(ledger)} assets in inventory.")

    while True:
        click.echo("\n--- New Transaction ---")
        kind = _prompt_text("Type 'B' to BUY, 'S' to SELL, or 'Q' to QUIT").upper()

        if kind == "Q":
            break
        if kind not in ("B", "S"):
            click.echo("Invalid input. Please enter 'B', 'S', or 'Q'.")
            continue

        asset = _prompt_text("Enter the name of the asset (e.g., Astatine)")
        if not asset:
            click.echo("Asset name cannot be empty.")
            continue

        try:
            quantity = _prompt_amount("Enter the quantity (in SCU) for this transaction")
            amount = _prompt_amount(AMOUNT_PROMPTS[kind])
            fees = _prompt_amount("Enter the TOTAL TRANSPORT FEES for this transaction (0 if none)")
        except ParseError as e:
            click.echo(f"ERROR: {e}")
            continue

        try:
            result = processor.apply(Transaction(TransactionKind(kind), asset, quantity, amount, fees))
        except (InsufficientInventoryError, AmountOverflowError) as e:
            click.echo(f"ERROR: {e}")
            continue

        click.echo("")
        for line in describe_result(result):
            click.echo(line)

    save_ledger(store, ledger)

    click.echo("\n=== FINAL SESSION SUMMARY ===")
    click.echo(describe_session_total(processor.session_profit_loss))

    if not no_wait:
        click.pause("\nPress ENTER or RETURN to close the window...")
