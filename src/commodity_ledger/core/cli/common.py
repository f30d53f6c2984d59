"""Shared setup logic for CLI commands."""

from __future__ import annotations

import math
from pathlib import Path

import click
from loguru import logger

from commodity_ledger.core.config import Config
from commodity_ledger.core.exceptions import ConfigurationError, ParseError, PersistenceWriteError
from commodity_ledger.ledger import Ledger, LedgerStore, TransactionKind, TransactionResult

LEDGER_DIR = Path.home() / ".commodity-ledger"
CONFIG_PATH = LEDGER_DIR / "config.yaml"


def load_config(config_file: str | None = None, data_file: str | None = None) -> Config:
    """Load config from ``config_file``, or ~/.commodity-ledger/config.yaml if present."""
    if config_file is None and CONFIG_PATH.exists():
        config_file = str(CONFIG_PATH)
    try:
        config = Config(config_file=config_file)
    except ConfigurationError as e:
        raise click.ClickException(str(e))
    if data_file:
        config.set("ledger.data_file", str(Path(data_file).expanduser().resolve()))
    return config


def open_store(config: Config) -> LedgerStore:
    """Build the LedgerStore for the configured inventory file."""
    try:
        backup_corrupt = config.get_bool("ledger.backup_corrupt", True)
    except ConfigurationError as e:
        raise click.ClickException(str(e))
    return LedgerStore(config.get_ledger_path(), backup_corrupt=backup_corrupt)


def parse_amount(text: str) -> float:
    """Parse operator input as a finite, non-negative number."""
    try:
        value = float(text.strip())
    except ValueError:
        raise ParseError(f"Invalid number entered: {text.strip()!r}. Please enter a non-negative number.") from None
    if not math.isfinite(value) or value < 0:
        raise ParseError(f"Invalid number entered: {text.strip()!r}. Please enter a non-negative number.")
    return value


class AmountType(click.ParamType):
    """Click parameter type backed by ``parse_amount``."""

    name = "amount"

    def convert(self, value, param, ctx):  # type: ignore[no-untyped-def]
        if isinstance(value, float):
            return value
        try:
            return parse_amount(str(value))
        except ParseError as e:
            self.fail(str(e), param, ctx)


AMOUNT = AmountType()


def save_ledger(store: LedgerStore, ledger: Ledger) -> bool:
    """Save and report the outcome. Returns False if the write failed."""
    try:
        backup_path = store.save(ledger)
    except PersistenceWriteError as e:
        logger.error(str(e))
        click.echo(f"ERROR: {e}", err=True)
        return False
    if backup_path:
        click.echo(f"Unreadable inventory file kept as {backup_path}.")
    click.echo(f"Inventory saved to {store.path}.")
    return True


def describe_result(result: TransactionResult) -> list[str]:
    """Plain-text lines reporting an applied transaction."""
    tx = result.transaction
    if tx.kind is TransactionKind.BUY:
        lines = [f"Buy transaction processed for {tx.asset}. Inventory increased (fees included in cost)."]
    else:
        label = "Profit" if result.net_profit_loss >= 0 else "Loss"
        lines = [
            f"Sale processed. Net {label} on {tx.asset} sale: {result.net_profit_loss:.2f} aUEC",
            f"  (Total Revenue: {tx.amount:.2f}, COGS: {result.cost_of_goods_sold:.2f}, Fees: {tx.fees:.2f})",
        ]
    if result.position_closed:
        lines.append(f"Inventory cleared for {tx.asset}.")
    return lines


def describe_session_total(total: float) -> str:
    """Closing line reporting the session's realized profit or loss."""
    label = "PROFIT" if total >= 0 else "LOSS"
    return f"TOTAL SESSION NET {label}: {total:.2f} aUEC"
