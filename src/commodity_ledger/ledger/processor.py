"""Transaction processing with weighted-average costing.

Buys add to quantity and cost basis. Sells release cost basis at the
pre-sale average cost and realize profit or loss against the sale revenue.
The session's realized total is carried on the processor instance and
returned with every result.
"""

from __future__ import annotations

import math
from dataclasses import replace

from loguru import logger

from commodity_ledger.core.exceptions import AmountOverflowError, InsufficientInventoryError

from .models import Ledger, Transaction, TransactionKind, TransactionResult


class TransactionProcessor:
    """Applies transactions to a Ledger in place.

    Args:
        ledger: The ledger to mutate.
        session_profit_loss: Realized total carried in from earlier work.
    """

    def __init__(self, ledger: Ledger, session_profit_loss: float = 0.0):
        self.ledger = ledger
        self.session_profit_loss = session_profit_loss

    def apply(self, transaction: Transaction) -> TransactionResult:
        """Apply a transaction of either kind."""
        if transaction.kind is TransactionKind.BUY:
            return self.buy(transaction.asset, transaction.quantity, transaction.amount, transaction.fees)
        return self.sell(transaction.asset, transaction.quantity, transaction.amount, transaction.fees)

    def buy(self, asset: str, quantity: float, amount: float, fees: float = 0.0) -> TransactionResult:
        """Add units to a holding. Fees are capitalized into the cost basis.

        Raises:
            AmountOverflowError: The new quantity or cost basis would not be
                a finite number. The ledger is left untouched.
        """
        transaction = Transaction(TransactionKind.BUY, asset, quantity, amount, fees)

        existing = self.ledger.get(asset)
        new_quantity = (existing.quantity if existing else 0.0) + transaction.quantity
        new_total_cost = (existing.total_cost if existing else 0.0) + transaction.amount + transaction.fees
        if not (math.isfinite(new_quantity) and math.isfinite(new_total_cost)):
            raise AmountOverflowError(f"Buying {asset} would push its holding beyond the representable range")

        holding = self.ledger.open_position(asset)
        holding.quantity = new_quantity
        holding.total_cost = new_total_cost

        if holding.quantity <= 0:
            # zero-quantity buy on an asset with no position
            logger.warning(f"Discarding {holding.total_cost:.2f} aUEC of cost for {asset}: no units held")
            self.ledger.close_position(asset)
            return TransactionResult(transaction, None, session_profit_loss=self.session_profit_loss)

        logger.debug(f"Bought {transaction.quantity} of {asset}; now {holding.quantity} @ {holding.total_cost}")
        return TransactionResult(transaction, replace(holding), session_profit_loss=self.session_profit_loss)

    def sell(self, asset: str, quantity: float, amount: float, fees: float = 0.0) -> TransactionResult:
        """Remove units from a holding and realize profit or loss.

        Raises:
            InsufficientInventoryError: ``quantity`` exceeds the units held.
                The ledger is left untouched.
        """
        transaction = Transaction(TransactionKind.SELL, asset, quantity, amount, fees)

        existing = self.ledger.get(asset)
        available = existing.quantity if existing is not None else 0.0
        if transaction.quantity > available:
            raise InsufficientInventoryError(asset, transaction.quantity, available)

        holding = self.ledger.open_position(asset)
        cost_of_goods_sold = transaction.quantity * holding.average_cost_per_unit
        net_profit_loss = transaction.amount - cost_of_goods_sold - transaction.fees

        holding.quantity -= transaction.quantity
        holding.total_cost -= cost_of_goods_sold
        self.session_profit_loss += net_profit_loss

        if holding.quantity <= 0:
            self.ledger.close_position(asset)
            after = None
            if existing is not None:
                logger.info(f"Position in {asset} closed")
        else:
            if holding.total_cost < 0:
                holding.total_cost = 0.0
            after = replace(holding)

        logger.debug(f"Sold {transaction.quantity} of {asset}: cogs={cost_of_goods_sold:.4f} pnl={net_profit_loss:.4f}")
        return TransactionResult(
            transaction,
            after,
            cost_of_goods_sold=cost_of_goods_sold,
            net_profit_loss=net_profit_loss,
            session_profit_loss=self.session_profit_loss,
        )
