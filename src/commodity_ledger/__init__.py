"""Commodity ledger — weighted-average cost tracking for traded cargo."""

__version__ = "0.1.0"
