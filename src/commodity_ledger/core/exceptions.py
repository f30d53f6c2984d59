"""
Commodity ledger exception hierarchy.

All ledger exceptions inherit from LedgerError, so the CLI can catch
library-level failures in one place while still telling apart the
recoverable cases (bad input, oversell, unreadable state file).
"""


class LedgerError(Exception):
    """Base exception class for all commodity ledger errors."""


class ConfigurationError(LedgerError):
    """Raised for configuration errors (missing keys, invalid values)."""


class ParseError(LedgerError, ValueError):
    """Raised when operator input is not a finite, non-negative number."""


class InsufficientInventoryError(LedgerError):
    """Raised when a sale asks for more units than are held."""

    def __init__(self, asset: str, requested: float, available: float):
        self.asset = asset
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot sell {requested:.2f} SCU of {asset}, only {available:.2f} SCU is in inventory."
        )


class PersistenceError(LedgerError):
    """Base class for state file failures."""


class PersistenceReadError(PersistenceError):
    """Raised when the state file is missing, unreadable, or malformed."""


class PersistenceWriteError(PersistenceError):
    """Raised when the state file cannot be written."""


class AmountOverflowError(LedgerError, ValueError):
    """Raised when a transaction would push a holding past the float range."""
