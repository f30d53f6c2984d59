"""Ledger domain — holdings, weighted-average transaction processing, JSON store."""

from .models import Holding, Ledger, Transaction, TransactionKind, TransactionResult
from .processor import TransactionProcessor
from .store import LedgerStore

__all__ = [
    "Holding",
    "Ledger",
    "LedgerStore",
    "Transaction",
    "TransactionKind",
    "TransactionProcessor",
    "TransactionResult",
]
