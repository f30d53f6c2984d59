"""Core ledger data models.

A ``Ledger`` maps asset names to ``Holding`` aggregates. Only the running
quantity and cost basis are kept per asset; there is no lot history, so
every unit of an asset shares one weighted-average cost.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


def _check_amount(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite, non-negative number: {value}")
    return value


class TransactionKind(Enum):
    """Mutating operations supported by the ledger."""

    BUY = "B"
    SELL = "S"


@dataclass
class Holding:
    """Aggregate position in one asset.

    Attributes:
        quantity: Units (SCU) currently held.
        total_cost: Cost basis (purchase cost plus fees) of those units, in aUEC.
    """

    quantity: float = 0.0
    total_cost: float = 0.0

    @property
    def average_cost_per_unit(self) -> float:
        """Blended cost of one unit, or 0 for an empty holding."""
        if self.quantity > 0:
            return self.total_cost / self.quantity
        return 0.0

    def to_dict(self) -> dict[str, float]:
        """Serialize to the persisted field names."""
        return {"inventory": self.quantity, "total_cost": self.total_cost}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Holding:
        """Build from a persisted entry. Raises ValueError/TypeError on a bad shape."""
        if not isinstance(data, dict):
            raise TypeError(f"holding entry must be an object, got {type(data).__name__}")
        values = {}
        for key in ("inventory", "total_cost"):
            raw = data[key]
            # bool is an int subclass; reject it explicitly
            if isinstance(raw, bool) or not isinstance(raw, int | float):
                raise TypeError(f"{key} must be a number, got {raw!r}")
            values[key] = float(raw)
        if not math.isfinite(values["inventory"]):
            raise ValueError(f"inventory must be finite, got {values['inventory']}")
        total_cost = _check_amount("total_cost", values["total_cost"])
        return cls(quantity=values["inventory"], total_cost=total_cost)


@dataclass(frozen=True)
class Transaction:
    """A single buy or sell request against one asset.

    Attributes:
        kind: BUY or SELL.
        asset: Asset name (case-sensitive, non-empty).
        quantity: Units bought or sold.
        amount: Total purchase cost (buy) or total sale revenue (sell).
        fees: Transport and other fees tied to this transaction.
    """

    kind: TransactionKind
    asset: str
    quantity: float
    amount: float
    fees: float = 0.0

    def __post_init__(self):
        if not self.asset or not self.asset.strip():
            raise ValueError("Asset name cannot be empty")
        for field_name in ("quantity", "amount", "fees"):
            object.__setattr__(self, field_name, _check_amount(field_name, getattr(self, field_name)))


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of an applied transaction.

    Attributes:
        transaction: The transaction that was applied.
        holding: Copy of the holding afterwards, or None if the position closed.
        cost_of_goods_sold: Cost basis released by a sale (0 for buys).
        net_profit_loss: Realized profit (positive) or loss (negative); 0 for buys.
        session_profit_loss: Running realized total after this transaction.
    """

    transaction: Transaction
    holding: Holding | None
    cost_of_goods_sold: float = 0.0
    net_profit_loss: float = 0.0
    session_profit_loss: float = 0.0

    @property
    def position_closed(self) -> bool:
        return self.holding is None


class Ledger:
    """Mapping of asset name to Holding.

    Every stored holding has a positive quantity. Positions that run out are
    removed through ``close_position``, never left behind as zero entries.
    """

    def __init__(self, holdings: dict[str, Holding] | None = None):
        self._holdings: dict[str, Holding] = {}
        for asset, holding in (holdings or {}).items():
            if holding.quantity > 0:
                self._holdings[asset] = holding

    def __contains__(self, asset: object) -> bool:
        return asset in self._holdings

    def __len__(self) -> int:
        return len(self._holdings)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._holdings))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ledger):
            return NotImplemented
        return self._holdings == other._holdings

    def __repr__(self) -> str:
        return f"Ledger({len(self)} assets)"

    def get(self, asset: str) -> Holding | None:
        return self._holdings.get(asset)

    def items(self) -> list[tuple[str, Holding]]:
        """Holdings sorted by asset name."""
        return sorted(self._holdings.items())

    def open_position(self, asset: str) -> Holding:
        """Return the holding for ``asset``, creating an empty one if needed."""
        holding = self._holdings.get(asset)
        if holding is None:
            holding = Holding()
            self._holdings[asset] = holding
        return holding

    def close_position(self, asset: str) -> bool:
        """Remove ``asset`` if present. Returns True if an entry was removed."""
        return self._holdings.pop(asset, None) is not None

    def to_dict(self) -> dict[str, dict[str, float]]:
        """Serialize to the persisted JSON document shape."""
        return {asset: holding.to_dict() for asset, holding in self.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Ledger:
        """Build from the persisted JSON document shape.

        Raises TypeError/KeyError/ValueError when the document does not match.
        Entries with a non-positive quantity are skipped.
        """
        if not isinstance(data, dict):
            raise TypeError(f"ledger document must be an object, got {type(data).__name__}")
        holdings = {}
        for asset, entry in data.items():
            if not asset:
                raise ValueError("asset name cannot be empty")
            holdings[asset] = Holding.from_dict(entry)
        return cls(holdings)
