"""
Order: a single buy/sell instruction handed to an execution service.

Immutable. The core does not route or fill orders; it only describes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Side(Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Order:
    """An instruction as received by an execution service. No broker ID; no fill state."""

    security: str
    side: Side
    price: float
    volume: int
    timestamp: datetime | None = None

    @property
    def notional(self) -> float:
        return self.price * self.volume
