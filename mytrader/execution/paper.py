"""
Paper execution service: records instructions and simulates unconditional fills.

No broker connection. Every buy/sell is logged as an Order and applied to an
internal cash/position book at the instructed price.
"""

from __future__ import annotations

import logging
from datetime import datetime

from mytrader.order import Order, Side

from mytrader.execution.service import ExecutionService

logger = logging.getLogger(__name__)


class PaperExecutionService(ExecutionService):
    """
    Paper execution. Fills every instruction in full at its own price.
    Maintains cash and positions; get_order_log returns every instruction received.
    """

    def __init__(self, initial_cash: float = 0.0) -> None:
        self._cash = initial_cash
        self._positions: dict[str, int] = {}
        self._order_log: list[Order] = []

    def buy(self, security: str, price: float, volume: int) -> None:
        self._record(Order(security=security, side=Side.BUY, price=price, volume=volume, timestamp=datetime.now()))

    def sell(self, security: str, price: float, volume: int) -> None:
        self._record(Order(security=security, side=Side.SELL, price=price, volume=volume, timestamp=datetime.now()))

    def _record(self, order: Order) -> None:
        self._order_log.append(order)
        delta = order.volume if order.side == Side.BUY else -order.volume
        self._cash -= delta * order.price
        self._positions[order.security] = self._positions.get(order.security, 0) + delta
        if self._positions[order.security] == 0:
            del self._positions[order.security]
        logger.info(
            "Paper fill: %s %s %s @ %s (cash=%.2f)",
            order.side.value,
            order.volume,
            order.security,
            order.price,
            self._cash,
        )

    @property
    def cash(self) -> float:
        return self._cash

    @property
    def positions(self) -> dict[str, int]:
        return dict(self._positions)

    def position(self, security: str) -> int:
        """Lots held in security. 0 if not present."""
        return self._positions.get(security, 0)

    def get_order_log(self) -> list[Order]:
        """Return every instruction received, in arrival order."""
        return list(self._order_log)
