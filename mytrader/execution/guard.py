"""
Execution guard: safety checks in front of another execution service.

Kill switch and maximum volume per order. Blocked orders are logged and kept in
a rejected-order log; they are never raised to the caller. Errors from the
wrapped service are not caught here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from mytrader.order import Order, Side

from mytrader.execution.service import ExecutionService

logger = logging.getLogger(__name__)


@dataclass
class RejectedOrderLog:
    """One entry for an order blocked before reaching the wrapped service."""

    reason: str
    timestamp: datetime
    order: Order


class GuardedExecutionService(ExecutionService):
    """
    Forward buy/sell to inner unless a safety check blocks it.
    Safety: kill switch, max_volume per order.
    """

    def __init__(
        self,
        inner: ExecutionService,
        *,
        max_volume: int | None = None,
        kill_switch: bool = False,
    ) -> None:
        self.inner = inner
        self.max_volume = max_volume
        self._kill_switch = kill_switch
        self._rejected_log: list[RejectedOrderLog] = []

    def set_kill_switch(self, value: bool) -> None:
        """Emergency stop: when True, all orders are blocked."""
        self._kill_switch = value

    def get_rejected_log(self) -> list[RejectedOrderLog]:
        """Return log of blocked orders for debugging and reporting."""
        return list(self._rejected_log)

    def buy(self, security: str, price: float, volume: int) -> None:
        order = Order(security=security, side=Side.BUY, price=price, volume=volume, timestamp=datetime.now())
        if self._allow(order):
            self.inner.buy(security, price, volume)

    def sell(self, security: str, price: float, volume: int) -> None:
        order = Order(security=security, side=Side.SELL, price=price, volume=volume, timestamp=datetime.now())
        if self._allow(order):
            self.inner.sell(security, price, volume)

    def _allow(self, order: Order) -> bool:
        if self._kill_switch:
            self._reject("kill_switch", order)
            logger.warning("Order blocked: kill switch is on (%s %s)", order.side.value, order.security)
            return False
        if self.max_volume is not None and order.volume > self.max_volume:
            self._reject("max_volume", order)
            logger.warning("Order blocked: volume %s > max_volume %s", order.volume, self.max_volume)
            return False
        return True

    def _reject(self, reason: str, order: Order) -> None:
        self._rejected_log.append(RejectedOrderLog(reason=reason, timestamp=order.timestamp or datetime.now(), order=order))
