"""
Replay engine: pushes a recorded price tape through trading strategies.

Loads tape → InMemoryPriceSource → strategies (subscribed listeners) →
execution service. Strategies are closed (unsubscribed) when the replay ends,
including when an execution error aborts it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pandas as pd

from mytrader import InMemoryPriceSource, Order, TradingStrategy
from mytrader.execution import ExecutionService, PaperExecutionService

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


@dataclass
class BacktestResult:
    """Result of a replay: orders placed, last price per security, ticks published."""

    orders: list[Order] = field(default_factory=list)
    last_prices: dict[str, float] = field(default_factory=dict)
    ticks_processed: int = 0


class _LastPriceRecorder:
    """Listener that remembers the last published price of every security."""

    def __init__(self) -> None:
        self.prices: dict[str, float] = {}

    def on_price_observation(self, security: str, price: float) -> None:
        self.prices[security] = price


class BacktestEngine:
    """
    Replays a tape through a set of strategies sharing one execution service.
    Orders are read back from the execution service's order log, so the
    default PaperExecutionService (or any service exposing get_order_log)
    is required to have them in the result.
    """

    def __init__(
        self,
        strategies: Sequence[TradingStrategy],
        *,
        execution: ExecutionService | None = None,
    ) -> None:
        self.strategies: list[TradingStrategy] = list(strategies)
        self.execution = execution if execution is not None else PaperExecutionService()

    def run(self, ticks: pd.DataFrame) -> BacktestResult:
        """
        Run the replay over a normalized tape (see backtesting.data_loader).

        Parameters
        ----------
        ticks : pd.DataFrame
            DataFrame with columns security, price in replay order.

        Returns
        -------
        BacktestResult
            Orders placed during this run, last prices, tick count.

        Each strategy's previous execution service and price source are
        restored when the replay ends; its trigger state is not.
        """
        source = InMemoryPriceSource()
        recorder = _LastPriceRecorder()
        source.add_listener(recorder)
        log_before = len(self._order_log())

        previous = [(s, s.price_source, s.execution_service) for s in self.strategies]
        for strategy in self.strategies:
            strategy.subscribe_and_execute(source, self.execution)
        try:
            count = source.replay(
                zip(ticks["security"].astype(str), ticks["price"].astype(float))
            )
        finally:
            for strategy, prev_source, prev_execution in previous:
                strategy.close()
                strategy.attach_execution_service(prev_execution)
                if prev_source is not None:
                    strategy.subscribe(prev_source)
            source.remove_listener(recorder)

        orders = self._order_log()[log_before:]
        logger.info("Replay finished: %d ticks, %d orders", count, len(orders))
        return BacktestResult(orders=orders, last_prices=dict(recorder.prices), ticks_processed=count)

    def _order_log(self) -> list[Order]:
        get_log = getattr(self.execution, "get_order_log", None)
        return list(get_log()) if get_log is not None else []
