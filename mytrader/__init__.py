"""
mytrader: price-trigger order execution for a single security.

Watches a price feed and places one order each time the price crosses a
trigger level. Feed and execution service are pluggable interfaces.
"""

__version__ = "0.1.0"

from mytrader.order import Order, Side
from mytrader.trigger import InvalidTriggerConfigError, TriggerConfig, TriggerDirection
from mytrader.price import InMemoryPriceSource, PriceListener, PriceSource
from mytrader.execution.service import ExecutionService
from mytrader.strategy import TradingStrategy

__all__ = [
    "Order",
    "Side",
    "TriggerConfig",
    "TriggerDirection",
    "InvalidTriggerConfigError",
    "PriceListener",
    "PriceSource",
    "InMemoryPriceSource",
    "ExecutionService",
    "TradingStrategy",
]
