"""
Price-tape replay on top of mytrader.

Pushes recorded prices through trading strategies via an in-memory feed and
reports the orders they placed.
"""

from backtesting.engine import BacktestEngine, BacktestResult
from backtesting.data_loader import load_csv, load_dataframe
from backtesting.report import print_report, summarize_orders

__all__ = [
    "BacktestEngine",
    "BacktestResult",
    "load_csv",
    "load_dataframe",
    "print_report",
    "summarize_orders",
]
