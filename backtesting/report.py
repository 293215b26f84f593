"""
Replay report: order summary from a BacktestResult.
"""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from mytrader import Order

from backtesting.engine import BacktestResult

SUMMARY_COLUMNS = ["security", "side", "orders", "volume", "notional"]


def summarize_orders(orders: Sequence[Order]) -> pd.DataFrame:
    """
    Aggregate orders per security and side.

    Returns
    -------
    pd.DataFrame
        Columns security, side, orders, volume, notional; empty when there are no orders.
    """
    if not orders:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.DataFrame(
        {
            "security": [o.security for o in orders],
            "side": [o.side.value for o in orders],
            "volume": [o.volume for o in orders],
            "notional": [o.notional for o in orders],
        }
    )
    grouped = df.groupby(["security", "side"], sort=True).agg(
        orders=("volume", "size"),
        volume=("volume", "sum"),
        notional=("notional", "sum"),
    )
    return grouped.reset_index()[SUMMARY_COLUMNS]


def print_report(result: BacktestResult) -> pd.DataFrame:
    """Print a replay summary and return the order summary table."""
    summary = summarize_orders(result.orders)
    print("--- Replay Summary ---")
    print(f"Ticks:           {result.ticks_processed}")
    print(f"Orders:          {len(result.orders)}")
    for security, price in sorted(result.last_prices.items()):
        print(f"Last price {security}: {price:,.2f}")
    if not summary.empty:
        print(summary.to_string(index=False))
    print("----------------------")
    return summary
