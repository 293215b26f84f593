"""
Paper trading example: two trigger strategies on one feed with paper execution.

Shows: InMemoryPriceSource, TradingStrategy factories, GuardedExecutionService
in front of PaperExecutionService, order log and positions after the run.
"""

from __future__ import annotations

import logging

from mytrader import InMemoryPriceSource, TradingStrategy
from mytrader.execution import GuardedExecutionService, PaperExecutionService


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    security = "CGI"
    paper = PaperExecutionService(initial_cash=10_000.0)
    execution = GuardedExecutionService(paper, max_volume=500)
    feed = InMemoryPriceSource()

    # Take profit above 50, buy back below 45
    with TradingStrategy.place_sell_order_when_price_above(security, 50, 52, 10) as seller, \
            TradingStrategy.place_buy_order_when_price_below(security, 45, 44, 100) as buyer:
        seller.subscribe_and_execute(feed, execution)
        buyer.subscribe_and_execute(feed, execution)

        print("--- Paper trading: publishing prices ---")
        for price in [40, 44, 51, 48, 42, 48, 52, 55, 46]:
            feed.publish(security, price)

        print(f"Last price seen: seller={seller.current_price}, buyer={buyer.current_price}")

    print("\n--- Order log ---")
    for order in paper.get_order_log():
        print(f"  {order.side.value} {order.volume} {order.security} @ {order.price:.2f}")
    print(f"Cash: {paper.cash:.2f}, positions: {paper.positions}")
    print(f"Listeners left on feed: {len(feed.listeners())}")

    print("\n--- Rejected log (if any) ---")
    for entry in execution.get_rejected_log():
        print(f"  Rejected: reason={entry.reason}, order={entry.order}")


if __name__ == "__main__":
    main()
