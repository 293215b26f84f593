"""
Replay demo: push a recorded price tape through trigger strategies.

Demonstrates: load CSV tape → configure strategies (one from the environment if
MYTRADER_* variables are set) → replay → order summary.
"""

import logging
import os
from pathlib import Path

from backtesting import BacktestEngine, load_csv, print_report
from mytrader import TradingStrategy
from mytrader.config import ENV_PREFIX, trigger_config_from_environment


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    csv_path = Path(__file__).resolve().parent / "data" / "sample_ticks.csv"
    ticks = load_csv(csv_path)

    strategies = [
        TradingStrategy.place_sell_order_when_price_above("CGI", 50, 52, 10),
        TradingStrategy.place_buy_order_when_price_below("CGI", 45, 44, 100),
    ]
    if any(key.startswith(ENV_PREFIX) for key in os.environ):
        strategies.append(TradingStrategy(trigger_config_from_environment()))

    engine = BacktestEngine(strategies)
    result = engine.run(ticks)
    print_report(result)


if __name__ == "__main__":
    main()
