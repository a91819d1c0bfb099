#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from dbento.data.clients import MarketDataClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch recent Databento OHLCV bars via REST")
    p.add_argument("symbol", nargs="?", default="ES", choices=["ES", "NQ"])
    p.add_argument("timeframe", nargs="?", default="H4", choices=["1h", "H4", "1d"])
    p.add_argument("count", nargs="?", type=int, default=10)
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    # API key is read from DATABENTO_API_KEY
    async with MarketDataClient() as client:
        bars = await client.get_historical_bars(args.symbol, args.timeframe, args.count)

    print("=" * 65)
    print(f"Symbol     : {args.symbol}")
    print(f"Timeframe  : {args.timeframe}")
    print(f"Bars count : {len(bars)}")
    print("=" * 65)
    print(
        f"{'Timestamp':25} | {'Open':>11} | {'High':>11} | {'Low':>11} | {'Close':>11} | {'Volume':>13}"
    )
    print("-" * 83)
    for b in bars:
        print(
            f"{b.timestamp.isoformat():25} | {b.open:>11.2f} | {b.high:>11.2f} | {b.low:>11.2f} | {b.close:>11.2f} | {b.volume:>13.2f}"
        )
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
