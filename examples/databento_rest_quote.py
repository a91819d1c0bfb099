#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from dbento.data.clients import MarketDataClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch the latest Databento quote and trading session")
    p.add_argument("symbols", nargs="*", default=["ES", "NQ"])
    p.add_argument("--repeat", type=int, default=2, help="Requests per symbol (repeats hit the cache)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    async with MarketDataClient() as client:
        session = client.get_session_info()
        print(f"Session    : {session.session} ({session.session_start:%H:%M}-{session.session_end:%H:%M} UTC)")
        print("-" * 65)
        for symbol in args.symbols:
            for _ in range(args.repeat):
                q = await client.get_quote(symbol)
                print(
                    f"{q.symbol:4} bid={q.bid:>10.2f} ask={q.ask:>10.2f} mid={q.price:>10.2f} "
                    f"spread={q.spread:.2f} age={q.data_age:.1f}s"
                )


if __name__ == "__main__":
    asyncio.run(main())
