#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from dbento.data.connectors.databento import DatabentoRESTConnector
from dbento.data.core import api_key_from_env


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List Databento batch jobs or show download info for one")
    p.add_argument("job_id", nargs="?", default=None)
    p.add_argument("--states", default="queued,processing,done")
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    async with DatabentoRESTConnector(api_key_from_env()) as connector:
        if args.job_id:
            info = await connector.get_batch_download_info(args.job_id)
            print(f"Job        : {info.job_id}")
            print(f"State      : {info.state}")
            print(f"Message    : {info.message}")
            if info.download_url:
                print(f"Download   : {info.download_url}")
                for name in info.filenames:
                    print(f"  - {name}")
            return

        jobs = await connector.list_batch_jobs(states=args.states.split(","))
        print(f"{'Job ID':32} | {'State':10} | {'Dataset':10} | {'Records':>10}")
        print("-" * 72)
        for job in jobs:
            print(f"{job.id:32} | {job.state:10} | {job.dataset or '':10} | {job.record_count or 0:>10}")


if __name__ == "__main__":
    asyncio.run(main())
