#!/usr/bin/env python3
"""
Polling Demo for backoff-sequencer package.

This script polls an HTTP endpoint until it answers 200, pacing attempts with
async_exponential(). Press Ctrl+C to cancel the pending wait; the loop then
ends silently and the cancellation is reported from the signal's own state.

Usage:
    python examples/poll_status_demo.py https://httpbin.org/status/503
"""

import asyncio
import logging
import signal
import sys

import httpx

from backoff_sequencer import (
    async_exponential,
    options_from_env,
    with_max,
    with_min,
    with_terminate,
)


async def poll(url: str) -> int:
    """Poll the URL with exponential backoff and return a process exit code."""
    cancel = asyncio.Event()
    asyncio.get_running_loop().add_signal_handler(signal.SIGINT, cancel.set)

    backoff = async_exponential(
        cancel,
        with_min(0.5),
        with_max(8),
        with_terminate(),
        # BACKOFF_* variables override the defaults above
        *options_from_env(),
    )

    async with httpx.AsyncClient(timeout=10) as client:
        async for attempt in backoff:
            try:
                response = await client.get(url)
            except httpx.HTTPError as error:
                print(f"❌ attempt {attempt}: {error}")
                continue

            print(f"🔁 attempt {attempt}: HTTP {response.status_code}")
            if response.status_code == httpx.codes.OK:
                print("✅ endpoint is up")
                return 0

    if cancel.is_set():
        print("⚠️  cancelled")
        return 130

    print("❌ gave up after reaching the maximum delay")
    return 1


def main() -> int:
    """Parse arguments and run the polling loop."""
    if len(sys.argv) != 2:
        print(__doc__)
        return 2

    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(message)s")
    return asyncio.run(poll(sys.argv[1]))


if __name__ == "__main__":
    sys.exit(main())
