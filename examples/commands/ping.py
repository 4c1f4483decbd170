"""Round-trip check; awaits briefly to show handlers may suspend."""

import asyncio
import time

help = "Check that the bot is responsive"


async def run(context, message, args):
    started = time.perf_counter()
    await asyncio.sleep(0)
    elapsed_ms = (time.perf_counter() - started) * 1000
    return f"🏓 Pong! ({elapsed_ms:.2f} ms)"
