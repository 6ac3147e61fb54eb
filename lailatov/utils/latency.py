"""Artificial latency for store reads, off unless configured."""

import asyncio
import functools
import logging

logger = logging.getLogger(__name__)


# Used by: babies_data.py - read methods of BabyDataManager
def simulated_latency(func):
    """Sleep `self.latency_ms` before awaiting the wrapped method. No-op when it is 0."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        delay_ms = getattr(self, "latency_ms", 0)
        if delay_ms > 0:
            logger.debug(f"Simulating {delay_ms}ms latency for {func.__name__}")
            await asyncio.sleep(delay_ms / 1000.0)
        return await func(self, *args, **kwargs)

    return wrapper
