"""
Counter service for the DailyTracker application.

A single integer counter kept under the "@counter_value" key of the shared
store. The key is not shaped like a day key, so it never shows up in the
history.

Classes:
    CounterService: Read, increment and decrement the stored counter
"""

import asyncio
import logging

from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

COUNTER_KEY = "@counter_value"


class CounterService:
    """Integer counter persisted in the key-value store."""

    def __init__(self, store: KeyValueStore, key: str = COUNTER_KEY):
        self.store = store
        self.key = key
        self._lock = asyncio.Lock()

    async def get(self) -> int:
        """
        Read the counter.

        Returns:
            Stored value, or 0 if absent or not an integer

        Raises:
            StoreUnavailableError: If the store read fails
        """
        value = await self.store.get_item(self.key)

        if value is None:
            return 0

        try:
            return int(value)
        except ValueError:
            logger.warning("Counter value %r under %s is not an integer", value, self.key)
            return 0

    async def increment(self) -> int:
        return await self.change(1)

    async def decrement(self) -> int:
        return await self.change(-1)

    async def change(self, delta: int) -> int:
        """Add delta to the counter, store it and return the new value."""
        async with self._lock:
            new_value = await self.get() + delta
            await self.store.set_item(self.key, str(new_value))
        return new_value
