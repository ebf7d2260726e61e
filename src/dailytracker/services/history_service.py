"""
History service for the DailyTracker application.

This service rebuilds the list of every recorded day from the shared
key-value store. It only understands the day record encoding and the key
naming convention; it does not go through DayRecordService.

Classes:
    HistoryService: Scan the store and return day records, newest first
"""

import asyncio
import logging
from typing import List, Optional

from ..exceptions import RecordCorruptError
from ..models.activity import ActivitySet
from ..models.day import DayRecord, is_day_key
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class HistoryService:
    """
    Aggregate all day records in the store into a sorted history.

    Keys that are not shaped like YYYY-MM-DD belong to other features and are
    ignored. The shape check is the only check, so a key such as "2024-13-40"
    is listed like any other day.

    Attributes:
        store: Key-value store holding the day records

    Example:
        >>> history = HistoryService(store)
        >>> [record.date for record in await history.list_history()]
        ['2024-03-01', '2024-01-05', '2023-12-31']
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def list_history(self) -> List[DayRecord]:
        """
        Return every stored day record, most recent first.

        All point reads are issued concurrently and awaited together. Records
        whose payload cannot be parsed are logged and left out; a key that
        disappears between listing and reading is left out as well.

        Returns:
            Day records sorted by day key descending; empty if nothing has
            been recorded yet

        Raises:
            StoreUnavailableError: If listing keys or any point read fails
        """
        keys = await self.store.get_all_keys()
        day_keys = [key for key in keys if is_day_key(key)]

        if not day_keys:
            return []

        records = await asyncio.gather(*(self._load_record(key) for key in day_keys))
        history = [record for record in records if record is not None]

        skipped = len(day_keys) - len(history)
        if skipped:
            logger.info(
                "Listed %d day records, skipped %d unreadable", len(history), skipped
            )

        history.sort(key=lambda record: record.date, reverse=True)
        return history

    async def _load_record(self, key: str) -> Optional[DayRecord]:
        try:
            value = await self.store.get_item(key)
            if value is None:
                return None
            activities = ActivitySet.from_store_value(key, value)
        except RecordCorruptError as e:
            logger.warning("Skipping corrupt day record %s: %s", key, e.reason)
            return None

        return DayRecord(date=key, activities=activities)
