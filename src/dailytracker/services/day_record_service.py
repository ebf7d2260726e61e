"""
Day record service for the DailyTracker application.

This service reads and writes the ActivitySet of a single day under its day
key. A day that was never written reads as all-false, and a corrupt stored
payload is logged and treated the same way so that callers never crash on
bad data. Store failures are propagated unchanged.

Classes:
    DayRecordService: Load and toggle the activities of one day
"""

import asyncio
import logging
from typing import Dict, Union

from ..exceptions import RecordCorruptError
from ..models.activity import ActivitySet, ActivityType
from ..models.day import validate_day_key
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class DayRecordService:
    """
    Read and toggle the activity record of a day.

    Each load performs exactly one store read; each toggle performs one read
    and one write. Toggles for the same day key are serialized through a
    per-key lock, so concurrent toggles issued through one service instance
    cannot lose each other's update. Writers outside this instance are still
    last-writer-wins on the whole record.

    Attributes:
        store: Key-value store holding the day records

    Example:
        >>> days = DayRecordService(InMemoryKeyValueStore())
        >>> await days.toggle("2024-06-01", ActivityType.EXERCISING)
        ActivitySet(reading=False, exercising=True, music=False)
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._toggle_locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    async def load(self, date: str) -> ActivitySet:
        """
        Load the activities recorded for a day.

        Args:
            date: Day key (YYYY-MM-DD)

        Returns:
            Stored ActivitySet, or the all-false default if the day was never
            written or its payload is corrupt

        Raises:
            InvalidKeyFormatError: If date is not a day key
            StoreUnavailableError: If the store read fails
        """
        validate_day_key(date)

        try:
            value = await self.store.get_item(date)
            if value is None:
                return ActivitySet()
            return ActivitySet.from_store_value(date, value)
        except RecordCorruptError as e:
            logger.warning(
                "Corrupt day record %s, using empty activities: %s", date, e.reason
            )
            return ActivitySet()

    async def toggle(
        self, date: str, activity: Union[ActivityType, str]
    ) -> ActivitySet:
        """
        Flip one activity for a day and persist the full record.

        Args:
            date: Day key (YYYY-MM-DD)
            activity: Activity to flip

        Returns:
            The ActivitySet as written

        Raises:
            InvalidKeyFormatError: If date is not a day key
            UnknownActivityError: If activity is not tracked
            StoreUnavailableError: If the store read or write fails
        """
        validate_day_key(date)
        activity = ActivityType.parse(activity)

        lock = self._acquire_lock_slot(date)
        try:
            async with lock:
                current = await self.load(date)
                updated = current.toggled(activity)
                await self.store.set_item(date, updated.to_store_value())
        finally:
            self._release_lock_slot(date)

        logger.debug(
            "Toggled %s for %s: %s -> %s",
            activity.value,
            date,
            current.is_set(activity),
            updated.is_set(activity),
        )
        return updated

    def _acquire_lock_slot(self, date: str) -> asyncio.Lock:
        if date not in self._toggle_locks:
            self._toggle_locks[date] = asyncio.Lock()
            self._lock_users[date] = 0
        self._lock_users[date] += 1
        return self._toggle_locks[date]

    def _release_lock_slot(self, date: str) -> None:
        # Dropped once no toggle for this day holds or waits on the lock
        self._lock_users[date] -= 1
        if self._lock_users[date] == 0:
            del self._lock_users[date]
            del self._toggle_locks[date]
