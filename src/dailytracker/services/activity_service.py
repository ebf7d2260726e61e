"""
Activity service for the DailyTracker application.

This service wires one key-value store into the day record, history and
counter services and exposes the operations used by the API layer. The
underlying services never call each other; they only share the store.

Classes:
    ActivityService: Facade over day records, history and the counter
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from ..models.activity import ActivityType
from ..models.day import DayRecord, today_key
from .counter_service import CounterService
from .day_record_service import DayRecordService
from .history_service import HistoryService
from .kv_store import KeyValueStore, create_store


class ActivityService:
    """
    Application facade for daily activity tracking.

    History is read from the store on every call; nothing is cached between
    requests.

    Attributes:
        store: Shared key-value store
        day_service: Loads and toggles single days
        history_service: Lists all recorded days
        counter_service: Maintains the stored counter

    Example:
        >>> activity_service = ActivityService(store=InMemoryKeyValueStore())
        >>> await activity_service.toggle_activity("2024-06-01", "exercising")
        >>> [day.date for day in await activity_service.get_history()]
        ['2024-06-01']
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        day_service: Optional[DayRecordService] = None,
        history_service: Optional[HistoryService] = None,
        counter_service: Optional[CounterService] = None,
    ):
        """
        Initialize the activity service.

        Creates the store from environment configuration and default service
        instances if not provided.

        Args:
            store: Optional key-value store, defaults to create_store()
            day_service: Optional day record service instance
            history_service: Optional history service instance
            counter_service: Optional counter service instance
        """
        self.store = store or create_store()
        self.day_service = day_service or DayRecordService(self.store)
        self.history_service = history_service or HistoryService(self.store)
        self.counter_service = counter_service or CounterService(self.store)

    async def get_day(self, date: Optional[str] = None) -> DayRecord:
        """
        Load one day, defaulting to today's local date.

        Raises:
            InvalidKeyFormatError: If date is not a day key
            StoreUnavailableError: If the store read fails
        """
        date = today_key() if date is None else date
        activities = await self.day_service.load(date)
        return DayRecord(date=date, activities=activities)

    async def toggle_activity(
        self, date: Optional[str], activity: Union[ActivityType, str]
    ) -> DayRecord:
        """
        Toggle one activity on a day, defaulting to today's local date.

        Raises:
            InvalidKeyFormatError: If date is not a day key
            UnknownActivityError: If activity is not tracked
            StoreUnavailableError: If the store read or write fails
        """
        date = today_key() if date is None else date
        activities = await self.day_service.toggle(date, activity)
        return DayRecord(date=date, activities=activities)

    async def get_history(self) -> List[DayRecord]:
        return await self.history_service.list_history()

    async def get_counter(self) -> int:
        return await self.counter_service.get()

    async def change_counter(self, delta: int) -> int:
        return await self.counter_service.change(delta)

    def health_check(self) -> Dict[str, Any]:
        """
        Report the health of the backing store.

        Returns:
            Dictionary with overall status, per-service details and timestamp
        """
        health_status = {
            "status": "healthy",
            "services": {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        try:
            store_health = self.store.health_check()
            health_status["services"]["store"] = store_health

            if store_health["status"] != "healthy":
                health_status["status"] = "unhealthy"

        except Exception as e:
            health_status["status"] = "unhealthy"
            health_status["error"] = str(e)

        return health_status
