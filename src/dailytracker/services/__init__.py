"""
Service layer for the DailyTracker application.

This module contains the persistence and aggregation logic of the tracker
and the key-value store adapters it runs on.

Classes:
    ActivityService: Facade used by the API layer
    DayRecordService: Load and toggle a single day's activities
    HistoryService: List every recorded day, newest first
    CounterService: Integer counter kept in the same store
    KeyValueStore: Async get/set/list-keys store contract
    InMemoryKeyValueStore: Dict-backed store
    DynamoDBKeyValueStore: DynamoDB-backed store
"""

from .activity_service import ActivityService
from .counter_service import CounterService
from .day_record_service import DayRecordService
from .dynamodb_service import DynamoDBKeyValueStore
from .history_service import HistoryService
from .kv_store import InMemoryKeyValueStore, KeyValueStore, create_store

__all__ = [
    "ActivityService",
    "CounterService",
    "DayRecordService",
    "DynamoDBKeyValueStore",
    "HistoryService",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "create_store",
]
