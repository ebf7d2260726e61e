"""
DailyTracker: track reading, exercising and music day by day.

This package records, per calendar day, which of a small fixed set of
activities the user did, derives whether the day is "unlocked", and lists the
history of recorded days newest first. Records live in an asynchronous
key-value store keyed by YYYY-MM-DD.

Modules:
    lambdas: AWS Lambda function handlers for the REST API
    services: Day record, history and counter services, store adapters
    models: Data models and validation using Pydantic
    exceptions: Application error hierarchy

Version: 0.1.0
"""

__version__ = "0.1.0"

from .exceptions import (
    InvalidKeyFormatError,
    RecordCorruptError,
    StoreUnavailableError,
    TrackerError,
    UnknownActivityError,
)
from .models import ActivitySet, ActivityType, DayRecord
from .services import (
    ActivityService,
    DayRecordService,
    HistoryService,
    InMemoryKeyValueStore,
    KeyValueStore,
)

__all__ = [
    "ActivitySet",
    "ActivityType",
    "DayRecord",
    "ActivityService",
    "DayRecordService",
    "HistoryService",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "TrackerError",
    "StoreUnavailableError",
    "RecordCorruptError",
    "InvalidKeyFormatError",
    "UnknownActivityError",
]
