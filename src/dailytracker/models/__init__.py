"""
Data models for the DailyTracker application.

This module contains the Pydantic models and key helpers shared by every
component that reads or writes day records. The record encoding and the key
naming convention live here so that components never need each other's API.

Classes:
    ActivityType: Enum of tracked activities
    ActivitySet: Activity flags stored for one day
    DayRecord: Day key paired with its ActivitySet
"""

from .activity import ActivitySet, ActivityType, unlocked
from .day import (
    DAY_KEY_PATTERN,
    DayRecord,
    is_day_key,
    to_day_key,
    today_key,
    validate_day_key,
)

__all__ = [
    "ActivitySet",
    "ActivityType",
    "DayRecord",
    "DAY_KEY_PATTERN",
    "is_day_key",
    "to_day_key",
    "today_key",
    "unlocked",
    "validate_day_key",
]
