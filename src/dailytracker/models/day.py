"""
Day key helpers and the DayRecord model.

A day key is the storage key of a day's ActivitySet, formatted YYYY-MM-DD
from the local calendar date. Only the shape is checked: "2024-13-40" is a
valid key even though no such date exists.

Classes:
    DayRecord: A day key paired with its ActivitySet

Functions:
    is_day_key: Whether a string is shaped like a day key
    validate_day_key: Return a day key or raise InvalidKeyFormatError
    to_day_key: Format a date as a day key
    today_key: Day key of the local calendar date
"""

import re
from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import InvalidKeyFormatError
from .activity import ActivitySet

DAY_KEY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def is_day_key(value: Any) -> bool:
    return isinstance(value, str) and DAY_KEY_PATTERN.fullmatch(value) is not None


def validate_day_key(value: Any) -> str:
    """
    Check that a value is a well-formed day key.

    Args:
        value: Candidate key

    Returns:
        The key unchanged

    Raises:
        InvalidKeyFormatError: If the value is not a YYYY-MM-DD string
    """
    if not is_day_key(value):
        raise InvalidKeyFormatError(value)
    return value


def to_day_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def today_key(today: Optional[date] = None) -> str:
    """Day key for the device's local calendar date."""
    return to_day_key(today or date.today())


class DayRecord(BaseModel):
    """
    A stored day: its key and its activities.

    Attributes:
        date: Day key (YYYY-MM-DD)
        activities: Activity flags recorded for that day
    """

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Day key in YYYY-MM-DD form")
    activities: ActivitySet = Field(default_factory=ActivitySet)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return validate_day_key(v)

    @property
    def unlocked(self) -> bool:
        return self.activities.unlocked

    def to_api_dict(self) -> Dict[str, Any]:
        """
        Convert the record to the JSON shape returned by the API.

        The unlocked flag is included for display only; it is never part of
        the stored payload.
        """
        return {
            "date": self.date,
            "activities": self.activities.model_dump(),
            "unlocked": self.unlocked,
        }
