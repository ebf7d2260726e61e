"""
Activity data model for the DailyTracker application.

This module defines the fixed set of tracked activities and the ActivitySet
record stored for each calendar day. An ActivitySet is serialized as a JSON
object with exactly three boolean fields; the "unlocked" status of a day is
derived from those fields and never persisted.

Classes:
    ActivityType: Enum naming the activities that can be toggled
    ActivitySet: Pydantic model holding the three activity flags

Functions:
    unlocked: Whether any activity in a set is marked
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from ..exceptions import RecordCorruptError, UnknownActivityError


class ActivityType(str, Enum):
    """
    Enumeration of tracked activities.

    Each value is also the name of the matching field on ActivitySet and in
    the stored JSON payload.
    """

    READING = "reading"
    EXERCISING = "exercising"
    MUSIC = "music"

    @classmethod
    def parse(cls, value: Union["ActivityType", str]) -> "ActivityType":
        """
        Resolve an activity name into an ActivityType.

        Args:
            value: ActivityType member or its exact lowercase name

        Returns:
            Matching ActivityType

        Raises:
            UnknownActivityError: If the value does not name a tracked activity
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownActivityError(value)

        try:
            return cls(value)
        except ValueError:
            raise UnknownActivityError(value) from None


class ActivitySet(BaseModel):
    """
    The activity flags recorded for one calendar day.

    Missing fields read as False, unknown fields in stored data are ignored
    and therefore dropped on the next write. Field values must be real JSON
    booleans; anything else makes the payload corrupt.

    Attributes:
        reading: Whether the user read that day
        exercising: Whether the user exercised that day
        music: Whether the user played or practiced music that day

    Example:
        >>> activities = ActivitySet(reading=True)
        >>> activities.unlocked
        True
        >>> activities.toggled(ActivityType.READING).unlocked
        False
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    reading: StrictBool = Field(default=False, description="Read that day")
    exercising: StrictBool = Field(default=False, description="Exercised that day")
    music: StrictBool = Field(default=False, description="Made music that day")

    @property
    def unlocked(self) -> bool:
        """True if at least one activity is marked."""
        return self.reading or self.exercising or self.music

    def is_set(self, activity: Union[ActivityType, str]) -> bool:
        return getattr(self, ActivityType.parse(activity).value)

    def toggled(self, activity: Union[ActivityType, str]) -> "ActivitySet":
        """
        Return a copy with exactly one activity flag flipped.

        Args:
            activity: Activity to flip

        Returns:
            New ActivitySet, the other two flags unchanged

        Raises:
            UnknownActivityError: If the activity is not tracked
        """
        name = ActivityType.parse(activity).value
        return self.model_copy(update={name: not getattr(self, name)})

    def to_store_value(self) -> str:
        """Serialize to the JSON payload written under a day key."""
        return self.model_dump_json()

    @classmethod
    def from_store_value(cls, key: str, value: Optional[str]) -> "ActivitySet":
        """
        Parse the JSON payload stored under a day key.

        Args:
            key: Day key the payload was read from, used for error reporting
            value: Raw stored string

        Returns:
            Parsed ActivitySet

        Raises:
            RecordCorruptError: If the payload is not a JSON object of booleans
        """
        if value is None:
            raise RecordCorruptError(key, value, "no value stored")

        try:
            return cls.model_validate_json(value)
        except ValidationError as e:
            reason = "; ".join(err["msg"] for err in e.errors()) or str(e)
            raise RecordCorruptError(key, value, reason) from e


def unlocked(activities: ActivitySet) -> bool:
    """Whether a day with these activities counts as unlocked."""
    return activities.unlocked
