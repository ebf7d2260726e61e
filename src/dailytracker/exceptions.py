"""
Exception hierarchy for the DailyTracker application.

Store failures are the only errors surfaced to callers of the service layer.
Corrupt records are raised by the model decoding layer and recovered at the
data boundary; key format and activity name errors reject bad caller input
before the store is touched.

Classes:
    TrackerError: Base class for all application errors
    StoreUnavailableError: An underlying key-value store call failed
    RecordCorruptError: A stored day value is not a well-formed ActivitySet
    InvalidKeyFormatError: A date key does not match YYYY-MM-DD
    UnknownActivityError: A toggle target is not a tracked activity
"""

from typing import Optional


class TrackerError(Exception):
    """Base exception for all DailyTracker errors."""


class StoreUnavailableError(TrackerError):
    """Raised when a get/set/list-keys call against the store fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        key: Optional[str] = None,
    ):
        self.message = message
        self.operation = operation
        self.key = key
        super().__init__(self.message)


class RecordCorruptError(TrackerError):
    """Raised when a value under a day key cannot be parsed as an ActivitySet."""

    def __init__(self, key: str, payload: Optional[str] = None, reason: str = ""):
        self.key = key
        self.payload = payload
        self.reason = reason
        super().__init__(f"Record '{key}' is corrupt: {reason}")


class InvalidKeyFormatError(TrackerError, ValueError):
    """Raised when a caller supplies a day key not shaped like YYYY-MM-DD."""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"Invalid day key {key!r}: expected YYYY-MM-DD")


class UnknownActivityError(TrackerError, ValueError):
    """Raised when toggling an activity that is not tracked."""

    def __init__(self, activity: object):
        self.activity = activity
        super().__init__(f"Unknown activity {activity!r}")
