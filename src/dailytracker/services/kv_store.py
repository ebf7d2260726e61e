"""
Key-value store contract for the DailyTracker application.

Every component persists through the same asynchronous, string-keyed store.
The store is a shared namespace: day records live next to unrelated keys such
as the counter value, so readers must filter keys they do not own.

Classes:
    KeyValueStore: Abstract async get/set/list-keys contract
    InMemoryKeyValueStore: Dict-backed store for local use and tests

Functions:
    create_store: Build the store selected by the STORE_BACKEND variable
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Set

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    Asynchronous string-keyed, string-valued store.

    Each call is atomic on its own; there are no multi-key transactions.
    Implementations raise StoreUnavailableError when the underlying storage
    cannot serve a call.
    """

    @abstractmethod
    async def get_all_keys(self) -> Set[str]:
        """Return every key currently present, in no particular order."""

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """
        Return the value stored under key, or None if absent.

        Raises RecordCorruptError if an entry exists but holds no string value.
        """

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "backend": type(self).__name__}


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local store backed by a dict.

    Useful for local runs and tests. Contents are lost when the process exits.

    Example:
        >>> store = InMemoryKeyValueStore({"notes": "hello"})
        >>> await store.get_item("notes")
        'hello'
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get_all_keys(self) -> Set[str]:
        return set(self._data)

    async def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def health_check(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "backend": "memory",
            "item_count": len(self._data),
        }


def create_store(backend: Optional[str] = None) -> KeyValueStore:
    """
    Create the key-value store configured for this environment.

    Args:
        backend: Optional override of the STORE_BACKEND environment variable,
            either "memory" or "dynamodb" (the default)

    Returns:
        Configured KeyValueStore

    Raises:
        ValueError: If the backend name is not recognised
    """
    backend = (backend or os.getenv("STORE_BACKEND", "dynamodb")).lower()

    if backend == "memory":
        logger.info("Using in-memory key-value store")
        return InMemoryKeyValueStore()

    if backend == "dynamodb":
        # dynamodb_service subclasses KeyValueStore, so import at call time
        from .dynamodb_service import DynamoDBKeyValueStore

        return DynamoDBKeyValueStore()

    raise ValueError(f"Unknown STORE_BACKEND '{backend}': expected memory or dynamodb")
