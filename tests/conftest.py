"""
Pytest configuration and shared fixtures for DailyTracker tests.

This module contains pytest configuration, shared fixtures, and test stores
used across multiple test modules. It sets up mocked DynamoDB tables and
in-memory stores with instrumentation for counting and failing calls.

Fixtures:
    memory_store: Empty in-memory key-value store
    recording_store: In-memory store that records every call
    make_failing_store: Factory for stores whose chosen operations fail
    mock_dynamodb_table: Mocked DynamoDB table for the store adapter
    dynamodb_store: DynamoDBKeyValueStore bound to the mocked table
    day_service, history_service, counter_service, activity_service
"""

import asyncio
import os
from typing import Dict, List, Optional, Set, Tuple

import boto3
import pytest
from moto import mock_aws

from dailytracker.exceptions import StoreUnavailableError
from dailytracker.services.activity_service import ActivityService
from dailytracker.services.counter_service import CounterService
from dailytracker.services.day_record_service import DayRecordService
from dailytracker.services.dynamodb_service import DynamoDBKeyValueStore
from dailytracker.services.history_service import HistoryService
from dailytracker.services.kv_store import InMemoryKeyValueStore


# Test configuration constants
TEST_TABLE_NAME = "test-daily-tracker-table"


class RecordingStore(InMemoryKeyValueStore):
    """
    In-memory store that records calls and yields to the event loop.

    Yielding on every call lets concurrently scheduled operations interleave
    the way they would against a real asynchronous store.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        super().__init__(initial)
        self.calls: List[Tuple[str, Optional[str]]] = []

    async def get_all_keys(self) -> Set[str]:
        self.calls.append(("get_all_keys", None))
        await asyncio.sleep(0)
        return await super().get_all_keys()

    async def get_item(self, key: str) -> Optional[str]:
        self.calls.append(("get_item", key))
        await asyncio.sleep(0)
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        self.calls.append(("set_item", key))
        await asyncio.sleep(0)
        await super().set_item(key, value)

    def count(self, operation: str) -> int:
        return sum(1 for name, _ in self.calls if name == operation)


class FailingStore(InMemoryKeyValueStore):
    """In-memory store whose selected operations raise StoreUnavailableError."""

    def __init__(
        self,
        initial: Optional[Dict[str, str]] = None,
        fail_on: Tuple[str, ...] = (),
        fail_keys: Tuple[str, ...] = (),
    ):
        super().__init__(initial)
        self.fail_on = fail_on
        self.fail_keys = fail_keys

    def _check(self, operation: str, key: Optional[str] = None) -> None:
        if operation in self.fail_on and (not self.fail_keys or key in self.fail_keys):
            raise StoreUnavailableError(
                f"simulated {operation} failure", operation=operation, key=key
            )

    async def get_all_keys(self) -> Set[str]:
        self._check("get_all_keys")
        return await super().get_all_keys()

    async def get_item(self, key: str) -> Optional[str]:
        self._check("get_item", key)
        return await super().get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        self._check("set_item", key)
        await super().set_item(key, value)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def make_failing_store():
    """
    Fixture that returns a factory for failing stores.

    Example:
        >>> store = make_failing_store({"2024-01-01": "{}"}, fail_on=("get_all_keys",))
    """

    def _make(initial=None, fail_on=(), fail_keys=()):
        return FailingStore(initial, fail_on=tuple(fail_on), fail_keys=tuple(fail_keys))

    return _make


@pytest.fixture(scope="session")
def aws_credentials():
    """
    Fixture to set up AWS credentials for testing.

    Sets environment variables for AWS credentials that are used by moto
    for mocking AWS services. These are fake credentials for testing only.
    """
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def mock_dynamodb_table(aws_credentials):
    """
    Fixture that creates a mocked DynamoDB table for testing.

    Uses moto to create an in-memory DynamoDB table with a string hash key
    named "key", matching what DynamoDBKeyValueStore expects.

    Returns:
        boto3.resource.Table: Mocked DynamoDB table resource
    """
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName=TEST_TABLE_NAME,
            KeySchema=[{"AttributeName": "key", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "key", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()
        yield table


@pytest.fixture
def dynamodb_store(mock_dynamodb_table) -> DynamoDBKeyValueStore:
    return DynamoDBKeyValueStore(table_name=TEST_TABLE_NAME)


@pytest.fixture
def day_service(memory_store) -> DayRecordService:
    return DayRecordService(memory_store)


@pytest.fixture
def history_service(memory_store) -> HistoryService:
    return HistoryService(memory_store)


@pytest.fixture
def counter_service(memory_store) -> CounterService:
    return CounterService(memory_store)


@pytest.fixture
def activity_service(memory_store) -> ActivityService:
    """
    Fixture that provides a complete ActivityService over the memory store.

    The day, history and counter fixtures share the same store, so tests can
    write through one and read through another.
    """
    return ActivityService(store=memory_store)


# Pytest configuration
def pytest_configure(config):
    """
    Pytest configuration function.

    Registers custom markers for organizing test execution.
    """
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "aws: mark test as requiring mocked AWS services")
