"""Unit tests for the counter service."""

import asyncio
import logging

import pytest

from dailytracker.exceptions import StoreUnavailableError
from dailytracker.services.counter_service import COUNTER_KEY, CounterService


@pytest.mark.asyncio
async def test_absent_counter_reads_zero(counter_service):
    assert await counter_service.get() == 0


@pytest.mark.asyncio
async def test_increment_and_decrement(memory_store, counter_service):
    assert await counter_service.increment() == 1
    assert await counter_service.increment() == 2
    assert await counter_service.decrement() == 1

    assert await memory_store.get_item(COUNTER_KEY) == "1"


@pytest.mark.asyncio
async def test_counter_can_go_negative(counter_service):
    assert await counter_service.decrement() == -1
    assert await counter_service.get() == -1


@pytest.mark.asyncio
async def test_non_integer_value_reads_zero(memory_store, counter_service, caplog):
    await memory_store.set_item(COUNTER_KEY, "lots")

    with caplog.at_level(logging.WARNING):
        assert await counter_service.get() == 0

    assert COUNTER_KEY in caplog.text


@pytest.mark.asyncio
async def test_concurrent_increments_are_serialized(recording_store):
    counter = CounterService(recording_store)

    await asyncio.gather(*(counter.increment() for _ in range(5)))

    assert await counter.get() == 5


@pytest.mark.asyncio
async def test_store_failure_propagates(make_failing_store):
    counter = CounterService(make_failing_store(fail_on=["set_item"]))

    with pytest.raises(StoreUnavailableError):
        await counter.increment()
