"""Shared fixtures and test doubles."""

import asyncio

import pytest
import pytest_asyncio

from docdriver import Bucket, Driver

MOCK_DATA = [
    ("driver_test_mock_1", {"foo": "bar"}),
    ("driver_test_mock_2", {"firstName": "Bob", "lastName": "Smith"}),
    ("driver_test_mock_3", {"firstName": "Bill", "lastName": "Jones"}),
]
MOCK_KEYS = [key for key, _ in MOCK_DATA]
MOCK_VALUES = [value for _, value in MOCK_DATA]


class CountingStore:
    """Store client double that counts calls and injects faults.

    Args:
        store: Store to delegate to.
        errors: Per-key exceptions raised from ``get``.
        delays: Per-key sleep (seconds) before ``get`` answers.
    """

    def __init__(self, store, errors=None, delays=None):
        self.store = store
        self.errors = dict(errors or {})
        self.delays = dict(delays or {})
        self.get_calls: list[str] = []
        self.get_multi_calls: list[list[str]] = []
        self.completed: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def get(self, key):
        self.get_calls.append(key)
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            if key in self.delays:
                await asyncio.sleep(self.delays[key])
            self.completed.append(key)
            if key in self.errors:
                raise self.errors[key]
            return await self.store.get(key)
        finally:
            self.in_flight -= 1

    async def drain(self, timeout=1.0):
        """Wait until no ``get`` call is in flight."""

        async def settled():
            while self.in_flight:
                await asyncio.sleep(0.005)

        await asyncio.wait_for(settled(), timeout)

    async def get_multi(self, keys):
        self.get_multi_calls.append(list(keys))
        return await self.store.get_multi(keys)

    async def upsert(self, key, value, *, cas=None):
        return await self.store.upsert(key, value, cas=cas)

    async def remove(self, key):
        return await self.store.remove(key)


class Recorder:
    """Callback that records its arguments and can be awaited."""

    def __init__(self):
        self.calls: list[tuple] = []
        self._done = asyncio.get_running_loop().create_future()

    def __call__(self, *args):
        self.calls.append(args)
        if not self._done.done():
            self._done.set_result(args)

    async def wait(self):
        return await asyncio.wait_for(self._done, timeout=1)


@pytest.fixture
def counting():
    return CountingStore(Bucket())


@pytest.fixture
def driver(counting):
    return Driver.create(counting)


@pytest_asyncio.fixture
async def seeded(driver, counting):
    for key, value in MOCK_DATA:
        await counting.store.upsert(key, value)
    return driver
