"""Driver: retrieval coordinator in front of a document store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from .callbacks import Callback, complete, detach
from .document import Cas, Document, GetResult
from .errors import DocumentNotFound, InvalidRequest
from .operations import Operation
from .store import StoreClient

logger = logging.getLogger(__name__)


def _check_key(key: Any) -> None:
    if not isinstance(key, str):
        raise InvalidRequest(f"key must be a str, not {type(key).__name__}")


def _check_keys(keys: Any) -> None:
    if isinstance(keys, (str, bytes, bytearray)) or not isinstance(keys, Sequence):
        raise InvalidRequest(
            f"keys must be a sequence of str, not {type(keys).__name__}"
        )
    for key in keys:
        _check_key(key)


class Driver:
    """Retrieval coordinator bound to one ``StoreClient``.

    ``get()`` accepts a single key or a sequence of keys. A single key
    resolves to a ``Document`` or fails with ``DocumentNotFound``. A
    sequence resolves to a ``GetResult`` where missing keys are listed
    in ``misses`` rather than treated as failures.

    Every operation takes an optional trailing ``callback``. Without it
    the returned future is awaited; with it the callback receives
    ``(error, ...)`` when the same work completes. See
    ``callbacks.complete``.

    Operations must be called from a running event loop.

    Args:
        store: The document store to delegate to.
    """

    OPERATIONS = Operation

    def __init__(self, store: StoreClient) -> None:
        if not isinstance(store, StoreClient):
            raise TypeError(
                f"Driver requires a StoreClient, not {type(store).__name__}"
            )
        self._store = store

    @classmethod
    def create(cls, store: StoreClient) -> Driver:
        """Create a driver bound to ``store``."""
        return cls(store)

    @property
    def store(self) -> StoreClient:
        """The underlying store client."""
        return self._store

    # -- Retrieval --

    def get(
        self,
        request: str | Sequence[str],
        callback: Callback | None = None,
    ) -> asyncio.Future:
        """Get one document or a batch of documents.

        Args:
            request: A key, or a sequence of keys. Each position in the
                sequence is fetched independently, so a repeated key
                yields a repeated hit (or miss).
            callback: Optional ``(error, document)`` for a single key, or
                ``(error, hits, misses)`` for a sequence.

        Returns:
            A future resolving to a ``Document`` (single key) or a
            ``GetResult`` (sequence).

        Raises:
            InvalidRequest: Synchronously, for a malformed request or
                callback. No store call is issued.
        """
        if isinstance(request, str):
            return complete(callback, self._get_one, request)
        _check_keys(request)
        return complete(callback, self._get_batch, list(request))

    async def _get_one(self, key: str) -> Document:
        return await self._store.get(key)

    async def _fetch(self, key: str) -> Document | BaseException:
        try:
            return await self._store.get(key)
        except Exception as e:
            return e

    async def _get_batch(self, keys: list[str]) -> GetResult:
        if not keys:
            return GetResult(hits=[], misses=[])

        # One task per request position, all started before any is awaited.
        # Reading them back by index keeps completion order out of the result.
        loop = asyncio.get_running_loop()
        slots = [detach(loop.create_task(self._fetch(key))) for key in keys]

        hits: list[Document] = []
        misses: list[str] = []
        for key, slot in zip(keys, slots):
            outcome = await slot
            if isinstance(outcome, DocumentNotFound):
                misses.append(key)
            elif isinstance(outcome, BaseException):
                # Lowest failing position wins; later slots keep running.
                logger.debug(
                    "get: batch of %d failed on %r: %r", len(keys), key, outcome
                )
                raise outcome
            else:
                hits.append(outcome)

        logger.debug("get: %d keys, %d hits, %d misses", len(keys), len(hits), len(misses))
        return GetResult(hits=hits, misses=misses)

    # -- Pass-through operations --

    def upsert(
        self,
        key: str,
        value: Any,
        callback: Callback | None = None,
        *,
        cas: Cas | None = None,
    ) -> asyncio.Future:
        """Write a document. Resolves to the new ``Cas``."""
        _check_key(key)
        return complete(callback, self._store.upsert, key, value, cas=cas)

    def remove(self, key: str, callback: Callback | None = None) -> asyncio.Future:
        """Remove a document. Resolves to the removal's ``Cas``."""
        _check_key(key)
        return complete(callback, self._store.remove, key)

    def get_multi(
        self,
        keys: Sequence[str],
        callback: Callback | None = None,
    ) -> asyncio.Future:
        """Bulk fetch, returning the store's raw per-key mapping."""
        _check_keys(keys)
        return complete(callback, self._store.get_multi, list(keys))


def create(store: StoreClient) -> Driver:
    """Create a ``Driver`` bound to ``store``."""
    return Driver.create(store)
