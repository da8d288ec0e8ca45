"""Bucket: asyncio document store over a bytes KV backend."""

from __future__ import annotations

import asyncio
import itertools
import logging
import pickle
import time
from typing import Any, Callable, Sequence

from .document import Cas, Document
from .errors import CasMismatch, DocumentNotFound, DriverError, StoreError
from .kv.base import KVStore
from .kv.memory import Memory

logger = logging.getLogger(__name__)


class Bucket:
    """Document store implementing the ``StoreClient`` protocol.

    Each key holds an envelope ``{"cas": int, "value": value}`` encoded
    to bytes with ``encoder`` (pickle by default). Every write stamps a
    fresh version token.

    Backend calls run in a worker thread via ``asyncio.to_thread`` so a
    slow backend (e.g. ``Disk``) never blocks the event loop. Backend
    failures surface as ``StoreError`` with the original exception
    chained as ``__cause__``.

    Args:
        backend: Bytes KV backend. Defaults to a fresh ``Memory``.
        encoder: Envelope -> bytes.
        decoder: bytes -> envelope.
    """

    def __init__(
        self,
        backend: KVStore | None = None,
        *,
        encoder: Callable[[Any], bytes] = pickle.dumps,
        decoder: Callable[[bytes], Any] = pickle.loads,
    ) -> None:
        self._kv = backend if backend is not None else Memory()
        self._encoder = encoder
        self._decoder = decoder
        self._cas_seq = itertools.count(time.time_ns())

    @property
    def backend(self) -> KVStore:
        return self._kv

    # -- Envelope encoding --

    def _next_cas(self) -> int:
        return next(self._cas_seq)

    def _encode(self, value: Any, cas: int) -> bytes:
        return self._encoder({"cas": cas, "value": value})

    def _decode(self, raw: bytes) -> Document:
        envelope = self._decoder(raw)
        return Document(value=envelope["value"], cas=Cas(envelope["cas"]))

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except DriverError:
            raise
        except Exception as e:
            logger.debug("backend %s failed: %r", fn.__name__, e)
            raise StoreError(f"{fn.__name__} failed: {e}") from e

    # -- Read operations --

    def _get(self, key: str) -> Document:
        raw = self._kv.get(key)
        if raw is None:
            raise DocumentNotFound(key)
        return self._decode(raw)

    async def get(self, key: str) -> Document:
        """Fetch one document. Raises ``DocumentNotFound`` on a miss."""
        return await self._run(self._get, key)

    def _get_multi(self, keys: Sequence[str]) -> dict[str, Document | DriverError]:
        found = self._kv.get_many(*keys)
        result: dict[str, Document | DriverError] = {}
        for key in keys:
            raw = found.get(key)
            if raw is None:
                result[key] = DocumentNotFound(key)
                continue
            try:
                result[key] = self._decode(raw)
            except Exception as e:
                error = StoreError(f"cannot decode {key}: {e}")
                error.__cause__ = e
                result[key] = error
        return result

    async def get_multi(self, keys: Sequence[str]) -> dict[str, Document | DriverError]:
        """Fetch many documents in one backend round-trip.

        Returns a mapping with an entry per distinct key: a ``Document``
        for hits, a ``DocumentNotFound`` instance for misses, or a
        ``StoreError`` instance if that key's envelope could not be
        decoded.
        """
        return await self._run(self._get_multi, list(keys))

    # -- Write operations --

    def _upsert(self, key: str, value: Any, cas: Cas | None) -> Cas:
        new_cas = self._next_cas()
        raw = self._encode(value, new_cas)
        if cas is None:
            self._kv.set(key, raw)
            return Cas(new_cas)

        current = self._kv.get(key)
        if current is None:
            raise DocumentNotFound(key)
        if self._decode(current).cas != cas:
            raise CasMismatch(key)
        if not self._kv.cas(key, raw, expected=current):
            raise CasMismatch(key)
        return Cas(new_cas)

    async def upsert(self, key: str, value: Any, *, cas: Cas | None = None) -> Cas:
        """Write a document, returning its new version token.

        With ``cas``, the write only lands if the stored document still
        carries that token.
        """
        return await self._run(self._upsert, key, value, cas)

    def _remove(self, key: str) -> Cas:
        if not self._kv.remove(key):
            raise DocumentNotFound(key)
        return Cas(self._next_cas())

    async def remove(self, key: str) -> Cas:
        """Remove a document. Raises ``DocumentNotFound`` if absent."""
        return await self._run(self._remove, key)

    # -- Lifecycle --

    async def flush(self) -> None:
        """Remove every document in the bucket."""
        await self._run(self._kv.clear)

    def close(self) -> None:
        self._kv.close()
