"""Store client protocol and factory function."""

from __future__ import annotations

import pickle
from typing import Any, Callable, Literal, Protocol, Sequence, runtime_checkable

from .bucket import Bucket
from .document import Cas, Document
from .errors import DriverError


@runtime_checkable
class StoreClient(Protocol):
    """Protocol for the document store a ``Driver`` delegates to.

    ``get`` raises ``DocumentNotFound`` on a miss and anything else on an
    operational failure. ``get_multi`` reports per-key outcomes in the
    returned mapping instead of raising.

    Implementations: ``Bucket``.
    """

    async def get(self, key: str) -> Document: ...
    async def get_multi(self, keys: Sequence[str]) -> dict[str, Document | DriverError]: ...
    async def upsert(self, key: str, value: Any, *, cas: Cas | None = None) -> Cas: ...
    async def remove(self, key: str) -> Cas: ...


def bucket(
    storage: Literal["memory", "disk"] = "memory",
    *,
    path: str | None = None,
    encoder: Callable[[Any], bytes] = pickle.dumps,
    decoder: Callable[[bytes], Any] = pickle.loads,
) -> Bucket:
    """Create a Bucket with sensible defaults.

    Args:
        storage: ``"memory"`` (default) or ``"disk"``.
        path: Required when ``storage="disk"``. Directory path for
            the disk backend.
        encoder: Envelope encoder (default ``pickle.dumps``).
        decoder: Envelope decoder (default ``pickle.loads``).

    Returns:
        A ``Bucket`` bound to the chosen backend.
    """
    if storage == "memory":
        from .kv.memory import Memory

        backend = Memory()
    elif storage == "disk":
        if path is None:
            raise ValueError("path is required when storage='disk'")
        from .kv.disk import Disk

        backend = Disk(path)
    else:
        raise ValueError(f"Unknown storage: {storage!r}")

    return Bucket(backend, encoder=encoder, decoder=decoder)
