"""Abstract bytes KV backend interface."""

from abc import ABC, abstractmethod
from typing import Mapping


class KVStore(ABC):
    """Key-value backend operating on bytes only.

    Backends are synchronous. Document envelopes, version tokens and
    serialization live one layer up, in ``Bucket``.
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Get bytes value for key, or None if not found."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Set bytes value for key."""

    @abstractmethod
    def get_many(self, *args: str) -> Mapping[str, bytes]:
        """Get multiple keys, returning only keys that exist."""

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove a key. Returns False if it was not present."""

    @abstractmethod
    def cas(self, key: str, value: bytes, expected: bytes | None) -> bool:
        """Atomic compare-and-swap.

        Set value only if current value equals expected.
        None means "key must not exist".

        Returns True if swap succeeded, False otherwise.
        """

    @abstractmethod
    def clear(self) -> None:
        """Remove all items from the store."""

    def close(self) -> None:
        """Release backend resources. No-op by default."""


def check_bytes(value: object) -> bytes:
    """Return value unchanged, or raise TypeError if it is not bytes."""
    if not isinstance(value, bytes):
        raise TypeError(f"Expected bytes, got {type(value).__name__}")
    return value
