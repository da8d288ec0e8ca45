"""In-memory KV backend."""

import threading
from typing import Mapping

from .base import KVStore, check_bytes


class Memory(KVStore):
    """A memory-backed KV store."""

    def __init__(self) -> None:
        self.memory: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        return self.memory.get(key)

    def set(self, key: str, value: bytes) -> None:
        check_bytes(value)
        with self._lock:
            self.memory[key] = value

    def get_many(self, *args: str) -> Mapping[str, bytes]:
        return {key: val for key in args if (val := self.memory.get(key)) is not None}

    def remove(self, key: str) -> bool:
        with self._lock:
            return self.memory.pop(key, None) is not None

    def cas(self, key: str, value: bytes, expected: bytes | None) -> bool:
        check_bytes(value)
        with self._lock:
            current = self.memory.get(key)
            if current == expected:
                self.memory[key] = value
                return True
            return False

    def clear(self) -> None:
        with self._lock:
            self.memory.clear()
