"""Disk-backed KV backend using diskcache."""

from typing import Mapping, cast

from .base import KVStore, check_bytes

ONE_GB = 1024 * 1024 * 1024


class Disk(KVStore):
    """KV store backed by diskcache (SQLite + mmap)."""

    def __init__(self, directory: str, size_limit: int = ONE_GB) -> None:
        from diskcache import Cache as DiskCache

        self.store = DiskCache(directory, size_limit=size_limit)

    def get(self, key: str) -> bytes | None:
        return cast(bytes | None, self.store.get(key))

    def set(self, key: str, value: bytes) -> None:
        check_bytes(value)
        self.store[key] = value

    def get_many(self, *args: str) -> Mapping[str, bytes]:
        # One transaction so the batch reads a single snapshot.
        with self.store.transact():
            return {k: v for k in args if (v := self.get(k)) is not None}

    def remove(self, key: str) -> bool:
        return bool(self.store.delete(key, retry=True))

    def cas(self, key: str, value: bytes, expected: bytes | None) -> bool:
        check_bytes(value)
        with self.store.transact():
            current = cast(bytes | None, self.store.get(key))
            if current == expected:
                self.store[key] = value
                return True
            return False

    def clear(self) -> None:
        self.store.clear()

    def close(self) -> None:
        self.store.close()
