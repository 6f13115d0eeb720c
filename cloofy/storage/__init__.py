from cloofy.storage.base import Storage, StorageSession
from cloofy.storage.memory import MemoryStorage
from cloofy.storage.sql import SqlStorage


def storage_from_settings(settings) -> Storage:
    if settings.DATABASE_URL.startswith("memory://"):
        return MemoryStorage(lock_timeout=settings.STORAGE_LOCK_TIMEOUT_SECONDS)
    return SqlStorage(
        settings.DATABASE_URL,
        lock_timeout=settings.STORAGE_LOCK_TIMEOUT_SECONDS,
    )


__all__ = [
    "MemoryStorage",
    "SqlStorage",
    "Storage",
    "StorageSession",
    "storage_from_settings",
]
