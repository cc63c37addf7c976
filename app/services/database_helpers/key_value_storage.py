# /app/services/database_helpers/key_value_storage.py

"""
Key-value storage backends for the local record store.

Every backend stores plain strings under string keys, the same contract a
browser's local storage offers. The repositories above this layer always
serialize a whole collection into one string and write it with a single
`set_item` call, so a failed write never leaves a partially updated slot.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.storage_models import StorageSlot


class StorageUnavailableError(Exception):
    """Raised when the underlying storage cannot be read or written."""


class StorageQuotaExceededError(StorageUnavailableError):
    """Raised when a write would take the storage over its byte quota."""


class KeyValueStorage(ABC):
    @property
    @abstractmethod
    def lock(self) -> threading.RLock:
        """
        The lock shared by every user of this storage. Repositories hold it
        from the read through the write of one operation, so concurrent
        requests in one process cannot overwrite each other's slot writes.
        """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Returns the stored string, or None when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Stores `value` under `key`, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Removes `key`. Removing an absent key is a no-op."""

    @abstractmethod
    def clear(self) -> None:
        """Removes every key."""


class InMemoryStorage(KeyValueStorage):
    """
    A process-local backend. Used as the test double and for throwaway
    sessions. An optional `quota_bytes` models the browser storage quota:
    the size of all keys and values after the write must stay within it.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None, quota_bytes: Optional[int] = None):
        self._items: Dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(
                len(k.encode("utf-8")) + len(v.encode("utf-8"))
                for k, v in self._items.items() if k != key
            )
            needed = used + len(key.encode("utf-8")) + len(value.encode("utf-8"))
            if needed > self.quota_bytes:
                print(f"ERROR: Storage quota exceeded writing '{key}' ({needed} > {self.quota_bytes} bytes).")
                raise StorageQuotaExceededError(
                    f"Writing '{key}' needs {needed} bytes but the quota is {self.quota_bytes}."
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


_SQL_STORAGE_LOCK = threading.RLock()


class SQLKeyValueStorage(KeyValueStorage):
    """
    A persistent backend storing each key as one row of the `storage_slots`
    table. Every write is committed on its own; on failure the session is
    rolled back and the error is surfaced as StorageUnavailableError.
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    @property
    def lock(self) -> threading.RLock:
        # Sessions are per request, so every SQL storage in the process shares one lock.
        return _SQL_STORAGE_LOCK

    def get_item(self, key: str) -> Optional[str]:
        try:
            slot = self.db.get(StorageSlot, key, populate_existing=True)
        except SQLAlchemyError as e:
            print(f"ERROR reading storage slot '{key}': {e}")
            raise StorageUnavailableError(f"Could not read storage slot '{key}'.") from e
        return slot.value if slot else None

    def set_item(self, key: str, value: str) -> None:
        try:
            slot = self.db.get(StorageSlot, key, populate_existing=True)
            if slot:
                slot.value = value
            else:
                self.db.add(StorageSlot(key=key, value=value))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            print(f"ERROR writing storage slot '{key}': {e}")
            raise StorageUnavailableError(f"Could not write storage slot '{key}'.") from e

    def remove_item(self, key: str) -> None:
        try:
            self.db.query(StorageSlot).filter(StorageSlot.key == key).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            print(f"ERROR removing storage slot '{key}': {e}")
            raise StorageUnavailableError(f"Could not remove storage slot '{key}'.") from e

    def clear(self) -> None:
        try:
            self.db.query(StorageSlot).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            print(f"ERROR clearing storage: {e}")
            raise StorageUnavailableError("Could not clear storage.") from e
