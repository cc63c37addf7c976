# /app/services/database_helpers/base_repository.py

"""
The shared base for every repository of the local record store.

A repository owns exactly one storage slot. The slot holds the whole
collection as a JSON array; reads parse and validate the full array,
writes serialize the full array and store it with a single call.
"""

from typing import Callable, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .key_value_storage import KeyValueStorage
from .identifiers import IdFactory

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseRepository(Generic[ModelT]):
    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        model: Type[ModelT],
        id_factory: IdFactory,
        seed_factory: Callable[[], List[ModelT]] = list,
    ):
        self.storage = storage
        self.key = key
        self.model = model
        self.ids = id_factory
        self.seed_factory = seed_factory
        self._adapter = TypeAdapter(List[model])

    def ensure_initialized(self) -> None:
        """Writes the seed collection if the slot is absent. Never overwrites an existing slot."""
        with self.storage.lock:
            if self.storage.get_item(self.key) is None:
                self._write(self.seed_factory())

    def _read(self) -> Optional[List[ModelT]]:
        """
        Returns the parsed collection, or None if the slot is absent or
        malformed. A collection with a single invalid item counts as
        malformed as a whole.
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            print(f"WARNING: Storage slot '{self.key}' is malformed, ignoring its contents. Error: {e.error_count()} validation error(s).")
            return None

    def _read_or_empty(self) -> List[ModelT]:
        items = self._read()
        return [] if items is None else items

    def _write(self, items: List[ModelT]) -> None:
        # Callers that read before writing must hold `self.storage.lock` across both.
        # Serialize first so a failure here leaves the stored slot untouched.
        payload = self._adapter.dump_json(items).decode("utf-8")
        self.storage.set_item(self.key, payload)
