# /app/services/database_helpers/record_repository.py

"""
This module contains the observation record repository.

Records are kept in insertion order and are never reordered. Saving is an
upsert on the natural key `(studentId, category, subCategory, point)`.
"""

from typing import List, Optional

from app.models.record_model import ObservationRecord, ObservationRecordCreate
from .base_repository import BaseRepository
from .identifiers import IdFactory
from .key_value_storage import KeyValueStorage

RECORDS_KEY = "ai_records_data"


class RecordRepository(BaseRepository[ObservationRecord]):
    def __init__(self, storage: KeyValueStorage, id_factory: IdFactory):
        super().__init__(storage, RECORDS_KEY, ObservationRecord, id_factory)

    def get_records(self, category: Optional[str] = None) -> List[ObservationRecord]:
        """Returns every record, or only the records of `category` when one is given."""
        records = self._read_or_empty()
        if category:
            return [r for r in records if r.category == category]
        return records

    def save_record(self, record: ObservationRecordCreate) -> ObservationRecord:
        """
        Updates the first record with the same natural key in place, keeping
        its `id` and `createdAt`, or appends a new record. If corrupted data
        holds several records for one key, only the first is updated.
        """
        with self.storage.lock:
            records = self._read_or_empty()
            key = record.natural_key
            existing_index = next(
                (index for index, r in enumerate(records) if r.natural_key == key),
                None,
            )

            if existing_index is not None:
                saved = records[existing_index].model_copy(update=record.model_dump())
                records[existing_index] = saved
            else:
                saved = ObservationRecord(
                    id=self.ids.new_id("rec", taken={r.id for r in records}),
                    createdAt=self.ids.now_iso(),
                    **record.model_dump(),
                )
                records.append(saved)

            self._write(records)
        return saved
