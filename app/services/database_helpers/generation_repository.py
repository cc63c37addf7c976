# /app/services/database_helpers/generation_repository.py

from typing import List

from app.models.generation_model import GeneratedContent, GeneratedContentCreate
from .base_repository import BaseRepository
from .identifiers import IdFactory
from .key_value_storage import KeyValueStorage

GENERATED_KEY = "ai_records_generated"


class GenerationRepository(BaseRepository[GeneratedContent]):
    def __init__(self, storage: KeyValueStorage, id_factory: IdFactory):
        super().__init__(storage, GENERATED_KEY, GeneratedContent, id_factory)

    def get_all_generations(self) -> List[GeneratedContent]:
        """Retrieves the generation log, most recent first, exactly as stored."""
        return self._read_or_empty()

    def add_generation_record(self, record: GeneratedContentCreate) -> GeneratedContent:
        """Creates a new log entry and puts it at the top of the log."""
        with self.storage.lock:
            generations = self._read_or_empty()
            new_generation = GeneratedContent(
                id=self.ids.new_id("gen", taken={g.id for g in generations}),
                createdAt=self.ids.now_iso(),
                **record.model_dump(),
            )
            generations.insert(0, new_generation)
            self._write(generations)
        return new_generation
