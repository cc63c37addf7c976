# /app/services/database_service.py

import os
import threading
from typing import List, Optional, Generator
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import SessionLocal

# --- Repository Imports ---
from app.models.student_model import Student, StudentCreate
from app.models.record_model import ObservationRecord, ObservationRecordCreate
from app.models.generation_model import GeneratedContent, GeneratedContentCreate
from .database_helpers.key_value_storage import KeyValueStorage, InMemoryStorage, SQLKeyValueStorage
from .database_helpers.identifiers import Clock, IdFactory, utc_now
from .database_helpers.student_repository import StudentRepository
from .database_helpers.record_repository import RecordRepository
from .database_helpers.generation_repository import GenerationRepository

# Determine which storage backend to use based on environment variables
USE_MEMORY_STORAGE = os.getenv("USE_MEMORY_STORAGE", "false").lower() == "true"
STORAGE_QUOTA_BYTES = int(os.environ["STORAGE_QUOTA_BYTES"]) if os.getenv("STORAGE_QUOTA_BYTES") else None

_memory_storage: Optional[InMemoryStorage] = None
_memory_storage_lock = threading.Lock()


def get_memory_storage() -> InMemoryStorage:
    """Returns the process-wide in-memory backend, creating it on first use."""
    global _memory_storage
    with _memory_storage_lock:
        if _memory_storage is None:
            _memory_storage = InMemoryStorage(quota_bytes=STORAGE_QUOTA_BYTES)
        return _memory_storage


def reset_memory_storage() -> None:
    """Drops the process-wide in-memory backend. The next access starts from empty storage."""
    global _memory_storage
    with _memory_storage_lock:
        _memory_storage = None


class DatabaseService:
    def __init__(
        self,
        db_session: Optional[Session] = None,
        storage: Optional[KeyValueStorage] = None,
        clock: Clock = utc_now,
    ):
        """
        Initializes the DatabaseService over a key-value storage backend.
        An explicit `storage` always wins. Otherwise USE_MEMORY_STORAGE picks
        the shared in-memory backend, and the SQL backend requires a db_session.
        """
        if storage is None:
            if USE_MEMORY_STORAGE:
                storage = get_memory_storage()
            else:
                if not db_session:
                    raise ValueError("A database session is required when USE_MEMORY_STORAGE is false.")
                storage = SQLKeyValueStorage(db_session)

        self.storage = storage
        id_factory = IdFactory(clock)
        self.student_repo = StudentRepository(storage, id_factory)
        self.record_repo = RecordRepository(storage, id_factory)
        self.generation_repo = GenerationRepository(storage, id_factory)
        self.initialize_storage()

    def initialize_storage(self) -> None:
        """First-run bootstrap: installs the seed roster and empty logs into absent slots only."""
        self.student_repo.ensure_initialized()
        self.record_repo.ensure_initialized()
        self.generation_repo.ensure_initialized()

    # --- STUDENT METHODS (DELEGATED) ---
    def list_students(self) -> List[Student]: return self.student_repo.get_all_students()
    def add_student(self, student: StudentCreate) -> Student: return self.student_repo.add_student(student)
    def add_students_bulk(self, students: List[StudentCreate]) -> List[Student]: return self.student_repo.add_students(students)

    # --- OBSERVATION RECORD METHODS (DELEGATED) ---
    def list_records(self, category: Optional[str] = None) -> List[ObservationRecord]: return self.record_repo.get_records(category)
    def upsert_record(self, record: ObservationRecordCreate) -> ObservationRecord: return self.record_repo.save_record(record)

    # --- GENERATION LOG METHODS (DELEGATED) ---
    def list_generated(self) -> List[GeneratedContent]: return self.generation_repo.get_all_generations()
    def append_generated(self, generation: GeneratedContentCreate) -> GeneratedContent: return self.generation_repo.add_generation_record(generation)


# --- DEPENDENCY PROVIDER ---
def get_db_service() -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService instance.
    In memory mode no SQL session is opened; otherwise the request gets its
    own session, closed when the request ends.
    """
    if USE_MEMORY_STORAGE:
        yield DatabaseService()
        return

    db = SessionLocal()
    try:
        yield DatabaseService(db_session=db)
    finally:
        db.close()
