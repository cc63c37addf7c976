# /app/db/models/storage_models.py

"""
This module defines the SQLAlchemy ORM model backing the key-value storage.

Each row is one named slot (e.g. `ai_records_students`) holding a whole
JSON-serialized collection, mirroring how a browser's local storage keeps
one string per key.
"""

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from ..base_class import Base


class StorageSlot(Base):
    """A single named slot of the key-value storage."""
    __tablename__ = "storage_slots"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
