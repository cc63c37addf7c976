# /app/models/record_model.py

"""
Data contracts for observation records.

A record is identified logically by its natural key
`(studentId, category, subCategory, point)`; the store guarantees at most
one record per key and keeps the original `id` and `createdAt` when the
same key is saved again.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Tuple

NaturalKey = Tuple[str, str, str, str]


class ObservationRecordBase(BaseModel):
    studentId: str = Field(..., description="The id of the observed student. Not checked against the roster.")
    category: str = Field(..., description="Top-level category, e.g. '세특'.")
    subCategory: str = Field(..., description="Subcategory within the category.")
    point: str = Field(..., description="The observation point within the subcategory.")
    checkedExamples: List[int] = Field(
        default_factory=list,
        description="Indices into the example phrases of this point. Not bounds-checked."
    )
    memo: str = Field(default="", description="Free-text teacher note.")

    @field_validator("checkedExamples")
    @classmethod
    def _distinct_indices(cls, value: List[int]) -> List[int]:
        # Persisted as an ordered sequence of distinct indices; first occurrence wins.
        return list(dict.fromkeys(value))

    @property
    def natural_key(self) -> NaturalKey:
        return (self.studentId, self.category, self.subCategory, self.point)


class ObservationRecordCreate(ObservationRecordBase):
    """The payload for saving a record. `id` and `createdAt` are assigned by the store."""
    pass


class ObservationRecord(ObservationRecordBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    createdAt: str


class ObservationEntry(BaseModel):
    """One student's row on the observation sheet."""
    studentId: str
    checkedExamples: List[int] = Field(default_factory=list)
    memo: str = ""


class ObservationBatch(BaseModel):
    """
    Defines the contract for saving a whole observation sheet at once:
    one classification and a row per student.
    """
    category: str
    subCategory: str
    point: str
    entries: List[ObservationEntry]


class ObservationSheet(BaseModel):
    """The data needed to render the recording page for one observation point."""
    category: str
    subCategory: str
    point: str
    examples: List[str]
    records: List[ObservationRecord]
