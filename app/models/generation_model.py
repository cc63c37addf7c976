# /app/models/generation_model.py

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional


class GeneratedContentBase(BaseModel):
    studentId: str
    category: str
    content: str
    charCount: int = Field(..., description="Requested target length. Advisory only.")
    style: str = Field(..., description="Requested writing style, e.g. '서술체'.")


class GeneratedContentCreate(GeneratedContentBase):
    """The payload for appending to the generation log. `id` and `createdAt` are assigned by the store."""
    pass


class GeneratedContent(GeneratedContentBase):
    """
    Defines the data contract for a single entry of the generation log
    when it is retrieved from storage.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    createdAt: str


class GenerationRequest(BaseModel):
    """
    Defines the contract for the data required to run the summary generator
    over a selection of students.
    """
    studentIds: List[str]
    category: str = "세특"
    charCount: int = 300
    style: str = "서술체"


class GenerationHistory(BaseModel):
    results: List[GeneratedContent]
    total: int
    category: Optional[str] = None
