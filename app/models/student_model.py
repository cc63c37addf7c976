# /app/models/student_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import List

# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    The base model for a Student. Contains fields common to create and read operations.
    """
    classId: str = Field(..., min_length=1, description="The section label of the student's class, e.g. '1-1'.")
    number: int = Field(..., description="The roster position. Used as the display and sort key.")
    name: str = Field(..., min_length=1, description="The full name of the student.")

class StudentCreate(StudentBase):
    """The model used for creating a new student. The store assigns the id."""
    pass

class StudentBulkCreate(BaseModel):
    """The payload for adding several students in one write."""
    students: List[StudentCreate]

class Student(StudentBase):
    """
    The full representation of a Student, as it is persisted in the
    students slot and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="The unique, store-assigned identifier for the student.")
