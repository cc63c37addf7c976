# /app/models/dashboard_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field
from typing import List, Optional

# --- Model Definitions ---

class RecentGeneration(BaseModel):
    """A generation log entry joined with its student's name for display."""
    id: str
    studentName: Optional[str] = Field(
        default=None,
        description="None when the referenced student is not on the roster."
    )
    category: str
    content: str
    createdAt: str


class DashboardSummary(BaseModel):
    """
    Defines the data contract for the response of the dashboard summary endpoint.
    This model specifies the exact shape of the data shown on the home page cards.
    """

    studentCount: int = Field(
        ...,
        description="The number of students on the roster.",
        json_schema_extra={"example": 25}
    )

    recordCount: int = Field(
        ...,
        description="The number of observation records across all categories.",
        json_schema_extra={"example": 112}
    )

    generationCount: int = Field(
        ...,
        description="The number of entries in the generation log.",
        json_schema_extra={"example": 40}
    )

    recentGenerations: List[RecentGeneration] = Field(default_factory=list)
