# /app/services/dashboard_service.py

# --- Core Imports ---
# Import the Pydantic models to ensure our output matches the data contract.
from ..models.dashboard_model import DashboardSummary, RecentGeneration
# Import the DatabaseService to interact with our data layer.
from .database_service import DatabaseService

RECENT_GENERATION_LIMIT = 5

# --- Core Public Function ---

def get_summary_data(db: DatabaseService) -> DashboardSummary:
    """
    Calculates the dashboard summary statistics by retrieving data from the
    database service and performing aggregations.

    Args:
        db: An instance of the DatabaseService, provided by dependency injection.

    Returns:
        A DashboardSummary Pydantic object with the counts and the latest
        generations. A generation whose student is missing keeps a None name.
    """
    try:
        students = db.list_students()
        records = db.list_records()
        generated = db.list_generated()

        names = {s.id: s.name for s in students}
        recent = [
            RecentGeneration(
                id=g.id,
                studentName=names.get(g.studentId),
                category=g.category,
                content=g.content,
                createdAt=g.createdAt,
            )
            for g in generated[:RECENT_GENERATION_LIMIT]
        ]

        return DashboardSummary(
            studentCount=len(students),
            recordCount=len(records),
            generationCount=len(generated),
            recentGenerations=recent,
        )
    except Exception as e:
        print(f"ERROR calculating summary data: {e}")
        # Re-raise the exception to be handled in the router layer.
        raise
