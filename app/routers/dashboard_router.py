# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
# Import the business logic service that this router will use.
from ..services import dashboard_service
# Import the database service dependency provider.
from ..services.database_service import DatabaseService, get_db_service
# Import the Pydantic model to define the response shape (the API contract).
from ..models.dashboard_model import DashboardSummary

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Retrieves the counts and the latest generations for the home page."
)
def get_dashboard_summary(db: DatabaseService = Depends(get_db_service)):
    # Delegate immediately to the service layer to get the summary data.
    return dashboard_service.get_summary_data(db=db)
