# /app/routers/generations_router.py

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from typing import List, Optional
from urllib.parse import quote

# Import the Pydantic models that define our API contract
from ..models import generation_model

# Import the services that contain our business logic
from ..services import generation_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "",
    response_model=generation_model.GenerationHistory,
    summary="Get Generation History"
)
def get_generation_history(
    category: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=0),
    db: DatabaseService = Depends(get_db_service)
):
    """
    Endpoint to retrieve the generation log, most recent first.
    """
    return generation_service.get_recent_generations(db=db, category=category, limit=limit)


@router.post(
    "",
    response_model=generation_model.GeneratedContent,
    status_code=status.HTTP_201_CREATED,
    summary="Save a Generation"
)
def save_generation(
    payload: generation_model.GeneratedContentCreate,
    db: DatabaseService = Depends(get_db_service)
):
    """
    Endpoint to put an externally produced text at the top of the log.
    """
    return db.append_generated(payload)


@router.post(
    "/generate",
    response_model=List[generation_model.GeneratedContent],
    status_code=status.HTTP_201_CREATED,
    summary="Generate Summaries for Students"
)
def generate_summaries(
    payload: generation_model.GenerationRequest,
    db: DatabaseService = Depends(get_db_service)
):
    try:
        return generation_service.generate_for_students(
            db=db,
            student_ids=payload.studentIds,
            category=payload.category,
            char_count=payload.charCount,
            style=payload.style,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/export", summary="Export Generations as CSV", response_class=StreamingResponse)
def export_generations_csv(category: Optional[str] = None, db: DatabaseService = Depends(get_db_service)):
    csv_string = generation_service.export_generations_as_csv(db=db, category=category)
    file_name = f"generations_{category}.csv" if category else "generations.csv"
    return StreamingResponse(
        iter([csv_string]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(file_name)}"},
    )
