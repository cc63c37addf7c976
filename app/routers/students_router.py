# /app/routers/students_router.py

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional

from ..models import student_model
from ..services import roster_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

# --- ROSTER COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="Get the Roster")
def get_students(search: Optional[str] = None, db: DatabaseService = Depends(get_db_service)):
    return roster_service.search_students(db=db, query=search or "")

@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Add a Student")
def add_student(student_create: student_model.StudentCreate, db: DatabaseService = Depends(get_db_service)):
    return db.add_student(student_create)

@router.post("/bulk", response_model=List[student_model.Student], status_code=status.HTTP_201_CREATED, summary="Add Several Students")
def add_students_bulk(payload: student_model.StudentBulkCreate, db: DatabaseService = Depends(get_db_service)):
    """Adds the whole batch with one write and returns the full updated roster."""
    return db.add_students_bulk(payload.students)

@router.post("/upload-simulation", response_model=List[student_model.Student], status_code=status.HTTP_201_CREATED, summary="Simulate a Roster Upload")
def simulate_upload(count: int = roster_service.SIMULATED_UPLOAD_SIZE, db: DatabaseService = Depends(get_db_service)):
    try:
        return roster_service.simulate_roster_upload(db=db, count=count)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
