# /app/routers/records_router.py

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List, Optional

from ..models import record_model
from ..services import observation_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[record_model.ObservationRecord], summary="Get Observation Records")
def get_records(category: Optional[str] = None, db: DatabaseService = Depends(get_db_service)):
    return db.list_records(category)


@router.put("", response_model=record_model.ObservationRecord, summary="Save an Observation Record")
def save_record(payload: record_model.ObservationRecordCreate, db: DatabaseService = Depends(get_db_service)):
    """
    Creates the record, or updates the existing one with the same student,
    category, subcategory and point. The original id and createdAt are kept.
    """
    return db.upsert_record(payload)


@router.post("/batch", response_model=List[record_model.ObservationRecord], summary="Save an Observation Sheet")
def save_observation_batch(payload: record_model.ObservationBatch, db: DatabaseService = Depends(get_db_service)):
    try:
        return observation_service.save_observations(
            db=db,
            category=payload.category,
            sub_category=payload.subCategory,
            point=payload.point,
            entries=payload.entries,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/sheet", response_model=record_model.ObservationSheet, summary="Get the Observation Sheet for a Point")
def get_observation_sheet(category: str, subCategory: str, point: str, db: DatabaseService = Depends(get_db_service)):
    return observation_service.get_observation_sheet(db=db, category=category, sub_category=subCategory, point=point)
