# /app/services/observation_service.py

"""
This service module is the business logic layer for the observation
recording page. A teacher picks one classification (category, subcategory,
point) and fills in a row per student; saving upserts one record per row
that has any content.
"""

from typing import List

from ..models.record_model import (
    ObservationEntry,
    ObservationRecord,
    ObservationRecordCreate,
    ObservationSheet,
)
from .database_service import DatabaseService
from . import taxonomy


def save_observations(
    db: DatabaseService,
    category: str,
    sub_category: str,
    point: str,
    entries: List[ObservationEntry],
) -> List[ObservationRecord]:
    """
    Upserts a record for every entry with at least one checked example or a
    non-empty memo. Empty rows are skipped, so they never erase a record
    saved earlier.
    """
    if not taxonomy.is_valid_classification(category, sub_category, point):
        raise ValueError(f"Unknown observation point: {category} > {sub_category} > {point}")

    saved = []
    for entry in entries:
        if not entry.checkedExamples and not entry.memo:
            continue
        saved.append(db.upsert_record(ObservationRecordCreate(
            studentId=entry.studentId,
            category=category,
            subCategory=sub_category,
            point=point,
            checkedExamples=entry.checkedExamples,
            memo=entry.memo,
        )))
    return saved


def get_observation_sheet(db: DatabaseService, category: str, sub_category: str, point: str) -> ObservationSheet:
    """Assembles the example phrases and the existing records for one observation point."""
    records = [
        r for r in db.list_records(category)
        if r.subCategory == sub_category and r.point == point
    ]
    return ObservationSheet(
        category=category,
        subCategory=sub_category,
        point=point,
        examples=taxonomy.get_examples(category, sub_category, point),
        records=records,
    )
