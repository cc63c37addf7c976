# /app/services/roster_service.py

"""
Business logic for the student management page: searching the roster and
the simulated spreadsheet upload. No file is parsed; the upload adds a
fixed batch of placeholder students through the bulk-add path.
"""

from typing import List

from ..models.student_model import Student, StudentCreate
from .database_service import DatabaseService

SIMULATED_UPLOAD_SIZE = 5
SIMULATED_UPLOAD_CLASS_ID = "1-1"


def search_students(db: DatabaseService, query: str = "") -> List[Student]:
    """Filters the roster by name substring or by the number's digits."""
    students = db.list_students()
    if not query:
        return students
    return [s for s in students if query in s.name or query in str(s.number)]


def simulate_roster_upload(
    db: DatabaseService,
    count: int = SIMULATED_UPLOAD_SIZE,
    class_id: str = SIMULATED_UPLOAD_CLASS_ID,
) -> List[Student]:
    """
    Adds `count` placeholder students numbered after the current roster size
    and returns the full updated roster.
    """
    if count < 1:
        raise ValueError("The simulated upload must add at least one student.")
    roster_size = len(db.list_students())
    new_students = [
        StudentCreate(classId=class_id, number=roster_size + i + 1, name=f"새학생{i + 1}")
        for i in range(count)
    ]
    updated = db.add_students_bulk(new_students)
    print(f"INFO: Simulated upload added {count} students to class {class_id}.")
    return updated
