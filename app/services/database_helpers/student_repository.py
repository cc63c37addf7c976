# /app/services/database_helpers/student_repository.py

"""
This module contains the roster repository: every read and write of the
students slot. The stored roster is always sorted ascending by `number`.
"""

from typing import List

from app.models.student_model import Student, StudentCreate
from .base_repository import BaseRepository
from .identifiers import IdFactory
from .key_value_storage import KeyValueStorage

STUDENTS_KEY = "ai_records_students"

SEED_CLASS_ID = "1-1"
SEED_NAMES = ["김민준", "이서연", "박지호", "최수아", "정도윤"]


def build_seed_roster() -> List[Student]:
    """The default class installed on first use of an empty storage."""
    return [
        Student(id=f"stu_seed_{number}", classId=SEED_CLASS_ID, number=number, name=name)
        for number, name in enumerate(SEED_NAMES, start=1)
    ]


def _sorted_by_number(students: List[Student]) -> List[Student]:
    return sorted(students, key=lambda s: s.number)


class StudentRepository(BaseRepository[Student]):
    def __init__(self, storage: KeyValueStorage, id_factory: IdFactory):
        super().__init__(storage, STUDENTS_KEY, Student, id_factory, seed_factory=build_seed_roster)

    def get_all_students(self) -> List[Student]:
        """
        Returns the roster ascending by `number`. An absent or malformed slot
        is replaced by the seed roster; an existing empty roster is kept.
        """
        with self.storage.lock:
            students = self._read()
            if students is None:
                print(f"WARNING: Seeding storage slot '{self.key}' with the default roster.")
                students = self.seed_factory()
                self._write(students)
        return _sorted_by_number(students)

    def add_student(self, student: StudentCreate) -> Student:
        """Creates one student and returns it."""
        with self.storage.lock:
            students = self.get_all_students()
            new_student = Student(
                id=self.ids.new_id("stu", taken={s.id for s in students}),
                **student.model_dump(),
            )
            students.append(new_student)
            self._write(_sorted_by_number(students))
        return new_student

    def add_students(self, new_students: List[StudentCreate]) -> List[Student]:
        """
        Creates a batch of students with one write and returns the FULL
        updated roster, not just the new entries.
        """
        with self.storage.lock:
            students = self.get_all_students()
            if not new_students:
                return students
            ids = self.ids.new_batch_ids("stu", len(new_students), taken={s.id for s in students})
            added = [Student(id=new_id, **s.model_dump()) for new_id, s in zip(ids, new_students)]
            combined = _sorted_by_number(students + added)
            self._write(combined)
        return combined
