# /tests/test_database_service.py

import json
import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

from app.services.database_service import DatabaseService
from app.services.database_helpers.key_value_storage import InMemoryStorage, StorageQuotaExceededError
from app.services.database_helpers.student_repository import STUDENTS_KEY, build_seed_roster
from app.services.database_helpers.record_repository import RECORDS_KEY
from app.services.database_helpers.generation_repository import GENERATED_KEY
from app.models.student_model import StudentCreate
from app.models.record_model import ObservationRecordCreate
from app.models.generation_model import GeneratedContentCreate


class TickingClock:
    """A clock that moves one second forward on every call."""

    def __init__(self):
        self.current = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def db_service(storage):
    """
    Creates a NEW, CLEAN DatabaseService for EACH test function over its own
    in-memory storage.
    """
    return DatabaseService(storage=storage, clock=TickingClock())


def _record(student_id, checked, memo, category="세특", sub_category="듣기말하기", point="경청태도"):
    return ObservationRecordCreate(
        studentId=student_id,
        category=category,
        subCategory=sub_category,
        point=point,
        checkedExamples=checked,
        memo=memo,
    )


def _generation(student_id, content):
    return GeneratedContentCreate(studentId=student_id, category="세특", content=content, charCount=300, style="서술체")


# --- Bootstrap ---

def test_first_run_bootstrap_installs_sorted_seed_roster(db_service):
    """
    GIVEN: Empty storage.
    WHEN:  list_students is called twice.
    THEN:  Both calls return the same non-empty roster, sorted by number.
    """
    first = db_service.list_students()
    second = db_service.list_students()

    assert len(first) > 0
    assert [s.number for s in first] == sorted(s.number for s in first)
    assert first == second
    assert first == build_seed_roster()


def test_bootstrap_initializes_empty_logs(storage, db_service):
    assert json.loads(storage.get_item(RECORDS_KEY)) == []
    assert json.loads(storage.get_item(GENERATED_KEY)) == []
    assert db_service.list_records() == []
    assert db_service.list_generated() == []


def test_existing_empty_roster_is_not_reseeded():
    storage = InMemoryStorage({STUDENTS_KEY: "[]"})
    service = DatabaseService(storage=storage)

    assert service.list_students() == []
    assert storage.get_item(STUDENTS_KEY) == "[]"


def test_bootstrap_does_not_overwrite_existing_slots():
    existing = [{"id": "s1", "classId": "2-3", "number": 7, "name": "한지민"}]
    storage = InMemoryStorage({STUDENTS_KEY: json.dumps(existing)})
    service = DatabaseService(storage=storage)

    students = service.list_students()
    assert [s.id for s in students] == ["s1"]


# --- Malformed data recovery ---

def test_malformed_students_slot_is_reseeded():
    storage = InMemoryStorage({STUDENTS_KEY: '[{"id": "s1", "number": "not a number"}]'})
    service = DatabaseService(storage=storage)

    students = service.list_students()

    assert students == build_seed_roster()
    # The reseeded roster is persisted.
    assert [s["id"] for s in json.loads(storage.get_item(STUDENTS_KEY))] == [s.id for s in students]


@pytest.mark.parametrize("raw", ["{not json", '{"id": "r1"}', '[{"id": "r1"}]'])
def test_malformed_records_slot_reads_as_empty(raw):
    storage = InMemoryStorage({RECORDS_KEY: raw})
    service = DatabaseService(storage=storage)

    assert service.list_records() == []
    # Reading never rewrites the slot.
    assert storage.get_item(RECORDS_KEY) == raw


def test_partially_valid_generation_log_is_not_merged():
    valid = {"id": "g1", "studentId": "s1", "category": "세특", "content": "ok",
             "charCount": 300, "style": "서술체", "createdAt": "2025-03-01T09:00:00.000Z"}
    storage = InMemoryStorage({GENERATED_KEY: json.dumps([valid, {"id": "g2"}])})
    service = DatabaseService(storage=storage)

    assert service.list_generated() == []


# --- Students ---

def test_add_student_keeps_roster_sorted(db_service):
    created = db_service.add_student(StudentCreate(classId="1-1", number=0, name="강하늘"))

    students = db_service.list_students()
    assert students[0] == created
    assert [s.number for s in students] == sorted(s.number for s in students)


def test_add_student_assigns_unique_ids(db_service):
    first = db_service.add_student(StudentCreate(classId="1-1", number=6, name="A"))
    second = db_service.add_student(StudentCreate(classId="1-1", number=7, name="B"))

    ids = [s.id for s in db_service.list_students()]
    assert first.id != second.id
    assert len(ids) == len(set(ids))


def test_bulk_add_returns_full_sorted_roster_with_distinct_ids():
    """
    GIVEN: A roster of seed students.
    WHEN:  A batch with out-of-order numbers is added in the same instant.
    THEN:  The full roster is returned sorted, and every id is distinct.
    """
    frozen = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    service = DatabaseService(storage=InMemoryStorage(), clock=lambda: frozen)
    existing_ids = {s.id for s in service.list_students()}

    batch = [StudentCreate(classId="1-1", number=n, name=f"새학생{n}") for n in (9, 6, 8, 7)]
    roster = service.add_students_bulk(batch)
    second_batch = service.add_students_bulk(batch[:2])

    new_ids = [s.id for s in roster if s.id not in existing_ids]
    assert len(new_ids) == 4
    assert len(set(new_ids)) == 4
    assert [s.number for s in roster] == sorted(s.number for s in roster)
    assert len(second_batch) == len(roster) + 2
    all_ids = [s.id for s in service.list_students()]
    assert len(all_ids) == len(set(all_ids))


def test_bulk_add_of_nothing_returns_current_roster(db_service):
    assert db_service.add_students_bulk([]) == db_service.list_students()


# --- Observation records ---

def test_upsert_same_key_keeps_identity_and_replaces_fields(db_service):
    first = db_service.upsert_record(_record("s1", [0, 2], "good"))
    second = db_service.upsert_record(_record("s1", [1], "better"))

    records = db_service.list_records()
    assert len(records) == 1
    assert records[0].id == first.id
    assert records[0].createdAt == first.createdAt
    assert records[0].checkedExamples == [1]
    assert records[0].memo == "better"
    assert second == records[0]


def test_upsert_with_new_key_appends(db_service):
    a = db_service.upsert_record(_record("s1", [0], ""))
    b = db_service.upsert_record(_record("s1", [0], "", point="발표력"))
    c = db_service.upsert_record(_record("s2", [0], ""))

    assert [r.id for r in db_service.list_records()] == [a.id, b.id, c.id]
    assert len({a.id, b.id, c.id}) == 3


def test_upsert_updates_only_first_duplicate_in_corrupted_data():
    stale = {"studentId": "s1", "category": "세특", "subCategory": "듣기말하기", "point": "경청태도",
             "checkedExamples": [0], "memo": "old", "createdAt": "2025-01-01T00:00:00.000Z"}
    storage = InMemoryStorage({RECORDS_KEY: json.dumps([dict(stale, id="r1"), dict(stale, id="r2")])})
    service = DatabaseService(storage=storage)

    service.upsert_record(_record("s1", [3], "new"))

    records = service.list_records()
    assert [(r.id, r.memo) for r in records] == [("r1", "new"), ("r2", "old")]


def test_checked_examples_are_stored_as_distinct_sequence(db_service):
    saved = db_service.upsert_record(_record("s1", [2, 0, 2, 9], ""))

    # Out-of-range indices are accepted as-is.
    assert saved.checkedExamples == [2, 0, 9]


def test_category_filter_returns_matching_subset_in_insertion_order(db_service):
    r1 = db_service.upsert_record(_record("s1", [0], "", category="세특"))
    r2 = db_service.upsert_record(_record("s1", [0], "", category="행특", sub_category="생활태도", point="성실성"))
    r3 = db_service.upsert_record(_record("s2", [1], "", category="세특"))

    assert [r.id for r in db_service.list_records("세특")] == [r1.id, r3.id]
    assert [r.id for r in db_service.list_records("행특")] == [r2.id]
    assert [r.id for r in db_service.list_records()] == [r1.id, r2.id, r3.id]
    assert db_service.list_records("진로") == []


def test_records_may_reference_unknown_students(db_service):
    db_service.upsert_record(_record("no_such_student", [0], ""))
    assert db_service.list_records()[0].studentId == "no_such_student"


def test_end_to_end_upsert_scenario(db_service):
    students = db_service.list_students()
    assert [s.number for s in students][:3] == [1, 2, 3]
    s1 = students[0]

    db_service.upsert_record(ObservationRecordCreate(
        studentId=s1.id, category="세특", subCategory="듣기말하기", point="경청태도",
        checkedExamples=[0, 2], memo="good"))
    db_service.upsert_record(ObservationRecordCreate(
        studentId=s1.id, category="세특", subCategory="듣기말하기", point="경청태도",
        checkedExamples=[1], memo="better"))

    records = [r for r in db_service.list_records("세특") if r.studentId == s1.id]
    assert len(records) == 1
    assert records[0].checkedExamples == [1]
    assert records[0].memo == "better"


# --- Generation log ---

def test_generation_log_is_most_recent_first(db_service):
    a = db_service.append_generated(_generation("s1", "A"))
    b = db_service.append_generated(_generation("s2", "B"))

    assert [g.id for g in db_service.list_generated()] == [b.id, a.id]
    assert a.id != b.id
    assert a.createdAt < b.createdAt


# --- Storage failures ---

def _used_bytes(storage):
    return sum(
        len(key.encode("utf-8")) + len(storage.get_item(key).encode("utf-8"))
        for key in (STUDENTS_KEY, RECORDS_KEY, GENERATED_KEY)
    )


def test_failed_write_leaves_collections_unchanged(storage, db_service):
    before_students = db_service.list_students()
    storage.quota_bytes = _used_bytes(storage)

    with pytest.raises(StorageQuotaExceededError):
        db_service.add_student(StudentCreate(classId="1-1", number=10, name="초과"))
    with pytest.raises(StorageQuotaExceededError):
        db_service.upsert_record(_record("s1", [0], "memo"))
    with pytest.raises(StorageQuotaExceededError):
        db_service.append_generated(_generation("s1", "text"))

    assert db_service.list_students() == before_students
    assert db_service.list_records() == []
    assert db_service.list_generated() == []


def test_service_requires_a_backend(monkeypatch):
    monkeypatch.setattr("app.services.database_service.USE_MEMORY_STORAGE", False)
    with pytest.raises(ValueError):
        DatabaseService()


# --- Concurrent requests sharing one storage ---

def _run_in_threads(worker, threads=8, calls=50):
    with ThreadPoolExecutor(max_workers=threads) as pool:
        futures = [pool.submit(worker, t, calls) for t in range(threads)]
        return [f.result() for f in futures]


def test_concurrent_appends_are_never_lost():
    """
    GIVEN: One shared storage, as served to every request in memory mode.
    WHEN:  Several threads append to the generation log at once, each call
           through its own DatabaseService like separate requests.
    THEN:  Every acknowledged entry is in the log, with distinct ids.
    """
    shared = InMemoryStorage()

    def worker(thread_index, calls):
        return [
            DatabaseService(storage=shared).append_generated(_generation(f"s{thread_index}", f"{thread_index}-{i}")).id
            for i in range(calls)
        ]

    acknowledged = [gen_id for ids in _run_in_threads(worker) for gen_id in ids]
    stored = DatabaseService(storage=shared).list_generated()

    assert len(acknowledged) == 400
    assert len(stored) == 400
    assert {g.id for g in stored} == set(acknowledged)


def test_concurrent_upserts_and_student_adds_are_never_lost():
    shared = InMemoryStorage()

    def worker(thread_index, calls):
        for i in range(calls):
            service = DatabaseService(storage=shared)
            service.upsert_record(_record(f"s{thread_index}-{i}", [0], "memo"))
            service.add_student(StudentCreate(classId="1-1", number=100 + i, name=f"학생{thread_index}-{i}"))

    _run_in_threads(worker, threads=6, calls=20)
    service = DatabaseService(storage=shared)

    assert len(service.list_records()) == 120
    students = service.list_students()
    assert len(students) == 5 + 120
    assert len({s.id for s in students}) == len(students)
    assert [s.number for s in students] == sorted(s.number for s in students)
