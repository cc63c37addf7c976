# /app/services/generation_service.py

"""
The summary generator. "AI generation" here is a deterministic template:
for each selected student it stitches that student's observation records
in the chosen category into a short paragraph and appends the result to
the generation log. No model is called.
"""

import pandas as pd
from typing import List, Optional

from ..models.generation_model import GeneratedContent, GeneratedContentCreate, GenerationHistory
from ..models.record_model import ObservationRecord
from ..models.student_model import Student
from .database_service import DatabaseService
from . import taxonomy

STYLE_NARRATIVE = "서술체"
STYLE_CONCISE = "간결체"
STYLE_CONCRETE = "구체적"
STYLES = [STYLE_NARRATIVE, STYLE_CONCISE, STYLE_CONCRETE]

CLOSING_SENTENCE = "앞으로도 적극적인 자세로 교과 활동에 임할 것으로 기대됨."
NO_RECORD_PARAGRAPH = (
    "성실한 태도로 수업에 참여하며, 교사의 설명을 경청하는 자세가 바름. "
    "과제 수행에 있어서도 책임감 있는 모습을 보여주며 꾸준히 노력하는 모습이 긍정적임."
)

EXPORT_COLUMNS = ['Number', 'Student Name', 'Category', 'Content', 'Requested Length', 'Style', 'Created At']


# --- HELPER FUNCTION ---
def _compose_content(student: Student, category: str, records: List[ObservationRecord], style: str) -> str:
    """Builds the paragraph for one student. The style only changes which sentences are included."""
    content = f"{student.name} 학생은 {category} 활동에서 "
    if not records:
        return content + NO_RECORD_PARAGRAPH

    points = ", ".join(r.point for r in records)
    content += f"{points} 등의 역량이 돋보임. "
    for r in records:
        if r.memo:
            content += f"특히 {r.memo}하는 모습이 인상적임. "
    if style == STYLE_CONCRETE:
        for r in records:
            for phrase in taxonomy.checked_phrases(r.category, r.subCategory, r.point, r.checkedExamples):
                content += f"{phrase}. "
    if style != STYLE_CONCISE:
        content += CLOSING_SENTENCE
    return content.strip()


# --- PUBLIC SERVICE FUNCTIONS ---

def generate_for_students(
    db: DatabaseService,
    student_ids: List[str],
    category: str,
    char_count: int,
    style: str,
) -> List[GeneratedContent]:
    """
    Generates and logs one paragraph per selected student, in roster order.
    Ids that do not match a student are ignored.
    """
    selected = set(student_ids)
    targets = [s for s in db.list_students() if s.id in selected]
    if not targets:
        raise ValueError("Select at least one student to generate for.")

    category_records = db.list_records(category)
    generations = []
    for student in targets:
        records = [r for r in category_records if r.studentId == student.id]
        generations.append(db.append_generated(GeneratedContentCreate(
            studentId=student.id,
            category=category,
            content=_compose_content(student, category, records, style),
            charCount=char_count,
            style=style,
        )))
    return generations


def get_recent_generations(
    db: DatabaseService,
    category: Optional[str] = None,
    limit: Optional[int] = None,
) -> GenerationHistory:
    """Returns the log, most recent first, optionally narrowed to one category and capped."""
    if limit is not None and limit < 0:
        raise ValueError("The history limit must not be negative.")
    results = db.list_generated()
    if category:
        results = [g for g in results if g.category == category]
    if limit is not None:
        results = results[:limit]
    return GenerationHistory(results=results, total=len(results), category=category)


def export_generations_as_csv(db: DatabaseService, category: Optional[str] = None) -> str:
    """
    Generates a CSV export of the generation log joined with the roster.
    Entries whose student no longer exists are exported with an empty name.
    """
    students = {s.id: s for s in db.list_students()}
    generations = get_recent_generations(db, category=category).results

    export_data = [
        {
            'Number': students[g.studentId].number if g.studentId in students else None,
            'Student Name': students[g.studentId].name if g.studentId in students else "",
            'Category': g.category,
            'Content': g.content,
            'Requested Length': g.charCount,
            'Style': g.style,
            'Created At': g.createdAt,
        } for g in generations
    ]

    df = pd.DataFrame(export_data) if export_data else pd.DataFrame(columns=EXPORT_COLUMNS)
    return df.to_csv(index=False)
