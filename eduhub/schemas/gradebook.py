from datetime import datetime
from typing import List, Optional

from pydantic import Field

from eduhub.schemas.base import CamelModel


class GradebookAssignment(CamelModel):
    id: int
    title: str
    due_date: datetime
    points: float


class GradeEntry(CamelModel):
    assignment_id: int
    assignment_title: str
    score: float
    max_points: float
    percentage: float


class GradebookStudent(CamelModel):
    id: int
    name: str
    student_code: Optional[str] = Field(default=None, alias="studentId")
    average: float
    grades: List[GradeEntry] = []


class Gradebook(CamelModel):
    assignments: List[GradebookAssignment]
    students: List[GradebookStudent]


class RecordGradeRequest(CamelModel):
    assignment_id: int
    student_id: int
    score: float = Field(ge=0)


class GradeOut(CamelModel):
    id: int
    student_id: int
    assignment_id: int
    score: float
    max_points: float
    percentage: float
    graded_at: datetime
