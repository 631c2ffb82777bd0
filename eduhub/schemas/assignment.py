from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from eduhub.models import AssignmentType
from eduhub.schemas.base import CamelModel


class CreateAssignmentRequest(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    type: AssignmentType
    due_date: datetime
    points: float = Field(gt=0)
    class_ids: List[int] = Field(min_length=1)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class ClassRef(CamelModel):
    id: int
    name: str


class AssignmentOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    type: AssignmentType
    due_date: datetime
    points: float
    is_published: bool
    classes: List[ClassRef] = []
    created_at: datetime


class AssignmentListItem(AssignmentOut):
    student_count: int = 0
    graded_count: int = 0
