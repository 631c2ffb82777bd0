from typing import Optional

from pydantic import Field

from eduhub.schemas.base import CamelModel


class ClassSummary(CamelModel):
    id: int
    name: str
    subject: str
    section: Optional[str] = None
    grade_level: int


class RosterStudent(CamelModel):
    id: int
    user_id: int
    name: str
    email: str
    student_code: Optional[str] = Field(default=None, alias="studentId")
