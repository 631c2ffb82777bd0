from datetime import datetime
from typing import List, Optional

from pydantic import Field

from eduhub.models import AttendanceStatus, BehaviorType
from eduhub.schemas.base import CamelModel


class RecentAbsence(CamelModel):
    date: datetime
    status: AttendanceStatus
    class_name: str = Field(alias="class")


class AttendanceStats(CamelModel):
    total_present: int
    total_absent: int
    total_late: int
    longest_streak: int
    recent_absences: List[RecentAbsence]


class GradePoint(CamelModel):
    date: datetime
    average: float


class SubjectAverage(CamelModel):
    subject: str
    average: float


class GradeStats(CamelModel):
    current_average: float
    trend: List[GradePoint]
    by_subject: List[SubjectAverage]


class CreateBehaviorNoteRequest(CamelModel):
    type: BehaviorType
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None


class BehaviorNoteOut(CamelModel):
    id: int
    type: BehaviorType
    title: str
    description: Optional[str] = None
    date: datetime


class ParentContact(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    relationship: Optional[str] = None


class StudentProfileOut(CamelModel):
    id: int
    name: str
    student_code: Optional[str] = Field(default=None, alias="studentId")
    grade_level: int
    homeroom: Optional[str] = None
    avatar: Optional[str] = None
    attendance: AttendanceStats
    grades: GradeStats
    behavior: List[BehaviorNoteOut]
    parents: List[ParentContact]
