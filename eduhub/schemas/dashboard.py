from datetime import datetime
from typing import List

from eduhub.schemas.base import CamelModel


class UpcomingAssignment(CamelModel):
    id: int
    title: str
    due_date: datetime
    classes: List[str]


class TeacherDashboard(CamelModel):
    total_students: int
    total_classes: int
    missing_assignments: int
    struggling_students: int
    upcoming_assignments: List[UpcomingAssignment]


class AdminDashboard(CamelModel):
    total_students: int
    total_teachers: int
    total_classes: int
    chronic_absences: int
