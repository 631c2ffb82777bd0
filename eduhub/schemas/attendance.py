from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator

from eduhub.models import AttendanceStatus
from eduhub.schemas.base import CamelModel


class AttendanceEntry(CamelModel):
    student_id: int
    status: AttendanceStatus


class SaveAttendanceRequest(CamelModel):
    class_id: int
    date: date
    period: Optional[int] = Field(default=None, ge=0)
    attendance: List[AttendanceEntry]

    @field_validator("period")
    @classmethod
    def _zero_period_is_none(cls, value: Optional[int]) -> Optional[int]:
        # Period 0 means "whole day", same as omitting it
        return value or None


class AttendanceStudent(CamelModel):
    id: int
    name: str
    student_code: Optional[str] = Field(default=None, alias="studentId")
    current_status: Optional[AttendanceStatus] = None


class BatchResult(CamelModel):
    success: bool = True
    count: int
    failed: List[int] = []
