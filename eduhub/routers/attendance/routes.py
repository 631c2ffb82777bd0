from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, require_teacher
from eduhub.errors import Forbidden, ValidationError
from eduhub.models import TeacherProfile
from eduhub.permissions import Permission
from eduhub.schemas.attendance import SaveAttendanceRequest
from eduhub.services import attendance
from eduhub.services.roster import is_authorized

router = APIRouter(prefix="/teacher/attendance", tags=["attendance"])

UNAUTHORIZED_CLASS = "You do not have access to this class"


@router.get("", name="attendance.read")
def read_attendance(
    class_id: Optional[int] = Query(None, alias="classId"),
    day: Optional[date] = Query(None, alias="date"),
    period: Optional[int] = Query(None, ge=0),
    teacher: TeacherProfile = Depends(require_teacher(Permission.ATTENDANCE_READ)),
    session: Session = Depends(get_db),
):
    """Roster of a class with each student's status for the given day and period."""
    if class_id is None or day is None:
        raise ValidationError("Class ID and date are required")
    if not is_authorized(session, teacher.id, class_id):
        raise Forbidden(UNAUTHORIZED_CLASS)
    return {"students": attendance.read(session, class_id, day, period or None)}


@router.post("", name="attendance.save")
def save_attendance(
    data: SaveAttendanceRequest,
    teacher: TeacherProfile = Depends(require_teacher(Permission.ATTENDANCE_WRITE)),
    session: Session = Depends(get_db),
):
    if not is_authorized(session, teacher.id, data.class_id):
        raise Forbidden(UNAUTHORIZED_CLASS)
    return attendance.record_batch(
        session,
        data.class_id,
        data.date,
        data.period,
        data.attendance,
        marked_by_id=teacher.id,
    )
