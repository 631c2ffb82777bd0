from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, require_teacher
from eduhub.errors import Forbidden, ValidationError
from eduhub.models import TeacherProfile
from eduhub.permissions import Permission
from eduhub.schemas.gradebook import GradeOut, RecordGradeRequest
from eduhub.services.gradebook import compute_gradebook, record_grade
from eduhub.services.roster import is_authorized

router = APIRouter(prefix="/teacher", tags=["gradebook"])


@router.get("/gradebook", name="gradebook.show")
def show(
    class_id: Optional[int] = Query(None, alias="classId"),
    teacher: TeacherProfile = Depends(require_teacher(Permission.GRADEBOOK_READ)),
    session: Session = Depends(get_db),
):
    """Every assignment of the class and each enrolled student's grades and average."""
    if class_id is None:
        raise ValidationError("Class ID is required")
    if not is_authorized(session, teacher.id, class_id):
        raise Forbidden("You do not have access to this class")
    return compute_gradebook(session, class_id)


@router.put("/grades", name="gradebook.record")
def record(
    data: RecordGradeRequest,
    teacher: TeacherProfile = Depends(require_teacher(Permission.GRADES_WRITE)),
    session: Session = Depends(get_db),
):
    grade = record_grade(session, teacher.id, data.assignment_id, data.student_id, data.score)
    return {"grade": GradeOut.model_validate(grade)}
