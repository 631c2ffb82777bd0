from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, require_teacher
from eduhub.models import TeacherProfile
from eduhub.permissions import Permission
from eduhub.services.dashboard import teacher_dashboard
from eduhub.services.roster import teacher_classes

router = APIRouter(prefix="/teacher", tags=["teacher"])


@router.get("/classes", name="teacher.classes")
def list_classes(
    teacher: TeacherProfile = Depends(require_teacher(Permission.CLASSES_READ)),
    session: Session = Depends(get_db),
):
    """Classes the signed-in teacher is on the roster of."""
    return {"classes": teacher_classes(session, teacher.id)}


@router.get("/dashboard", name="teacher.dashboard")
def dashboard(
    teacher: TeacherProfile = Depends(require_teacher(Permission.TEACHER_DASHBOARD)),
    session: Session = Depends(get_db),
):
    return teacher_dashboard(session, teacher.id)
