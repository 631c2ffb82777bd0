from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, require_teacher
from eduhub.models import TeacherProfile
from eduhub.permissions import Permission
from eduhub.schemas.assignment import CreateAssignmentRequest
from eduhub.services.assignments import create_assignment, list_assignments, to_out

router = APIRouter(prefix="/teacher/assignments", tags=["assignments"])


@router.post("", status_code=status.HTTP_201_CREATED, name="assignments.create")
def create(
    data: CreateAssignmentRequest,
    teacher: TeacherProfile = Depends(require_teacher(Permission.ASSIGNMENTS_WRITE)),
    session: Session = Depends(get_db),
):
    """Creates one assignment for all selected classes and hands it to every enrolled student."""
    assignment = create_assignment(session, teacher.id, data)
    return {"assignment": to_out(assignment)}


@router.get("", name="assignments.list")
def index(
    teacher: TeacherProfile = Depends(require_teacher(Permission.ASSIGNMENTS_READ)),
    session: Session = Depends(get_db),
):
    return {"assignments": list_assignments(session, teacher.id)}
