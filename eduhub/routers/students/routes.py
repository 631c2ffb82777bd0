from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, require_permission, require_teacher
from eduhub.models import TeacherProfile
from eduhub.permissions import Permission
from eduhub.schemas.auth import Identity
from eduhub.schemas.profile import BehaviorNoteOut, CreateBehaviorNoteRequest
from eduhub.services.profile import add_behavior_note, student_profile

router = APIRouter(prefix="/teacher/students", tags=["students"])


@router.get("/{student_id}", name="students.profile")
def profile(
    student_id: int,
    _: Identity = Depends(require_permission(Permission.STUDENTS_READ)),
    session: Session = Depends(get_db),
):
    return {"profile": student_profile(session, student_id)}


@router.post("/{student_id}/behavior", status_code=status.HTTP_201_CREATED, name="students.behavior")
def create_behavior_note(
    student_id: int,
    data: CreateBehaviorNoteRequest,
    teacher: TeacherProfile = Depends(require_teacher(Permission.BEHAVIOR_WRITE)),
    session: Session = Depends(get_db),
):
    note = add_behavior_note(session, teacher.id, student_id, data)
    return {"note": BehaviorNoteOut.model_validate(note)}
