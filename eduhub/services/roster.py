"""Which classes a teacher may act on, and who is enrolled in them."""
from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session

from eduhub.errors import Forbidden
from eduhub.models import ClassEnrollment, ClassTeacher, SchoolClass, StudentProfile, User
from eduhub.schemas.roster import ClassSummary, RosterStudent


def authorized_classes(session: Session, teacher_id: int) -> set[int]:
    rows = session.query(ClassTeacher.class_id).filter(ClassTeacher.teacher_id == teacher_id).all()
    return {class_id for (class_id,) in rows}


def is_authorized(session: Session, teacher_id: int, class_id: int) -> bool:
    return (
        session.query(ClassTeacher)
        .filter(ClassTeacher.teacher_id == teacher_id, ClassTeacher.class_id == class_id)
        .first()
        is not None
    )


def ensure_authorized(session: Session, teacher_id: int, class_ids: Iterable[int]) -> None:
    """Raise `Forbidden` unless the teacher is on every one of `class_ids`."""
    wanted = set(class_ids)
    if not wanted <= authorized_classes(session, teacher_id):
        raise Forbidden("You do not have access to one or more selected classes")


def teacher_classes(session: Session, teacher_id: int) -> list[ClassSummary]:
    classes = (
        session.query(SchoolClass)
        .join(ClassTeacher, ClassTeacher.class_id == SchoolClass.id)
        .filter(ClassTeacher.teacher_id == teacher_id)
        .order_by(SchoolClass.name)
        .all()
    )
    return [ClassSummary.model_validate(c) for c in classes]


def enrolled_students(session: Session, class_id: int) -> list[RosterStudent]:
    rows = (
        session.query(StudentProfile, User)
        .join(ClassEnrollment, ClassEnrollment.student_id == StudentProfile.id)
        .join(User, User.id == StudentProfile.user_id)
        .filter(ClassEnrollment.class_id == class_id)
        .order_by(User.last_name, User.first_name)
        .all()
    )
    return [
        RosterStudent(
            id=student.id,
            user_id=user.id,
            name=user.full_name,
            email=user.email,
            student_code=student.student_code,
        )
        for student, user in rows
    ]


def is_enrolled(session: Session, class_id: int, student_id: int) -> bool:
    return session.get(ClassEnrollment, (class_id, student_id)) is not None
