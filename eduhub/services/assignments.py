from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from eduhub.models import Assignment, AssignmentClass, ClassEnrollment, Grade, StudentAssignment
from eduhub.schemas.assignment import AssignmentListItem, AssignmentOut, ClassRef, CreateAssignmentRequest
from eduhub.services.roster import ensure_authorized
from eduhub.utils import naive_utc

log = logging.getLogger(__name__)


def materialize_student_assignments(session: Session, assignment: Assignment, class_ids: Iterable[int]) -> int:
    """
    Create one StudentAssignment stub per student enrolled in any of `class_ids`.
    Students that already have a stub are skipped, so re-running is harmless.
    Returns the number of stubs created. Does not commit.
    """
    existing = {
        student_id
        for (student_id,) in session.query(StudentAssignment.student_id)
        .filter(StudentAssignment.assignment_id == assignment.id)
        .all()
    }
    created = 0
    for class_id in class_ids:
        enrolled = (
            session.query(ClassEnrollment.student_id)
            .filter(ClassEnrollment.class_id == class_id)
            .all()
        )
        for (student_id,) in enrolled:
            if student_id in existing:
                continue
            session.add(StudentAssignment(assignment_id=assignment.id, student_id=student_id))
            existing.add(student_id)
            created += 1
    return created


def create_assignment(session: Session, teacher_id: int, data: CreateAssignmentRequest) -> Assignment:
    """
    Create one assignment shared by every class in `data.class_ids` and fan it
    out to their rosters. Unauthorized for any class means nothing is written.
    """
    class_ids = list(dict.fromkeys(data.class_ids))
    ensure_authorized(session, teacher_id, class_ids)

    assignment = Assignment(
        teacher_id=teacher_id,
        title=data.title,
        description=data.description,
        type=data.type,
        due_date=naive_utc(data.due_date),
        points=data.points,
        is_published=True,
        class_links=[AssignmentClass(class_id=class_id) for class_id in class_ids],
    )
    session.add(assignment)
    try:
        session.flush()
        created = materialize_student_assignments(session, assignment, class_ids)
        session.commit()
    except Exception:
        session.rollback()
        raise
    log.info("Assignment %s created for %d class(es), %d student stub(s)", assignment.id, len(class_ids), created)
    return assignment


def to_out(assignment: Assignment) -> AssignmentOut:
    return AssignmentOut(
        id=assignment.id,
        title=assignment.title,
        description=assignment.description,
        type=assignment.type,
        due_date=assignment.due_date,
        points=assignment.points,
        is_published=assignment.is_published,
        classes=[ClassRef(id=link.school_class.id, name=link.school_class.name) for link in assignment.class_links],
        created_at=assignment.created_at,
    )


def list_assignments(session: Session, teacher_id: int) -> list[AssignmentListItem]:
    assignments = (
        session.query(Assignment)
        .options(selectinload(Assignment.class_links).selectinload(AssignmentClass.school_class))
        .filter(Assignment.teacher_id == teacher_id)
        .order_by(Assignment.due_date.desc())
        .all()
    )
    ids = [a.id for a in assignments]
    student_counts: dict[int, int] = {}
    graded_counts: dict[int, int] = {}
    if ids:
        student_counts = dict(
            session.query(StudentAssignment.assignment_id, func.count(StudentAssignment.id))
            .filter(StudentAssignment.assignment_id.in_(ids))
            .group_by(StudentAssignment.assignment_id)
            .all()
        )
        graded_counts = dict(
            session.query(Grade.assignment_id, func.count(Grade.id))
            .filter(Grade.assignment_id.in_(ids))
            .group_by(Grade.assignment_id)
            .all()
        )
    return [
        AssignmentListItem(
            **to_out(a).model_dump(),
            student_count=student_counts.get(a.id, 0),
            graded_count=graded_counts.get(a.id, 0),
        )
        for a in assignments
    ]
