from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eduhub.errors import AppError, NotFound
from eduhub.models import Attendance, AttendanceStatus, SchoolClass
from eduhub.schemas.attendance import AttendanceEntry, AttendanceStudent, BatchResult
from eduhub.services.roster import enrolled_students, is_enrolled
from eduhub.utils import day_bounds, start_of_day, utcnow

log = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _key_filter(query, class_id: int, student_id: int, day: date, period: Optional[int]):
    query = query.filter(
        Attendance.class_id == class_id,
        Attendance.student_id == student_id,
        Attendance.date == start_of_day(day),
    )
    if period is None:
        return query.filter(Attendance.period.is_(None))
    return query.filter(Attendance.period == period)


def upsert(
    session: Session,
    class_id: int,
    student_id: int,
    day: date,
    period: Optional[int],
    status: AttendanceStatus,
    marked_by_id: Optional[int] = None,
    *,
    commit: bool = True,
) -> Attendance:
    """
    Write the one attendance row for (class, student, day, period) with a single
    INSERT .. ON CONFLICT DO UPDATE. The last write wins.
    """
    dialect = session.get_bind().dialect.name
    try:
        insert = _UPSERT_INSERTS[dialect]
    except KeyError:
        raise NotImplementedError(f"Attendance upsert is not supported on {dialect}") from None

    now = utcnow()
    stmt = insert(Attendance).values(
        class_id=class_id,
        student_id=student_id,
        date=start_of_day(day),
        period=period,
        status=status,
        marked_by_id=marked_by_id,
        marked_at=now,
        updated_at=now,
    )
    if period is None:
        target = {"index_elements": ["class_id", "student_id", "date"], "index_where": Attendance.period.is_(None)}
    else:
        target = {
            "index_elements": ["class_id", "student_id", "date", "period"],
            "index_where": Attendance.period.isnot(None),
        }
    stmt = stmt.on_conflict_do_update(
        **target,
        set_={
            "status": stmt.excluded.status,
            "marked_by_id": stmt.excluded.marked_by_id,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    session.execute(stmt)
    if commit:
        session.commit()
    return _key_filter(session.query(Attendance), class_id, student_id, day, period).populate_existing().one()


def record_batch(
    session: Session,
    class_id: int,
    day: date,
    period: Optional[int],
    entries: Iterable[AttendanceEntry],
    marked_by_id: Optional[int] = None,
) -> BatchResult:
    """Apply each student's status independently; one failure never undoes the others."""
    saved = 0
    failed: list[int] = []
    for entry in entries:
        try:
            if not is_enrolled(session, class_id, entry.student_id):
                raise NotFound(f"Student {entry.student_id} is not enrolled in class {class_id}")
            upsert(session, class_id, entry.student_id, day, period, entry.status, marked_by_id)
            saved += 1
        except (AppError, SQLAlchemyError) as e:
            session.rollback()
            failed.append(entry.student_id)
            log.warning("Attendance not saved for student %s in class %s: %s", entry.student_id, class_id, e)
    return BatchResult(success=True, count=saved, failed=failed)


def read(session: Session, class_id: int, day: date, period: Optional[int] = None) -> list[AttendanceStudent]:
    """
    Each enrolled student with their status for the day, or None if unmarked.
    A missing period only matches whole-day rows; periods are never merged.
    """
    if session.get(SchoolClass, class_id) is None:
        raise NotFound("Class not found")

    start, end = day_bounds(day)
    query = session.query(Attendance).filter(
        Attendance.class_id == class_id,
        Attendance.date >= start,
        Attendance.date < end,
    )
    if period is None:
        query = query.filter(Attendance.period.is_(None))
    else:
        query = query.filter(Attendance.period == period)
    by_student = {record.student_id: record for record in query.all()}

    return [
        AttendanceStudent(
            id=student.id,
            name=student.name,
            student_code=student.student_code,
            current_status=by_student[student.id].status if student.id in by_student else None,
        )
        for student in enrolled_students(session, class_id)
    ]
