from __future__ import annotations

from sqlalchemy.orm import Session

from eduhub.errors import NotFound
from eduhub.models import (
    AssignmentClass,
    Attendance,
    AttendanceStatus,
    BehaviorNote,
    ClassEnrollment,
    Grade,
    SchoolClass,
    StudentParent,
    StudentProfile,
)
from eduhub.schemas.profile import (
    AttendanceStats,
    BehaviorNoteOut,
    CreateBehaviorNoteRequest,
    GradePoint,
    GradeStats,
    ParentContact,
    RecentAbsence,
    StudentProfileOut,
    SubjectAverage,
)
from eduhub.services.gradebook import weighted_average

RECENT_ATTENDANCE = 20
RECENT_ABSENCES = 10
TREND_POINTS = 10
RECENT_BEHAVIOR = 10


def attendance_stats(session: Session, student_id: int) -> AttendanceStats:
    records = (
        session.query(Attendance, SchoolClass.name)
        .join(SchoolClass, SchoolClass.id == Attendance.class_id)
        .filter(Attendance.student_id == student_id)
        .order_by(Attendance.date.desc(), Attendance.period.desc())
        .limit(RECENT_ATTENDANCE)
        .all()
    )
    counts = {status: 0 for status in AttendanceStatus}
    for record, _ in records:
        counts[record.status] += 1

    absences = [
        RecentAbsence(date=record.date, status=record.status, class_name=class_name)
        for record, class_name in records
        if record.status in (AttendanceStatus.ABSENT, AttendanceStatus.LATE)
    ]
    return AttendanceStats(
        total_present=counts[AttendanceStatus.PRESENT],
        total_absent=counts[AttendanceStatus.ABSENT],
        total_late=counts[AttendanceStatus.LATE],
        # No streak rule has been defined for the school yet
        longest_streak=0,
        recent_absences=absences[:RECENT_ABSENCES],
    )


def grade_stats(session: Session, student: StudentProfile) -> GradeStats:
    grades = (
        session.query(Grade)
        .filter(Grade.student_id == student.id)
        .order_by(Grade.graded_at.desc())
        .all()
    )
    class_ids_by_assignment: dict[int, set[int]] = {}
    if grades:
        links = (
            session.query(AssignmentClass.assignment_id, AssignmentClass.class_id)
            .filter(AssignmentClass.assignment_id.in_(sorted({g.assignment_id for g in grades})))
            .all()
        )
        for assignment_id, class_id in links:
            class_ids_by_assignment.setdefault(assignment_id, set()).add(class_id)

    enrollments = (
        session.query(SchoolClass)
        .join(ClassEnrollment, ClassEnrollment.class_id == SchoolClass.id)
        .filter(ClassEnrollment.student_id == student.id)
        .order_by(SchoolClass.subject)
        .all()
    )
    by_subject = [
        SubjectAverage(
            subject=school_class.subject,
            average=weighted_average(
                g for g in grades if school_class.id in class_ids_by_assignment.get(g.assignment_id, ())
            ),
        )
        for school_class in enrollments
    ]
    return GradeStats(
        current_average=weighted_average(grades),
        trend=[GradePoint(date=g.graded_at, average=round(g.percentage, 2)) for g in grades[:TREND_POINTS]],
        by_subject=by_subject,
    )


def student_profile(session: Session, student_id: int) -> StudentProfileOut:
    student = session.get(StudentProfile, student_id)
    if student is None:
        raise NotFound("Student not found")

    notes = (
        session.query(BehaviorNote)
        .filter(BehaviorNote.student_id == student.id)
        .order_by(BehaviorNote.date.desc())
        .limit(RECENT_BEHAVIOR)
        .all()
    )
    links = (
        session.query(StudentParent)
        .filter(StudentParent.student_id == student.id)
        .order_by(StudentParent.is_primary.desc())
        .all()
    )
    return StudentProfileOut(
        id=student.id,
        name=student.user.full_name,
        student_code=student.student_code,
        grade_level=student.grade_level,
        homeroom=student.homeroom,
        avatar=student.user.avatar,
        attendance=attendance_stats(session, student.id),
        grades=grade_stats(session, student),
        behavior=[BehaviorNoteOut.model_validate(note) for note in notes],
        parents=[
            ParentContact(
                id=link.parent.id,
                name=link.parent.user.full_name,
                email=link.parent.user.email,
                phone=link.parent.user.phone,
                relationship=link.relationship,
            )
            for link in links
        ],
    )


def add_behavior_note(session: Session, teacher_id: int, student_id: int, data: CreateBehaviorNoteRequest) -> BehaviorNote:
    if session.get(StudentProfile, student_id) is None:
        raise NotFound("Student not found")
    note = BehaviorNote(
        student_id=student_id,
        teacher_id=teacher_id,
        type=data.type,
        title=data.title.strip(),
        description=data.description,
    )
    session.add(note)
    session.commit()
    return note
