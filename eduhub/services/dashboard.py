from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from eduhub.models import Assignment, AssignmentClass, ClassEnrollment, ClassTeacher, SchoolClass, StudentProfile, TeacherProfile
from eduhub.schemas.dashboard import AdminDashboard, TeacherDashboard, UpcomingAssignment
from eduhub.utils import utcnow

UPCOMING_LIMIT = 5


def teacher_dashboard(session: Session, teacher_id: int) -> TeacherDashboard:
    class_ids = [
        class_id
        for (class_id,) in session.query(ClassTeacher.class_id).filter(ClassTeacher.teacher_id == teacher_id).all()
    ]
    total_students = 0
    if class_ids:
        total_students = (
            session.query(func.count(func.distinct(ClassEnrollment.student_id)))
            .filter(ClassEnrollment.class_id.in_(class_ids))
            .scalar()
        )

    upcoming = (
        session.query(Assignment)
        .options(selectinload(Assignment.class_links).selectinload(AssignmentClass.school_class))
        .filter(Assignment.teacher_id == teacher_id, Assignment.due_date >= utcnow())
        .order_by(Assignment.due_date.asc())
        .limit(UPCOMING_LIMIT)
        .all()
    )
    return TeacherDashboard(
        total_students=total_students or 0,
        total_classes=len(class_ids),
        # Missing-work and struggling-student rules are not defined yet
        missing_assignments=0,
        struggling_students=0,
        upcoming_assignments=[
            UpcomingAssignment(
                id=a.id,
                title=a.title,
                due_date=a.due_date,
                classes=[link.school_class.name for link in a.class_links],
            )
            for a in upcoming
        ],
    )


def admin_dashboard(session: Session) -> AdminDashboard:
    return AdminDashboard(
        total_students=session.query(func.count(StudentProfile.id)).scalar() or 0,
        total_teachers=session.query(func.count(TeacherProfile.id)).scalar() or 0,
        total_classes=session.query(func.count(SchoolClass.id)).scalar() or 0,
        chronic_absences=0,
    )
