from enum import Enum

from eduhub.extensions import db
from eduhub.utils import utcnow


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    PARTIAL_DAY = "PARTIAL_DAY"


class Attendance(db.Model):
    __tablename__ = "attendance"

    id = db.Column(db.Integer, primary_key=True)
    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey("student_profiles.id"), nullable=False)
    # Stored at midnight of the attendance day
    date = db.Column(db.DateTime, nullable=False)
    period = db.Column(db.Integer, nullable=True)
    status = db.Column(
        db.Enum(AttendanceStatus, name="attendance_status", native_enum=False),
        nullable=False,
    )
    marked_by_id = db.Column(db.Integer, db.ForeignKey("teacher_profiles.id"), nullable=True)
    marked_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    school_class = db.relationship("SchoolClass")
    student = db.relationship("StudentProfile")
    marked_by = db.relationship("TeacherProfile")

    __table_args__ = (
        # One row per (class, student, date, period); whole-day rows (NULL period) have their own key
        db.Index(
            "uq_attendance_period_key", "class_id", "student_id", "date", "period",
            unique=True,
            sqlite_where=period.isnot(None),
            postgresql_where=period.isnot(None),
        ),
        db.Index(
            "uq_attendance_day_key", "class_id", "student_id", "date",
            unique=True,
            sqlite_where=period.is_(None),
            postgresql_where=period.is_(None),
        ),
        db.Index("ix_attendance_class_date", "class_id", "date"),
        db.Index("ix_attendance_student", "student_id"),
    )

    def __repr__(self):
        return (
            f"<Attendance id={self.id} class_id={self.class_id} student_id={self.student_id} "
            f"date={self.date:%Y-%m-%d} period={self.period} status={self.status}>"
        )
