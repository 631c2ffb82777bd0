from enum import Enum

from eduhub.extensions import db
from eduhub.utils import utcnow


class AssignmentType(str, Enum):
    HOMEWORK = "HOMEWORK"
    TEST = "TEST"
    QUIZ = "QUIZ"
    PROJECT = "PROJECT"
    OTHER = "OTHER"


class SubmissionStatus(str, Enum):
    ASSIGNED = "ASSIGNED"
    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"


class Assignment(db.Model):
    __tablename__ = "assignments"

    id = db.Column(db.Integer, primary_key=True)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teacher_profiles.id"), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    type = db.Column(db.Enum(AssignmentType, name="assignment_type", native_enum=False), nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    points = db.Column(db.Float, nullable=False)
    is_published = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    teacher = db.relationship("TeacherProfile")
    class_links = db.relationship("AssignmentClass", back_populates="assignment", cascade="all, delete-orphan")
    student_assignments = db.relationship("StudentAssignment", back_populates="assignment", cascade="all, delete-orphan")
    grades = db.relationship("Grade", back_populates="assignment", cascade="all, delete-orphan")

    __table_args__ = (
        db.CheckConstraint("points > 0", name="ck_assignment_points_positive"),
        db.Index("ix_assignment_due_date", "due_date"),
    )


class AssignmentClass(db.Model):
    __tablename__ = "assignment_classes"

    assignment_id = db.Column(db.Integer, db.ForeignKey("assignments.id"), primary_key=True)
    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), primary_key=True)

    assignment = db.relationship("Assignment", back_populates="class_links")
    school_class = db.relationship("SchoolClass")


class StudentAssignment(db.Model):
    __tablename__ = "student_assignments"

    id = db.Column(db.Integer, primary_key=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey("assignments.id"), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey("student_profiles.id"), nullable=False)
    status = db.Column(
        db.Enum(SubmissionStatus, name="submission_status", native_enum=False),
        nullable=False,
        default=SubmissionStatus.ASSIGNED,
    )
    submitted_at = db.Column(db.DateTime, nullable=True)

    assignment = db.relationship("Assignment", back_populates="student_assignments")
    student = db.relationship("StudentProfile")

    __table_args__ = (
        db.UniqueConstraint("assignment_id", "student_id", name="uq_student_assignment"),
    )
