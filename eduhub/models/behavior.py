from enum import Enum

from eduhub.extensions import db
from eduhub.utils import utcnow


class BehaviorType(str, Enum):
    POSITIVE = "POSITIVE"
    CONCERN = "CONCERN"
    INCIDENT = "INCIDENT"
    NOTE = "NOTE"


class BehaviorNote(db.Model):
    __tablename__ = "behavior_notes"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("student_profiles.id"), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teacher_profiles.id"), nullable=False)
    type = db.Column(db.Enum(BehaviorType, name="behavior_type", native_enum=False), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    date = db.Column(db.DateTime, default=utcnow, nullable=False)

    student = db.relationship("StudentProfile")
    teacher = db.relationship("TeacherProfile")

    __table_args__ = (
        db.Index("ix_behavior_student_date", "student_id", "date"),
    )
