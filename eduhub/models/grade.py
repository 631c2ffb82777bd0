from eduhub.extensions import db
from eduhub.utils import utcnow


class Grade(db.Model):
    __tablename__ = "grades"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("student_profiles.id"), nullable=False)
    assignment_id = db.Column(db.Integer, db.ForeignKey("assignments.id"), nullable=False)
    score = db.Column(db.Float, nullable=False)
    max_points = db.Column(db.Float, nullable=False)
    percentage = db.Column(db.Float, nullable=False)
    graded_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    graded_by_id = db.Column(db.Integer, db.ForeignKey("teacher_profiles.id"), nullable=True)

    student = db.relationship("StudentProfile")
    assignment = db.relationship("Assignment", back_populates="grades")

    __table_args__ = (
        db.UniqueConstraint("student_id", "assignment_id", name="uq_grade_student_assignment"),
        db.CheckConstraint("max_points > 0", name="ck_grade_max_points_positive"),
        db.Index("ix_grade_student", "student_id"),
    )

    def set_score(self, score: float, max_points: float) -> None:
        self.score = score
        self.max_points = max_points
        self.percentage = score / max_points * 100
