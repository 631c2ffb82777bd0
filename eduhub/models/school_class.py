from eduhub.extensions import db
from eduhub.utils import utcnow


class SchoolClass(db.Model):
    __tablename__ = "classes"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    subject = db.Column(db.String(100), nullable=False)
    section = db.Column(db.String(20), nullable=True)
    grade_level = db.Column(db.Integer, nullable=False)
    room = db.Column(db.String(64), nullable=True)
    google_classroom_id = db.Column(db.String(128), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    teacher_links = db.relationship("ClassTeacher", back_populates="school_class", cascade="all, delete-orphan")
    enrollments = db.relationship("ClassEnrollment", back_populates="school_class", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index("ix_class_grade_level", "grade_level"),
    )

    def __repr__(self):
        return f"<SchoolClass id={self.id} {self.name}>"


class ClassTeacher(db.Model):
    __tablename__ = "class_teachers"

    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), primary_key=True)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teacher_profiles.id"), primary_key=True)
    is_primary = db.Column(db.Boolean, nullable=False, default=False)

    school_class = db.relationship("SchoolClass", back_populates="teacher_links")
    teacher = db.relationship("TeacherProfile", back_populates="class_links")


class ClassEnrollment(db.Model):
    __tablename__ = "class_enrollments"

    class_id = db.Column(db.Integer, db.ForeignKey("classes.id"), primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("student_profiles.id"), primary_key=True)
    enrolled_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    school_class = db.relationship("SchoolClass", back_populates="enrollments")
    student = db.relationship("StudentProfile", back_populates="enrollments")

    __table_args__ = (
        db.Index("ix_enrollment_student", "student_id"),
    )
