from enum import Enum

from eduhub.extensions import db
from eduhub.utils import full_name, utcnow


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    PARENT = "PARENT"
    STUDENT = "STUDENT"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.Enum(UserRole, name="user_role", native_enum=False), nullable=False)
    phone = db.Column(db.String(32), nullable=True)
    avatar = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    teacher_profile = db.relationship("TeacherProfile", back_populates="user", uselist=False)
    student_profile = db.relationship("StudentProfile", back_populates="user", uselist=False)
    parent_profile = db.relationship("ParentProfile", back_populates="user", uselist=False)
    admin_profile = db.relationship("AdminProfile", back_populates="user", uselist=False)

    @property
    def full_name(self) -> str:
        return full_name(self.first_name, self.last_name)

    def __repr__(self):
        return f"<User id={self.id} {self.full_name} role={self.role}>"


class TeacherProfile(db.Model):
    __tablename__ = "teacher_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    employee_id = db.Column(db.String(32), unique=True, nullable=True)
    department = db.Column(db.String(100), nullable=True)

    user = db.relationship("User", back_populates="teacher_profile")
    class_links = db.relationship("ClassTeacher", back_populates="teacher", cascade="all, delete-orphan")


class StudentProfile(db.Model):
    __tablename__ = "student_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    student_code = db.Column(db.String(32), unique=True, nullable=True)
    grade_level = db.Column(db.Integer, nullable=False)
    homeroom = db.Column(db.String(32), nullable=True)

    user = db.relationship("User", back_populates="student_profile")
    enrollments = db.relationship("ClassEnrollment", back_populates="student", cascade="all, delete-orphan")
    parent_links = db.relationship("StudentParent", back_populates="student", cascade="all, delete-orphan")

    __table_args__ = (
        db.CheckConstraint("grade_level BETWEEN 0 AND 12", name="ck_student_grade_level"),
    )


class ParentProfile(db.Model):
    __tablename__ = "parent_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)

    user = db.relationship("User", back_populates="parent_profile")
    student_links = db.relationship("StudentParent", back_populates="parent", cascade="all, delete-orphan")


class AdminProfile(db.Model):
    __tablename__ = "admin_profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    title = db.Column(db.String(100), nullable=True)

    user = db.relationship("User", back_populates="admin_profile")


class StudentParent(db.Model):
    __tablename__ = "student_parents"

    student_id = db.Column(db.Integer, db.ForeignKey("student_profiles.id"), primary_key=True)
    parent_id = db.Column(db.Integer, db.ForeignKey("parent_profiles.id"), primary_key=True)
    relationship = db.Column(db.String(50), nullable=True)  # Mother|Father|Guardian|...
    is_primary = db.Column(db.Boolean, nullable=False, default=False)

    student = db.relationship("StudentProfile", back_populates="parent_links")
    parent = db.relationship("ParentProfile", back_populates="student_links")
