from datetime import timedelta
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eduhub.dependencies import get_db, get_mailer
from eduhub.extensions import Base
from eduhub.main import app
from eduhub.models import (
    Assignment,
    AssignmentClass,
    AssignmentType,
    ClassEnrollment,
    ClassTeacher,
    Grade,
    ParentProfile,
    SchoolClass,
    StudentParent,
    StudentProfile,
    TeacherProfile,
    User,
    UserRole,
)
from eduhub.security import hash_password
from eduhub.services.mailer import Mailer
from eduhub.services.sessions import DatabaseSessionStore
from eduhub.utils import utcnow

PASSWORD = "password123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class FakeMailer(Mailer):
    """Records every send; addresses in `failing` are rejected."""

    def __init__(self):
        self.sent = []
        self.failing = set()

    def send(self, to, subject, html, text=None):
        if to in self.failing:
            return False
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return True


class School:
    """Builds users, classes and coursework straight into the test database."""

    def __init__(self, session):
        self.session = session
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def user(self, role: UserRole, email: Optional[str] = None, first_name="Test", last_name=None, password=PASSWORD) -> User:
        n = self._next()
        user = User(
            email=email or f"{role.value.lower()}{n}@school.edu",
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name or f"{role.value.title()}{n:03d}",
            role=role,
        )
        self.session.add(user)
        self.session.commit()
        return user

    def teacher(self, **kwargs) -> TeacherProfile:
        user = self.user(UserRole.TEACHER, **kwargs)
        profile = TeacherProfile(user_id=user.id)
        self.session.add(profile)
        self.session.commit()
        return profile

    def student(self, grade_level: int = 6, **kwargs) -> StudentProfile:
        user = self.user(UserRole.STUDENT, **kwargs)
        profile = StudentProfile(user_id=user.id, student_code=f"S{user.id:03d}", grade_level=grade_level)
        self.session.add(profile)
        self.session.commit()
        return profile

    def parent(self, *children: StudentProfile, relationship="Guardian", **kwargs) -> ParentProfile:
        user = self.user(UserRole.PARENT, **kwargs)
        profile = ParentProfile(user_id=user.id)
        self.session.add(profile)
        self.session.flush()
        for child in children:
            self.session.add(StudentParent(student_id=child.id, parent_id=profile.id, relationship=relationship))
        self.session.commit()
        return profile

    def school_class(self, name: Optional[str] = None, subject="Mathematics", teacher=None, students=()) -> SchoolClass:
        n = self._next()
        school_class = SchoolClass(name=name or f"Class {n}", subject=subject, grade_level=6, section="A")
        self.session.add(school_class)
        self.session.flush()
        if teacher is not None:
            self.session.add(ClassTeacher(class_id=school_class.id, teacher_id=teacher.id, is_primary=True))
        for student in students:
            self.session.add(ClassEnrollment(class_id=school_class.id, student_id=student.id))
        self.session.commit()
        return school_class

    def assignment(self, teacher, classes, points=100, title=None, due_in_days=7) -> Assignment:
        assignment = Assignment(
            teacher_id=teacher.id,
            title=title or f"Assignment {self._next()}",
            type=AssignmentType.HOMEWORK,
            due_date=utcnow() + timedelta(days=due_in_days),
            points=points,
            class_links=[AssignmentClass(class_id=c.id) for c in classes],
        )
        self.session.add(assignment)
        self.session.commit()
        return assignment

    def grade(self, student, assignment, score) -> Grade:
        grade = Grade(student_id=student.id, assignment_id=assignment.id)
        grade.set_score(score, assignment.points)
        self.session.add(grade)
        self.session.commit()
        return grade

    def login(self, user_or_profile) -> dict:
        """Authorization header for a fresh session belonging to the given user."""
        user_id = getattr(user_or_profile, "user_id", None) or user_or_profile.id
        token = DatabaseSessionStore(self.session).create(user_id)
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="session")
def session_fixture():
    Base.metadata.create_all(engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)


@pytest.fixture(name="mailer")
def mailer_fixture():
    return FakeMailer()


@pytest.fixture(name="client")
def client_fixture(session, mailer):
    def get_db_override():
        yield session

    app.dependency_overrides[get_db] = get_db_override
    app.dependency_overrides[get_mailer] = lambda: mailer
    client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="school")
def school_fixture(session):
    return School(session)
