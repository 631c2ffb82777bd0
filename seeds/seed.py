"""Demo school: one admin, teacher, student and parent, and a class tying them together.

Run with ``python -m seeds.seed``. Existing rows are reused, so running it twice is safe.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from eduhub.extensions import db
from eduhub.models import (
    AdminProfile,
    ClassEnrollment,
    ClassTeacher,
    ParentProfile,
    SchoolClass,
    StudentParent,
    StudentProfile,
    TeacherProfile,
    User,
    UserRole,
)
from eduhub.security import hash_password

from seeds.utils import get_or_create

log = logging.getLogger(__name__)

DEMO_USERS: Dict[str, Dict[str, Any]] = {
    "admin": {
        "email": "admin@school.com",
        "password": "admin123",
        "first_name": "Admin",
        "last_name": "User",
        "role": UserRole.ADMIN,
    },
    "teacher": {
        "email": "teacher@school.com",
        "password": "teacher123",
        "first_name": "John",
        "last_name": "Teacher",
        "role": UserRole.TEACHER,
    },
    "student": {
        "email": "student@school.com",
        "password": "student123",
        "first_name": "Jane",
        "last_name": "Student",
        "role": UserRole.STUDENT,
    },
    "parent": {
        "email": "parent@school.com",
        "password": "parent123",
        "first_name": "Parent",
        "last_name": "User",
        "role": UserRole.PARENT,
    },
}


def seed_users(session: Session) -> Dict[str, User]:
    users = {}
    for key, fixture in DEMO_USERS.items():
        fixture = dict(fixture)
        password = fixture.pop("password")
        email = fixture.pop("email")
        user, created = get_or_create(
            session,
            User,
            defaults={**fixture, "password_hash": hash_password(password)},
            email=email,
        )
        if created:
            log.info("Created %s user %s (password: %s)", key, user.email, password)
        users[key] = user

    get_or_create(session, AdminProfile, defaults={"title": "School Administrator"}, user_id=users["admin"].id)
    get_or_create(session, TeacherProfile, defaults={"employee_id": "T001", "department": "Mathematics"}, user_id=users["teacher"].id)
    get_or_create(session, StudentProfile, defaults={"student_code": "S001", "grade_level": 6, "homeroom": "6A"}, user_id=users["student"].id)
    get_or_create(session, ParentProfile, user_id=users["parent"].id)
    session.commit()
    return users


def seed_class(session: Session, users: Dict[str, User]) -> SchoolClass:
    teacher = users["teacher"].teacher_profile
    student = users["student"].student_profile
    parent = users["parent"].parent_profile

    get_or_create(
        session,
        StudentParent,
        defaults={"relationship": "Mother", "is_primary": True},
        student_id=student.id,
        parent_id=parent.id,
    )
    school_class, _ = get_or_create(
        session,
        SchoolClass,
        defaults={"subject": "Mathematics", "grade_level": 6, "section": "A", "room": "Room 101"},
        name="Mathematics 6A",
    )
    get_or_create(session, ClassTeacher, defaults={"is_primary": True}, class_id=school_class.id, teacher_id=teacher.id)
    get_or_create(session, ClassEnrollment, class_id=school_class.id, student_id=student.id)
    session.commit()
    return school_class


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    db.create_all()
    session = db.SessionLocal()
    try:
        users = seed_users(session)
        school_class = seed_class(session, users)
        log.info("Class %s ready with teacher and student enrolled", school_class.name)
    finally:
        session.close()

    print("Database seeded. Logins:")
    for fixture in DEMO_USERS.values():
        print(f"  {fixture['role'].value.title():8} {fixture['email']} / {fixture['password']}")


if __name__ == '__main__':
    main()
